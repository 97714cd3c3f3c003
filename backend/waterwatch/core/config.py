from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DB_URI: str = "sqlite:///./water.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    # Demo provisioning: sensors are otherwise created out-of-band
    SEED_DEMO_DATA: bool = True
    DEMO_USER_EMAIL: str = "operator@example.com"
    DEMO_USER_PASSWORD: str = "operator123"
    DEMO_SENSOR_API_KEY: str = "demo-sensor-key"

    model_config = SettingsConfigDict(
        env_file=[
            Path(__file__).resolve().parents[2] / ".env",
            Path(".env"),
        ],
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    return Settings()
