import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from .core.config import Settings, get_settings
from .core.logging_config import configure_logging
from .core.security import hash_password
from .db.session import build_engine, build_session_factory, init_db
from .api import auth, readings, alerts
from .api.errors import validation_exception_handler
from .models.sensor import Sensor
from .models.user import User
from .services.alerts import AlertService
from .services.readings import ReadingService

logger = logging.getLogger(__name__)


def seed_demo_data(session_factory: sessionmaker, settings: Settings) -> None:
    db = session_factory()
    try:
        user = db.query(User).filter(User.email == settings.DEMO_USER_EMAIL).first()
        if user is None:
            user = User(email=settings.DEMO_USER_EMAIL, hashed_password=hash_password(settings.DEMO_USER_PASSWORD))
            db.add(user)
            db.flush()
        if not db.query(Sensor).filter(Sensor.api_key == settings.DEMO_SENSOR_API_KEY).first():
            db.add(Sensor(user_id=user.id, name="Demo Sensor", api_key=settings.DEMO_SENSOR_API_KEY))
            logger.info("Seeded demo sensor", extra={"user_id": user.id})
        db.commit()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db(app.state.engine)
    if app.state.settings.SEED_DEMO_DATA:
        seed_demo_data(app.state.session_factory, app.state.settings)
    try:
        yield
    finally:
        app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Water Quality Monitoring API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_credentials=True, allow_methods=["*"], allow_headers=["*"],
    )

    engine = build_engine(settings.DB_URI)
    session_factory = build_session_factory(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.reading_service = ReadingService(session_factory)
    app.state.alert_service = AlertService(session_factory)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth.router)
    app.include_router(readings.router)
    app.include_router(alerts.router)

    @app.get("/health")
    def health(): return {"status": "API running"}

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
