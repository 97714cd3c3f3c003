from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from waterwatch.core.config import Settings
from waterwatch.core.security import create_access_token, hash_password
from waterwatch.main import create_app
from waterwatch.models.sensor import Sensor
from waterwatch.models.user import User


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DB_URI=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        SEED_DEMO_DATA=False,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_factory(app, client):
    # depends on client so the lifespan has created the tables
    return app.state.session_factory


def _add_user_with_sensor(session_factory, email: str, api_key: str) -> tuple[int, int]:
    db = session_factory()
    try:
        user = User(email=email, hashed_password=hash_password("secret"))
        db.add(user)
        db.flush()
        sensor = Sensor(user_id=user.id, name=f"sensor-{api_key}", api_key=api_key)
        db.add(sensor)
        db.commit()
        return user.id, sensor.id
    finally:
        db.close()


@pytest.fixture
def owner(session_factory) -> dict:
    user_id, sensor_id = _add_user_with_sensor(session_factory, "owner@example.com", "sensor-key-1")
    return {"user_id": user_id, "sensor_id": sensor_id, "api_key": "sensor-key-1"}


@pytest.fixture
def other_owner(session_factory) -> dict:
    user_id, sensor_id = _add_user_with_sensor(session_factory, "other@example.com", "sensor-key-2")
    return {"user_id": user_id, "sensor_id": sensor_id, "api_key": "sensor-key-2"}


@pytest.fixture
def auth_headers(owner, settings) -> dict:
    token = create_access_token(sub=str(owner["user_id"]), settings=settings)
    return {"Authorization": f"Bearer {token}"}
