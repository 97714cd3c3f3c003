from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

class Base(DeclarativeBase): pass

def build_engine(db_uri: str) -> Engine:
    return create_engine(db_uri, connect_args={"check_same_thread": False} if db_uri.startswith("sqlite") else {})

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def init_db(engine: Engine):
    from ..models import user, sensor, reading, alert  # noqa
    Base.metadata.create_all(bind=engine)
