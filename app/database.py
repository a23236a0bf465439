"""
Database connection and session.

Schema source of truth: app.models. On startup, Base.metadata.create_all(bind=engine)
creates all tables from the current models. The PostgreSQL exclusion constraint on
active booking ranges is optional and installed by scripts/add_booking_exclusion_constraint.py.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import Settings, get_settings

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    kwargs = {"pool_pre_ping": True}
    if settings.database_url.startswith("sqlite"):
        # Sessions are handed between request threads
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(settings.database_url, **kwargs)


engine = build_engine(get_settings())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
