from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import Settings


def build_engine(settings: Settings):
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory SQLite is per-connection, so every session must share one
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, future=True, **kwargs)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=3600,
        future=True
    )


def build_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
