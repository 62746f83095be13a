# storefront/database.py
from __future__ import annotations

import logging
from typing import Generator

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from storefront.core.settings import settings

logger = logging.getLogger(__name__)

# -----------------------------
# Helpers
# -----------------------------
def _mask_url(url: str) -> str:
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest or ":" not in rest.split("@", 1)[0]:
        return url
    creds, tail = rest.split("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:***@{tail}"

# -----------------------------
# Config din settings
# -----------------------------
DATABASE_URL = (settings.DATABASE_URL or "").strip()
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL este gol. Setează o valoare validă.")

_SQLITE_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}

# -----------------------------
# Naming convention pentru Alembic/op.f()
# -----------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
Base = declarative_base(metadata=metadata)

# -----------------------------
# Engine factory
# -----------------------------
def _build_engine_kwargs(url: str) -> dict:
    kwargs: dict = {"echo": settings.DB_ECHO}

    if url.startswith("sqlite"):
        # SQLite: single-thread în driver → dezactivează check_same_thread
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory → StaticPool (altfel fiecare conexiune are DB separat)
        if url in _SQLITE_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["poolclass"] = NullPool
    else:
        # Postgres / MySQL
        kwargs.update(
            {
                "pool_pre_ping": True,
                "pool_use_lifo": True,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": settings.DB_POOL_RECYCLE,
            }
        )
    return kwargs

engine: Engine = create_engine(DATABASE_URL, **_build_engine_kwargs(DATABASE_URL))

# -----------------------------
# Session factory
# -----------------------------
# expire_on_commit=False → obiectele rămân utilizabile după commit (evită re-load imediat)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency pentru o sesiune SQLAlchemy închisă garantat.
    Face rollback automat dacă apare o excepție în request handler.
    """
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def init_db_if_requested() -> None:
    """
    Creează tabelele din modele când SQLALCHEMY_CREATE_ALL=1 (implicit).
    În producție folosește Alembic și setează SQLALCHEMY_CREATE_ALL=0.
    """
    if settings.SQLALCHEMY_CREATE_ALL:
        from storefront import models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("Tables ensured via create_all on %s", _mask_url(DATABASE_URL))

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_db",
    "init_db_if_requested",
]
