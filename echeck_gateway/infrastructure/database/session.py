"""Database session management with connection pooling"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from echeck_gateway.config import settings
from echeck_gateway.infrastructure.database.models import Base


def build_engine(database_url: str) -> Engine:
    """Pooled engine for PostgreSQL; SQLite (local dev) keeps its default pool"""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    # Recycle after 1 hour to avoid stale connections
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


def create_local_schema(target: Engine) -> bool:
    """Create missing tables on SQLite; PostgreSQL schemas are migrated externally"""
    if target.dialect.name != "sqlite":
        return False
    Base.metadata.create_all(bind=target)
    return True


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
