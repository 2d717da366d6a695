"""
Database engine, session factory and declarative base
"""
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from order_inventory.config import settings

Base = declarative_base()


def build_engine(database_url: str, timeout_seconds: float = settings.TRANSACTION_TIMEOUT_SECONDS) -> Engine:
    """
    Create an engine whose lock/statement timeout matches the transaction timeout
    
    Args:
        database_url: SQLAlchemy database URL
        timeout_seconds: Upper bound for a blocked statement
    
    Returns:
        Configured engine
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
    elif database_url.startswith("postgresql"):
        connect_args = {"options": f"-c statement_timeout={int(timeout_seconds * 1000)}"}
    else:
        connect_args = {}
    
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session per request and always close it"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables"""
    # Import models so they register on Base.metadata
    from order_inventory import models  # noqa: F401
    
    Base.metadata.create_all(bind=engine)
