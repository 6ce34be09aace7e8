"""
Database connection and session management
Engine for the question bank (Supabase Postgres in production, SQLite locally)
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import DATABASE_URL


def make_engine(database_url: str = DATABASE_URL):
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True, pool_size=5, max_overflow=10)


# Created lazily so importing the models never needs a database driver
engine = None

# Base class for declarative models
Base = declarative_base()


def get_engine():
    global engine
    if engine is None:
        engine = make_engine()
    return engine


def make_session_factory(bind=None) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=bind or get_engine())


def init_db(bind=None, drop_existing: bool = False):
    """Create the question bank tables if they don't exist"""
    # models must be imported so their tables are registered on Base
    from store import models  # noqa: F401

    bind = bind or get_engine()
    if drop_existing:
        Base.metadata.drop_all(bind)
    Base.metadata.create_all(bind)
