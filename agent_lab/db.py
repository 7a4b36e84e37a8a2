from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from agent_lab.config import settings

_engine = None


def engine_options(database_url: str) -> dict:
    """Pool settings for ``database_url``.

    SQLite uses a single-connection pool, so the sizing options only apply
    to server databases.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
    }


def get_engine():
    global _engine
    if _engine is None:
        _engine = create_engine(settings.database_url, **engine_options(settings.database_url))
    return _engine


SessionLocal = sessionmaker(autoflush=False, autocommit=False)


def get_db():
    """Yield a session on the shared engine for one request, then close it.

    The engine is created on first use, so importing the app does not
    connect to the database.
    """
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()
