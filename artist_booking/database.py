import logging
import os
import time

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

# Connection pool (ignored for SQLite)
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "20"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))

# Statements slower than this many seconds are logged at WARNING
SLOW_QUERY_SECONDS = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "0.5"))
LOG_SLOW_QUERIES = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # The TestClient and uvicorn's threadpool share connections across threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_recycle": DB_POOL_RECYCLE,
    }


try:
    engine = create_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))
    logger.info(f"Database engine created ({engine.url.get_backend_name()})")
except Exception as e:
    logger.error(f"Could not create database engine for {DATABASE_URL.split('@')[-1]}: {e}")
    raise


def _start_timer(conn, _cursor, _statement, _parameters, _context, _executemany):
    conn.info.setdefault("booking_query_started", []).append(time.perf_counter())


def _report_slow_query(conn, _cursor, statement, _parameters, _context, _executemany):
    elapsed = time.perf_counter() - conn.info["booking_query_started"].pop()
    if elapsed > SLOW_QUERY_SECONDS:
        logger.warning(f"Slow query took {elapsed:.3f}s: {' '.join(statement.split())[:200]}")


if LOG_SLOW_QUERIES:
    event.listen(engine, "before_cursor_execute", _start_timer)
    event.listen(engine, "after_cursor_execute", _report_slow_query)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db():
    """Request-scoped session; services commit or roll back explicitly"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
