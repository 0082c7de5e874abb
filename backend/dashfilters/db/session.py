"""
Engine and session factory for the filter preferences database.

Every storage call opens its own short session through ``session_scope`` so a
failed write never leaves a half-open transaction behind for the next request.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dashfilters.core.config import settings


def make_engine(database_url: str) -> Engine:
    if database_url.startswith('sqlite'):
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            connect_args={'check_same_thread': False, 'timeout': 30},
        )

        # PUTs for one scope may land on several worker threads at once
        @event.listens_for(engine, 'connect')
        def _busy_timeout(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA busy_timeout=30000;')
            cursor.close()

        return engine
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=max(1, int(settings.db_pool_size or 10)),
        max_overflow=max(0, int(settings.db_max_overflow or 20)),
    )


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(factory: Callable[[], Session] = SessionLocal) -> Iterator[Session]:
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
