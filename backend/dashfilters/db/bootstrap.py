from __future__ import annotations

import logging

from sqlalchemy import text

import dashfilters.models  # noqa: F401
from dashfilters.db.base import Base
from dashfilters.db.session import engine, session_scope

logger = logging.getLogger(__name__)


def ensure_schema(bind=None) -> None:
    Base.metadata.create_all(bind=bind or engine)


def bootstrap_database() -> None:
    """
    Ensure schema exists and check the connection answers a trivial query.
    """
    ensure_schema()
    try:
        with session_scope() as db:
            db.execute(text('SELECT 1'))
    except Exception:
        logger.exception('DB bootstrap failed')
        raise
    logger.info('DB bootstrap completed (schema ensured)')
