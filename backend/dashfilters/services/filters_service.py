from __future__ import annotations

import logging
from typing import Any

from dashfilters.core.dates import format_date
from dashfilters.core.logging_config import log_filter_change
from dashfilters.services import filter_session
from dashfilters.services.records import format_record_dates

logger = logging.getLogger(__name__)


class FiltersService:
    @staticmethod
    def get_filters(scope: str) -> list[dict[str, Any]]:
        session = filter_session.get_session(scope)
        session.refresh()
        return session.snapshot()

    @staticmethod
    def get_filter(scope: str, key: str) -> dict[str, Any]:
        store = filter_session.get_session(scope).store(key)
        store.refresh()
        return store.snapshot()

    @staticmethod
    def get_values(scope: str) -> dict[str, str | None]:
        return filter_session.get_session(scope).refresh()

    @staticmethod
    def set_filter(scope: str, key: str, value: str, trace_id: str | None = None) -> dict[str, Any]:
        store = filter_session.get_session(scope).store(key)
        stored = store.set_value(value)
        log_filter_change(scope, key, stored, trace_id=trace_id)
        return store.snapshot()

    @staticmethod
    def reset_scope(scope: str) -> int:
        removed = filter_session.reset_scope(scope)
        logger.info('filter scope %s reset (%s stored values removed)', scope, removed)
        return removed

    @staticmethod
    def normalize_dates(values: list) -> list[str]:
        return [format_date(v) for v in values]

    @staticmethod
    def normalize_records(records: list[dict[str, Any]], fields: list[str]) -> list[dict[str, Any]]:
        return [format_record_dates(row, fields) for row in records]
