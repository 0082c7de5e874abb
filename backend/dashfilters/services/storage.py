"""
Storage providers for persisted filter values.

A provider is a plain string key/value store. Either call may raise; callers
(the filter store) decide how to degrade.
"""
from __future__ import annotations

from typing import Callable, Protocol

from sqlalchemy.orm import Session

from dashfilters.db.session import SessionLocal, session_scope
from dashfilters.repositories import preferences


class StorageProvider(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)

    def clear(self) -> int:
        removed = len(self._data)
        self._data.clear()
        return removed


class DatabaseStorage:
    """Values stored in ``filter_preferences``, one row per (scope, key)."""

    def __init__(self, scope: str, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self.scope = scope
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        with session_scope(self._session_factory) as db:
            return preferences.get_preference(db, self.scope, key)

    def set(self, key: str, value: str) -> None:
        with session_scope(self._session_factory) as db:
            preferences.save_preference(db, self.scope, key, value)

    def clear(self) -> int:
        with session_scope(self._session_factory) as db:
            return preferences.delete_preferences(db, self.scope)
