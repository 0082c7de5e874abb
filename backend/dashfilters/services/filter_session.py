"""
One FilterSession per scope holds the shared store instances for that scope.
The registry keeps sessions in process memory so every request for the same
scope sees the same stores, hydrated once. Readers call ``refresh`` so values
written by another process sharing the database are picked up.
"""
from __future__ import annotations

import logging
from datetime import date
from threading import Lock
from typing import Any, Callable, Iterable

from dashfilters.services.filter_definitions import FilterDefinition, default_definitions
from dashfilters.services.filter_store import FilterStore, UnknownFilterError
from dashfilters.services.storage import DatabaseStorage, StorageProvider

logger = logging.getLogger(__name__)


class FilterSession:
    def __init__(
        self,
        storage: StorageProvider,
        definitions: Iterable[FilterDefinition] | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.storage = storage
        self._stores: dict[str, FilterStore] = {}
        for definition in definitions if definitions is not None else default_definitions():
            self._stores[definition.key] = FilterStore(definition, storage, clock=clock)

    @property
    def keys(self) -> list[str]:
        return list(self._stores.keys())

    def hydrate(self) -> dict[str, str | None]:
        return {key: store.hydrate() for key, store in self._stores.items()}

    def store(self, key: str) -> FilterStore:
        store = self._stores.get(key)
        if store is None:
            raise UnknownFilterError(f'unknown filter {key!r}')
        return store

    def refresh(self) -> dict[str, str | None]:
        return {key: store.refresh() for key, store in self._stores.items()}

    def close(self) -> None:
        for store in self._stores.values():
            store.close()

    def values(self) -> dict[str, str | None]:
        return {key: store.current_value() for key, store in self._stores.items()}

    def snapshot(self) -> list[dict[str, Any]]:
        return [store.snapshot() for store in self._stores.values()]


_sessions: dict[str, FilterSession] = {}
_scope_locks: dict[str, Lock] = {}
# guards the two dicts above; never held across storage calls
_lock = Lock()


def _scope_lock(scope: str) -> Lock:
    with _lock:
        lock = _scope_locks.get(scope)
        if lock is None:
            lock = _scope_locks[scope] = Lock()
        return lock


def get_session(scope: str, storage_factory: Callable[[str], StorageProvider] = DatabaseStorage) -> FilterSession:
    with _lock:
        session = _sessions.get(scope)
    if session is not None:
        return session
    with _scope_lock(scope):
        with _lock:
            session = _sessions.get(scope)
        if session is None:
            session = FilterSession(storage_factory(scope))
            session.hydrate()
            with _lock:
                _sessions[scope] = session
            logger.info('filter session created for scope %s: %s', scope, session.values())
        return session


def drop_session(scope: str) -> bool:
    with _scope_lock(scope):
        with _lock:
            session = _sessions.pop(scope, None)
        if session is None:
            return False
        session.close()
        return True


def reset_scope(scope: str, storage_factory: Callable[[str], Any] = DatabaseStorage) -> int:
    """
    Forget the scope's session and delete its stored values.

    The session is closed before storage is cleared: a write already in flight
    finishes first and is then removed, a later one is rejected as not ready.
    """
    with _scope_lock(scope):
        with _lock:
            session = _sessions.pop(scope, None)
        if session is not None:
            session.close()
        return storage_factory(scope).clear()


def reset_sessions() -> int:
    with _lock:
        sessions = list(_sessions.values())
        _sessions.clear()
        _scope_locks.clear()
    for session in sessions:
        session.close()
    return len(sessions)
