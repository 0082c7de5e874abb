"""
Persisted single-value filter.

A store starts ``uninitialized`` (no value, storage not consulted yet), goes
through ``hydrating`` exactly once when its scope can reach storage, and stays
``ready`` afterwards. While not ready the value is None and consumers must
not render a selection, so the first value they ever show is the one that
came from storage (or the computed default).

Storage is a best-effort mirror: read failures fall back to the default,
write failures are logged and the in-memory value stays authoritative.
Memory updates and the matching storage write happen under one lock, so
concurrent writers leave storage holding the same value as memory.
"""
from __future__ import annotations

import enum
import logging
import threading
from datetime import date
from typing import Any, Callable

from dashfilters.services.filter_definitions import FilterDefinition, FilterOption
from dashfilters.services.storage import StorageProvider

logger = logging.getLogger(__name__)

Listener = Callable[[str, str], None]


class FilterState(str, enum.Enum):
    UNINITIALIZED = 'uninitialized'
    HYDRATING = 'hydrating'
    READY = 'ready'


class FilterStoreError(Exception):
    error_code = 'FILTER_ERROR'


class FilterNotReadyError(FilterStoreError):
    error_code = 'FILTER_NOT_READY'


class InvalidFilterValueError(FilterStoreError, ValueError):
    error_code = 'INVALID_FILTER_VALUE'


class UnknownFilterError(FilterStoreError):
    error_code = 'UNKNOWN_FILTER'


class FilterStore:
    def __init__(
        self,
        definition: FilterDefinition,
        storage: StorageProvider,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.definition = definition
        self._storage = storage
        self._clock = clock
        self._state = FilterState.UNINITIALIZED
        self._value: str | None = None
        self._options: tuple[FilterOption, ...] = tuple(definition.build_options(clock()))
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def options(self) -> tuple[FilterOption, ...]:
        return self._options

    @property
    def value(self) -> str | None:
        return self.current_value()

    def current_value(self) -> str | None:
        if self._state is not FilterState.READY:
            return None
        return self._value

    def is_valid(self, value: str) -> bool:
        return any(opt.value == value for opt in self._options)

    def _read_stored(self) -> str | None:
        try:
            stored = self._storage.get(self.key)
        except Exception:
            logger.warning('failed to read filter %s from storage, using default', self.key, exc_info=True)
            return None
        if stored is None or stored == '':
            return None
        stored = str(stored)
        if not self.is_valid(stored):
            logger.warning('stored value %r for filter %s is not a valid option, using default', stored, self.key)
            return None
        return stored

    def _write(self, value: str) -> None:
        try:
            self._storage.set(self.key, value)
        except Exception:
            logger.warning('failed to write filter %s=%s to storage', self.key, value, exc_info=True)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.key, self._value)
            except Exception:
                logger.exception('filter listener failed for %s', self.key)

    def hydrate(self) -> str | None:
        """Load the value from storage (or the default) and persist it back. Runs once."""
        with self._lock:
            if self._state is not FilterState.UNINITIALIZED:
                logger.debug('filter %s already hydrated (state=%s)', self.key, self._state.value)
                return self._value
            self._state = FilterState.HYDRATING
            stored = self._read_stored()
            value = stored if stored is not None else self._default()
            self._value = value
            self._write(value)
            self._state = FilterState.READY
            logger.debug('filter %s hydrated with %s (%s)', self.key, value, 'stored' if stored is not None else 'default')
            self._notify()
            return value

    def _default(self) -> str:
        value = self.definition.default_value(self._clock())
        if self.is_valid(value) or not self._options:
            return value
        logger.warning('default %r for filter %s is not a valid option, using %r', value, self.key, self._options[0].value)
        return self._options[0].value

    def refresh(self) -> str | None:
        """
        Re-read storage and adopt a valid stored value written elsewhere.

        Absent, invalid or unreadable stored values leave memory unchanged.
        """
        with self._lock:
            if self._state is not FilterState.READY:
                return None
            stored = self._read_stored()
            if stored is not None and stored != self._value:
                logger.debug('filter %s changed in storage: %s -> %s', self.key, self._value, stored)
                self._value = stored
                self._notify()
            return self._value

    def set_value(self, value: str) -> str:
        value = str(value)
        with self._lock:
            if self._state is not FilterState.READY:
                raise FilterNotReadyError(f'filter {self.key} is not hydrated yet')
            if not self.is_valid(value):
                raise InvalidFilterValueError(f'{value!r} is not a valid value for filter {self.key}')
            self._value = value
            self._write(value)
            self._notify()
            return value

    def close(self) -> None:
        """Detach from storage. Later ``set_value`` calls raise FilterNotReadyError."""
        with self._lock:
            self._state = FilterState.UNINITIALIZED
            self._value = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def snapshot(self) -> dict[str, Any]:
        return {
            'key': self.key,
            'state': self._state.value,
            'value': self.current_value(),
            'placeholder': self.definition.placeholder,
            'options': [{'value': opt.value, 'label': opt.label} for opt in self._options],
        }
