from __future__ import annotations

import threading
import time
from collections import defaultdict, deque

from fastapi import HTTPException, Request, status


class SlidingWindowLimiter:
    """Counts events per key inside a moving time window."""

    def __init__(self) -> None:
        self._events: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def allow(self, key: str, limit: int, window_seconds: int) -> bool:
        now = time.monotonic()
        cutoff = now - max(1, window_seconds)
        with self._lock:
            events = self._events[key]
            while events and events[0] < cutoff:
                events.popleft()
            if len(events) >= max(1, limit):
                return False
            events.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._events.clear()


limiter = SlidingWindowLimiter()


def build_rate_limit_dependency(prefix: str, limit: int, window_seconds: int):
    async def _dependency(request: Request):
        client_ip = request.client.host if request.client else 'unknown'
        scope = request.headers.get('x-filter-scope', '')
        if limiter.allow(f'{prefix}:{client_ip}:{scope}', limit, window_seconds):
            return
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                'error_code': 'RATE_LIMITED',
                'message': 'Demasiadas solicitudes',
                'details': {'limit': int(limit), 'window_seconds': int(window_seconds), 'scope': prefix},
            },
        )

    return _dependency
