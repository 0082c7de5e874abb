#!/usr/bin/env python3
"""Smoke test contra una API levantada: health, filtros y normalizacion de fechas."""
import json
import os
import urllib.request


def _call(url: str, method: str = 'GET', payload: dict | None = None, scope: str = 'smoke') -> dict:
    data = json.dumps(payload).encode('utf-8') if payload is not None else None
    req = urllib.request.Request(
        url,
        data=data,
        method=method,
        headers={'Content-Type': 'application/json', 'x-filter-scope': scope},
    )
    return json.loads(urllib.request.urlopen(req, timeout=15).read().decode('utf-8'))


def main() -> int:
    base = os.getenv("SMOKE_API_V1_BASE", "http://localhost:8000/api/v1").rstrip("/")

    health = _call(f"{base}/health")
    assert health.get("ok") is True, health
    print("health_ok")

    filters = _call(f"{base}/filters")
    keys = {f["key"] for f in filters.get("filters", [])}
    assert {"selectedMonth", "selectedYear"} <= keys, filters
    assert all(f["value"] is not None for f in filters["filters"]), filters
    print("filters_ok")

    updated = _call(f"{base}/filters/selectedMonth", method="PUT", payload={"value": "3"})
    assert updated.get("value") == "3", updated
    print("filter_write_ok")

    dates = _call(f"{base}/dates/normalize", method="POST", payload={"values": ["2024-06-07", "07/06/2024", None]})
    assert dates.get("values") == ["07-06-2024", "07-06-2024", "N/A"], dates
    print("dates_ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
