#!/usr/bin/env python3
"""Levanta la API de filtros con uvicorn en APP_PORT."""
import sys
from pathlib import Path

import uvicorn

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'backend'))

from dashfilters.core.config import settings  # noqa: E402


def main() -> int:
    uvicorn.run('dashfilters.main:app', host='0.0.0.0', port=int(settings.app_port), reload=settings.app_env == 'dev')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
