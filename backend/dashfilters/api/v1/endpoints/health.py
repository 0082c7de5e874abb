from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from dashfilters.core.config import settings
from dashfilters.db.session import session_scope

router = APIRouter()


@router.get('/health')
def health():
    """
    Health check. Returns 200 with db_ok true when the preferences DB is reachable.
    Returns 503 when it is not: filters would still answer, but only with defaults.
    """
    try:
        with session_scope() as db:
            db.execute(text('SELECT 1'))
        db_ok = True
    except Exception:
        db_ok = False
    if not db_ok:
        return JSONResponse(
            status_code=503,
            content={
                'ok': False,
                'service': settings.app_name,
                'db_ok': False,
                'message': 'Database unreachable',
            },
        )
    return {
        'ok': True,
        'service': settings.app_name,
        'db_ok': True,
    }
