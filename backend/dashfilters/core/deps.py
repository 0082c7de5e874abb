from fastapi import Header, HTTPException, status

from dashfilters.core.config import settings
from dashfilters.core.rate_limit import build_rate_limit_dependency

MAX_SCOPE_LENGTH = 128

write_rate_limiter = build_rate_limit_dependency(
    'filter_writes',
    settings.write_rate_limit,
    settings.write_rate_window_seconds,
)


def get_scope(x_filter_scope: str | None = Header(default=None)) -> str:
    scope = str(x_filter_scope or '').strip() or settings.default_filter_scope
    if len(scope) > MAX_SCOPE_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                'error_code': 'INVALID_SCOPE',
                'message': 'Scope invalido',
                'details': {'max_length': MAX_SCOPE_LENGTH},
            },
        )
    return scope
