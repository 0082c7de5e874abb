from fastapi import APIRouter, Depends, HTTPException, Request

from dashfilters.core.deps import get_scope, write_rate_limiter
from dashfilters.schemas.common import ErrorBody
from dashfilters.schemas.filters import FilterResetOut, FiltersOut, FilterStateOut, FilterValueIn
from dashfilters.services.filter_store import (
    FilterNotReadyError,
    FilterStoreError,
    InvalidFilterValueError,
    UnknownFilterError,
)
from dashfilters.services.filters_service import FiltersService

router = APIRouter()

_ERROR_STATUS = {
    UnknownFilterError: 404,
    FilterNotReadyError: 409,
    InvalidFilterValueError: 422,
}

_ERROR_MESSAGES = {
    UnknownFilterError: 'Filtro desconocido',
    FilterNotReadyError: 'Filtro no inicializado',
    InvalidFilterValueError: 'Valor de filtro invalido',
}


def _to_http(exc: FilterStoreError, key: str) -> HTTPException:
    return HTTPException(
        status_code=_ERROR_STATUS.get(type(exc), 400),
        detail={
            'error_code': exc.error_code,
            'message': _ERROR_MESSAGES.get(type(exc), 'Error de filtro'),
            'details': {'key': key, 'reason': str(exc)},
        },
    )


@router.get('', response_model=FiltersOut)
def list_filters(scope: str = Depends(get_scope)):
    return FiltersOut(scope=scope, filters=FiltersService.get_filters(scope))


@router.delete('', response_model=FilterResetOut)
def reset_filters(
    _rl=Depends(write_rate_limiter),
    scope: str = Depends(get_scope),
):
    removed = FiltersService.reset_scope(scope)
    return FilterResetOut(scope=scope, removed=removed)


@router.get('/{key}', response_model=FilterStateOut, responses={404: {'model': ErrorBody}})
def get_filter(key: str, scope: str = Depends(get_scope)):
    try:
        return FilterStateOut(**FiltersService.get_filter(scope, key))
    except FilterStoreError as exc:
        raise _to_http(exc, key)


@router.put(
    '/{key}',
    response_model=FilterStateOut,
    responses={404: {'model': ErrorBody}, 409: {'model': ErrorBody}, 422: {'model': ErrorBody}},
)
def set_filter(
    key: str,
    payload: FilterValueIn,
    request: Request,
    _rl=Depends(write_rate_limiter),
    scope: str = Depends(get_scope),
):
    trace_id = getattr(request.state, 'trace_id', None)
    try:
        return FilterStateOut(**FiltersService.set_filter(scope, key, payload.value, trace_id=trace_id))
    except FilterStoreError as exc:
        raise _to_http(exc, key)
