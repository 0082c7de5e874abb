from fastapi import APIRouter

from dashfilters.schemas.dates import NormalizeDatesIn, NormalizeDatesOut, NormalizeRecordsIn, NormalizeRecordsOut
from dashfilters.services.filters_service import FiltersService

router = APIRouter()


@router.post('/normalize', response_model=NormalizeDatesOut)
def normalize_dates(payload: NormalizeDatesIn):
    return NormalizeDatesOut(values=FiltersService.normalize_dates(payload.values))


@router.post('/normalize-records', response_model=NormalizeRecordsOut)
def normalize_records(payload: NormalizeRecordsIn):
    return NormalizeRecordsOut(records=FiltersService.normalize_records(payload.records, payload.fields))
