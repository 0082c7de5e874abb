from fastapi import APIRouter

from dashfilters.api.v1.endpoints import dates, filters, health

router = APIRouter(prefix='/api/v1')
router.include_router(health.router, tags=['health'])
router.include_router(filters.router, prefix='/filters', tags=['filters'])
router.include_router(dates.router, prefix='/dates', tags=['dates'])
