from fastapi import APIRouter
from .auth import router as auth_router
from .users import router as users_router
from .admin import router as admin_router
from .relationships import router as relationships_router
from .events import router as events_router
from .calendar import router as calendar_router
from .availability import router as availability_router
from .travel_locations import router as travel_locations_router
from .feature_wishes import router as feature_wishes_router
from .imports import router as imports_router

router = APIRouter()
router.include_router(auth_router, prefix='/auth', tags=['auth'])
router.include_router(users_router, prefix='/users', tags=['users'])
router.include_router(admin_router, prefix='/admin', tags=['admin'])
router.include_router(relationships_router, prefix='/relationships', tags=['relationships'])
router.include_router(events_router, prefix='/events', tags=['events'])
router.include_router(calendar_router, prefix='/calendar', tags=['calendar'])
router.include_router(availability_router, prefix='/availability', tags=['availability'])
router.include_router(travel_locations_router, prefix='/travel-locations', tags=['travel-locations'])
router.include_router(feature_wishes_router, prefix='/feature-wishes', tags=['feature-wishes'])
router.include_router(imports_router, prefix='/import', tags=['import'])
