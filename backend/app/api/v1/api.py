"""
Main API router aggregator
"""
from fastapi import APIRouter, Depends

from app.api.v1.deps import get_current_user
from app.api.v1.endpoints import (
    activities,
    auth,
    cases,
    surveys,
)

api_router = APIRouter()

# Everything except /auth needs a signed-in staff member
protected = [Depends(get_current_user)]

# Include routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(cases.router, prefix="/cases", tags=["Cases"], dependencies=protected)
api_router.include_router(surveys.router, prefix="/surveys", tags=["Surveys"], dependencies=protected)
api_router.include_router(activities.router, prefix="/activities", tags=["Activities"], dependencies=protected)
