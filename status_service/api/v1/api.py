"""API v1 router composition."""

from fastapi import APIRouter

from status_service.api.v1.endpoints import auth, exceptions, status

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(status.router, prefix="/status", tags=["status"])
api_router.include_router(exceptions.router, prefix="/exceptions", tags=["exceptions"])
