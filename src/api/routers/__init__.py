"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from src.api.routers.cv import router as cv_router
from src.api.routers.health import router as health_router

api_router = APIRouter()

api_router.include_router(cv_router, tags=["cv"])
api_router.include_router(health_router, tags=["health"])
