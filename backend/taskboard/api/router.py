"""Root API router for the application."""

from fastapi import APIRouter

from taskboard.api.routes import health, tasks

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tasks.router, tags=["tasks"])
