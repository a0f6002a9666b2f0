"""API v1 router: mounts every endpoint module under its prefix."""

from fastapi import APIRouter

from app.api.v1.endpoints import changes, health, notifications, points, rules, workflows

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
api_router.include_router(rules.router, prefix="/rules", tags=["rules"])
api_router.include_router(changes.router, prefix="/changes", tags=["changes"])
api_router.include_router(points.router, prefix="/points", tags=["points"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
