from fastapi import APIRouter

from shopfloor.api.routes import activities, health, team

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(activities.router)
api_router.include_router(team.router)
