from fastapi import APIRouter

from app.api.routes import candidates, health, notifications, progress, questions

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(notifications.router, prefix="/notify-sourcing-request", tags=["webhooks"])
api_router.include_router(questions.router, prefix="/questions", tags=["questions"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
api_router.include_router(candidates.router, prefix="/candidates", tags=["candidates"])
