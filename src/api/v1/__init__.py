from fastapi import APIRouter

from src.api.v1.admin import admin_router
from src.api.v1.quiz import quiz_router

api_router = APIRouter(prefix="/api")

api_router.include_router(quiz_router, prefix="/quizzes", tags=["quizzes"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
