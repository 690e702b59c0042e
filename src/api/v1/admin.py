from beanie import PydanticObjectId
from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_admin
from src.helpers.object_id import parse_object_id
from src.schemas.req.quiz import QuizCreateDTO, QuizPublishDTO
from src.services.quiz import QuizService

admin_router = APIRouter()


@admin_router.get("/quizzes")
async def get_all_quizzes(
    token: dict = Depends(get_current_admin),
    quiz_service: QuizService = Depends(QuizService),
):
    """Все квизы, включая неопубликованные"""
    return await quiz_service.get_all_quizzes()


@admin_router.post("/quizzes", status_code=201)
async def create_quiz(
    quiz_data: QuizCreateDTO,
    token: dict = Depends(get_current_admin),
    quiz_service: QuizService = Depends(QuizService),
):
    """Создать новый квиз"""
    return await quiz_service.create_quiz(quiz_data, PydanticObjectId(token.get("sub")))


@admin_router.patch("/quizzes/{quiz_id}/publish")
async def set_published(
    quiz_id: str,
    req: QuizPublishDTO,
    token: dict = Depends(get_current_admin),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.set_published(parse_object_id(quiz_id, "Invalid quiz id"), req.is_published)
