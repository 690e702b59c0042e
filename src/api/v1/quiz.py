from typing import Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_user
from src.helpers.object_id import parse_object_id
from src.schemas.req.quiz import AnswerDTO
from src.services.quiz import QuizService
from src.services.quiz_progress import QuizProgressService

quiz_router = APIRouter()


@quiz_router.get("")
async def get_published_quizzes(theme: Optional[str] = None, quiz_service: QuizService = Depends(QuizService)):
    """Список опубликованных квизов"""
    return await quiz_service.get_published_quizzes(theme)


@quiz_router.post("/{quiz_id}/start")
async def start_quiz(
    quiz_id: str,
    token: dict = Depends(get_current_user),
    service: QuizProgressService = Depends(QuizProgressService),
):
    """Начать или продолжить попытку"""
    return await service.start(PydanticObjectId(token.get("sub")), parse_object_id(quiz_id, "Invalid quiz id"))


@quiz_router.post("/{quiz_id}/answer")
async def answer_question(
    quiz_id: str,
    answer: AnswerDTO,
    token: dict = Depends(get_current_user),
    service: QuizProgressService = Depends(QuizProgressService),
):
    """Ответить на текущий вопрос"""
    return await service.answer(
        PydanticObjectId(token.get("sub")),
        parse_object_id(quiz_id, "Invalid quiz id"),
        answer.choice_index,
    )


@quiz_router.get("/{quiz_id}/progress")
async def get_progress(
    quiz_id: str,
    token: dict = Depends(get_current_user),
    service: QuizProgressService = Depends(QuizProgressService),
):
    return await service.get_progress(PydanticObjectId(token.get("sub")), parse_object_id(quiz_id, "Invalid quiz id"))


@quiz_router.post("/{quiz_id}/reset")
async def reset_quiz(
    quiz_id: str,
    token: dict = Depends(get_current_user),
    service: QuizProgressService = Depends(QuizProgressService),
):
    """Сбросить попытку и начать заново"""
    return await service.reset(PydanticObjectId(token.get("sub")), parse_object_id(quiz_id, "Invalid quiz id"))
