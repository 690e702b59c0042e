import logging
from typing import Optional

from beanie import PydanticObjectId
from fastapi.encoders import jsonable_encoder

from src.core.exceptions import NotFoundError
from src.models.quiz import Choice, Media, Quiz, QuizQuestion
from src.schemas.req.quiz import QuizCreateDTO

logger = logging.getLogger(__name__)


class QuizService:
    async def create_quiz(self, quiz_data: QuizCreateDTO, created_by: Optional[PydanticObjectId] = None):
        """Создание нового квиза из админки"""
        quiz = Quiz(
            title=quiz_data.title,
            description=quiz_data.description,
            is_published=quiz_data.is_published,
            theme_slug=quiz_data.theme_slug,
            difficulty=quiz_data.difficulty,
            created_by=created_by,
            questions=[
                QuizQuestion(
                    text=q.text,
                    explanation=q.explanation,
                    media=Media(**q.media.model_dump(mode="json")) if q.media else None,
                    choices=[
                        Choice(
                            text=c.text,
                            is_correct=c.is_correct,
                            explanation=c.explanation,
                            media=Media(**c.media.model_dump(mode="json")) if c.media else None,
                        )
                        for c in q.choices
                    ],
                )
                for q in quiz_data.questions
            ],
        )
        await quiz.insert()
        logger.info(f"Quiz created: id={quiz.id} questions={quiz.total_questions} by={created_by}")
        return {"quiz": {"id": str(quiz.id)}}

    async def get_all_quizzes(self):
        """Все квизы для админки, новые сверху"""
        quizzes = await Quiz.find_all().sort("-created_at").to_list()
        response = []
        for quiz in quizzes:
            quiz_data = jsonable_encoder(quiz)
            quiz_data["id"] = str(quiz.id)
            response.append(quiz_data)
        return {"quizzes": response}

    async def set_published(self, quiz_id: PydanticObjectId, is_published: bool):
        quiz = await Quiz.get(quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")
        quiz.is_published = is_published
        await quiz.save()
        logger.info(f"Quiz {quiz_id} published={is_published}")
        return {"ok": True, "id": str(quiz.id), "is_published": quiz.is_published}

    async def get_published_quizzes(self, theme_slug: Optional[str] = None):
        """Опубликованные квизы для раздела «Réviser», без правильных ответов"""
        query = {"is_published": True}
        if theme_slug:
            query["theme_slug"] = theme_slug.lower()
        quizzes = await Quiz.find(query).sort("-created_at").to_list()
        return {
            "quizzes": [
                {
                    "id": str(quiz.id),
                    "title": quiz.title,
                    "description": quiz.description,
                    "difficulty": quiz.difficulty,
                    "themeSlug": quiz.theme_slug,
                    "totalQuestions": quiz.total_questions,
                }
                for quiz in quizzes
            ]
        }
