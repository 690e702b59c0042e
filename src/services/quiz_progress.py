import logging
from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Inc, Set
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.helpers.scoring import remaining_lives, score_summary
from src.models.quiz import Quiz
from src.models.quiz_progress import QuizProgress, RecordedAnswer
from src.models.user import User
from src.schemas.res.question import QuestionResponse

logger = logging.getLogger(__name__)


def apply_answer(
    progress: QuizProgress,
    choice_index: int,
    is_correct: bool,
    total_questions: int,
    now: datetime,
) -> dict:
    """Новое состояние попытки после ответа на текущий вопрос.

    Жизнь списывается до проверки конца квиза, поэтому потеря последней
    жизни на последнем вопросе даёт провал, а не завершение.
    """
    answers = list(progress.answers)
    answers.append(
        RecordedAnswer(
            question_index=progress.current_question_index,
            choice_index=choice_index,
            is_correct=is_correct,
            answered_at=now,
        )
    )
    lives = remaining_lives(progress.lives, is_correct)
    next_index = progress.current_question_index + 1

    is_failed = lives == 0
    is_completed = not is_failed and next_index == total_questions

    return {
        "lives": lives,
        "current_question_index": next_index,
        "answers": answers,
        "is_completed": is_completed,
        "is_failed": is_failed,
        "last_activity_at": now,
        "completed_at": now if is_completed else None,
    }


def is_choice_index(value) -> bool:
    # bool - подкласс int, true не должен превращаться в вариант 1
    return isinstance(value, int) and not isinstance(value, bool)


def progress_payload(progress: QuizProgress, quiz: Quiz) -> dict:
    return {
        "lives": progress.lives,
        "currentQuestionIndex": progress.current_question_index,
        "totalQuestions": quiz.total_questions,
        "isCompleted": progress.is_completed,
        "isFailed": progress.is_failed,
        "startedAt": progress.started_at,
        "lastActivityAt": progress.last_activity_at,
        "completedAt": progress.completed_at,
    }


class QuizProgressService:

    async def _get_published_quiz(self, quiz_id: PydanticObjectId) -> Quiz:
        quiz = await Quiz.get(quiz_id)
        if not quiz or not quiz.is_published:
            raise NotFoundError("Quiz not found")
        return quiz

    async def _find_progress(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId) -> Optional[QuizProgress]:
        return await QuizProgress.find_one(
            QuizProgress.user_id == user_id,
            QuizProgress.quiz_id == quiz_id,
        )

    def _current_question(self, quiz: Quiz, progress: QuizProgress) -> dict:
        question = quiz.question_at(progress.current_question_index)
        if question is None:
            raise NotFoundError("Question not found")
        return QuestionResponse.from_question(progress.current_question_index, question).model_dump()

    async def _compare_and_swap(self, progress: QuizProgress, changes: dict, *conditions) -> Optional[QuizProgress]:
        """Атомарно применяет изменения, только если запись не менялась с момента чтения"""
        update = dict(changes)
        if "answers" in update:
            update["answers"] = [answer.model_dump() for answer in update["answers"]]
        update["version"] = progress.version + 1

        return await QuizProgress.find_one(
            QuizProgress.id == progress.id,
            QuizProgress.version == progress.version,
            *conditions,
        ).update(Set(update), response_type=UpdateResponse.NEW_DOCUMENT)

    async def _create_progress(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId) -> QuizProgress:
        progress = QuizProgress(
            user_id=user_id,
            quiz_id=quiz_id,
            version=0,
            **QuizProgress.fresh_state(datetime.utcnow()),
        )
        try:
            await progress.insert()
        except DuplicateKeyError:
            # Параллельный старт уже создал запись, берём её
            logger.info(f"Progress for user={user_id} quiz={quiz_id} created concurrently, reusing it")
            existing = await self._find_progress(user_id, quiz_id)
            if existing is None:
                raise
            return existing

        logger.info(f"Attempt started: user={user_id} quiz={quiz_id}")
        return progress

    async def _reinitialize(self, progress: QuizProgress) -> Optional[QuizProgress]:
        updated = await self._compare_and_swap(progress, QuizProgress.fresh_state(datetime.utcnow()))
        if updated is not None:
            logger.info(f"Attempt reset: user={progress.user_id} quiz={progress.quiz_id}")
        return updated

    async def _award_points(self, user_id: PydanticObjectId, points: int):
        if points <= 0:
            return
        try:
            await User.find_one(User.id == user_id).update(Inc({User.points: points}))
        except PyMongoError:
            # Попытка уже сохранена, очки начисляются по возможности
            logger.exception(f"Failed to award {points} points to user={user_id}")

    async def start(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId):
        """Начинает попытку или продолжает активную; завершённую запускает заново"""
        quiz = await self._get_published_quiz(quiz_id)

        progress = await self._find_progress(user_id, quiz_id)
        if progress is None:
            progress = await self._create_progress(user_id, quiz_id)
        elif progress.is_terminal:
            updated = await self._reinitialize(progress)
            if updated is None:
                # Кто-то успел раньше: продолжаем, если попытка уже снова активна
                updated = await self._find_progress(user_id, quiz_id)
                if updated is None or updated.is_terminal:
                    raise ConflictError("stale state")
            progress = updated

        return {
            "progress": progress_payload(progress, quiz),
            "question": self._current_question(quiz, progress),
        }

    async def answer(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId, choice_index):
        """Проверяет ответ на текущий вопрос, списывает жизнь и двигает попытку дальше"""
        quiz = await self._get_published_quiz(quiz_id)

        progress = await self._find_progress(user_id, quiz_id)
        if progress is None:
            raise ConflictError("no active attempt")
        if progress.is_terminal:
            raise ConflictError("attempt already finished")

        question = quiz.question_at(progress.current_question_index)
        if question is None:
            raise NotFoundError("Question not found")
        if not is_choice_index(choice_index) or not 0 <= choice_index < len(question.choices):
            raise ValidationError("invalid choice")

        choice = question.choices[choice_index]
        changes = apply_answer(
            progress,
            choice_index,
            choice.is_correct,
            quiz.total_questions,
            datetime.utcnow(),
        )

        updated = await self._compare_and_swap(
            progress,
            changes,
            QuizProgress.current_question_index == progress.current_question_index,
            QuizProgress.is_completed == False,  # noqa: E712
            QuizProgress.is_failed == False,  # noqa: E712
        )
        if updated is None:
            current = await self._find_progress(user_id, quiz_id)
            if current is not None and current.is_terminal:
                logger.warning(f"Answer rejected, attempt finished meanwhile: user={user_id} quiz={quiz_id}")
                raise ConflictError("attempt already finished")
            logger.warning(f"Answer rejected, stale state: user={user_id} quiz={quiz_id}")
            raise ConflictError("stale state")

        result = {
            "isCorrect": choice.is_correct,
            "explanation": choice.explanation or question.explanation,
            "lives": updated.lives,
            "currentQuestionIndex": updated.current_question_index,
            "totalQuestions": quiz.total_questions,
            "isCompleted": updated.is_completed,
            "isFailed": updated.is_failed,
            "nextQuestion": None,
            "finalScore": None,
        }

        if updated.is_terminal:
            final_score = score_summary(updated.answers)
            result["finalScore"] = final_score
            if updated.is_completed:
                logger.info(f"Attempt completed: user={user_id} quiz={quiz_id} score={final_score}")
                await self._award_points(user_id, final_score["correct"])
            else:
                logger.info(f"Attempt failed: user={user_id} quiz={quiz_id} score={final_score}")
        else:
            result["nextQuestion"] = self._current_question(quiz, updated)

        return result

    async def reset(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId):
        """Сбрасывает попытку к начальному состоянию в любом статусе"""
        quiz = await self._get_published_quiz(quiz_id)

        progress = await self._find_progress(user_id, quiz_id)
        if progress is None:
            progress = await self._create_progress(user_id, quiz_id)
        else:
            updated = await self._reinitialize(progress)
            if updated is None:
                logger.warning(f"Reset rejected, stale state: user={user_id} quiz={quiz_id}")
                raise ConflictError("stale state")
            progress = updated

        return {
            "success": True,
            "progress": progress_payload(progress, quiz),
            "question": self._current_question(quiz, progress),
        }

    async def get_progress(self, user_id: PydanticObjectId, quiz_id: PydanticObjectId):
        """Текущее состояние попытки: активный вопрос или итоговый счёт"""
        quiz = await self._get_published_quiz(quiz_id)
        progress = await self._find_progress(user_id, quiz_id)

        response = {
            "quiz": {
                "id": str(quiz.id),
                "title": quiz.title,
                "description": quiz.description,
                "totalQuestions": quiz.total_questions,
            },
            "hasProgress": progress is not None,
            "progress": None,
            "currentQuestion": None,
            "finalScore": None,
        }
        if progress is None:
            return response

        response["progress"] = progress_payload(progress, quiz)
        if progress.is_terminal:
            final_score = score_summary(progress.answers)
            response["finalScore"] = final_score
            response["progress"].update(
                correctAnswers=final_score["correct"],
                totalAnswers=final_score["total"],
                percentage=final_score["percentage"],
            )
        else:
            response["currentQuestion"] = self._current_question(quiz, progress)

        return response
