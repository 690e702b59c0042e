from datetime import datetime
from typing import List, Optional

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field, model_validator
from pymongo import IndexModel

from src.core.config import settings


class RecordedAnswer(BaseModel):
    """Ответ пользователя внутри попытки"""
    question_index: int
    choice_index: int
    is_correct: bool
    answered_at: datetime


class QuizProgress(Document):
    """Попытка пользователя по квизу: одна запись на пару (user_id, quiz_id)"""
    user_id: PydanticObjectId
    quiz_id: PydanticObjectId
    lives: int = Field(ge=0, le=settings.STARTING_LIVES)
    current_question_index: int = Field(ge=0)
    answers: List[RecordedAnswer]
    is_completed: bool
    is_failed: bool
    started_at: datetime
    last_activity_at: datetime
    completed_at: Optional[datetime] = None
    version: int = Field(ge=0)  # растёт на каждой записи, используется для compare-and-swap

    @model_validator(mode="after")
    def check_terminal_flags(self):
        if self.is_completed and self.is_failed:
            raise ValueError("attempt cannot be both completed and failed")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.is_completed or self.is_failed

    @staticmethod
    def fresh_state(now: datetime) -> dict:
        """Начальные значения попытки (старт и сброс)"""
        return {
            "lives": settings.STARTING_LIVES,
            "current_question_index": 0,
            "answers": [],
            "is_completed": False,
            "is_failed": False,
            "started_at": now,
            "last_activity_at": now,
            "completed_at": None,
        }

    class Settings:
        name = "quiz_progress"
        indexes = [
            IndexModel(
                [("user_id", pymongo.ASCENDING), ("quiz_id", pymongo.ASCENDING)],
                unique=True,
                name="user_quiz_unique",
            ),
        ]
