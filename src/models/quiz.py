from datetime import datetime
from enum import Enum
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class QuizDifficulty(str, Enum):
    BEGINNER = "debutant"
    INTERMEDIATE = "intermediaire"
    EXPERT = "expert"


# Картинка или видео, загруженные через админку
class Media(BaseModel):
    type: MediaType
    url: str
    filename: str


# Вариант ответа
class Choice(BaseModel):
    text: str
    is_correct: bool = False
    explanation: Optional[str] = None
    media: Optional[Media] = None


# Вопрос квиза
class QuizQuestion(BaseModel):
    text: str
    explanation: Optional[str] = None  # контекст, показывается вместе с вопросом
    media: Optional[Media] = None
    choices: List[Choice]


class Quiz(Document):
    title: str
    description: Optional[str] = None
    is_published: bool = False
    theme_slug: Optional[str] = None
    difficulty: Optional[QuizDifficulty] = None
    questions: List[QuizQuestion] = []
    created_by: Optional[PydanticObjectId] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def question_at(self, index: int) -> Optional[QuizQuestion]:
        if 0 <= index < len(self.questions):
            return self.questions[index]
        return None

    class Settings:
        name = "quizzes"
