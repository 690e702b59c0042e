import re
from typing import Any, List, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator

from src.models.quiz import MediaType, QuizDifficulty

SLUG_RE = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)


class MediaDTO(BaseModel):
    type: MediaType
    url: AnyUrl
    filename: str


class ChoiceDTO(BaseModel):
    text: str = Field(min_length=1)
    is_correct: bool
    explanation: Optional[str] = None
    media: Optional[MediaDTO] = None


class QuestionDTO(BaseModel):
    text: str = Field(min_length=1)
    explanation: Optional[str] = None
    media: Optional[MediaDTO] = None
    choices: List[ChoiceDTO] = Field(min_length=2)


class QuizCreateDTO(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    is_published: bool = False
    theme_slug: Optional[str] = None
    difficulty: Optional[QuizDifficulty] = None
    questions: List[QuestionDTO] = Field(min_length=1)

    @field_validator("theme_slug")
    @classmethod
    def normalize_slug(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not SLUG_RE.match(value):
            raise ValueError("invalid theme slug")
        return value.lower()


class QuizPublishDTO(BaseModel):
    is_published: bool


class AnswerDTO(BaseModel):
    """Ответ на текущий вопрос: индекс выбранного варианта.

    Значение принимается как есть и проверяется сервисом, чтобы любой
    некорректный индекс давал 400 invalid choice без изменения попытки.
    """
    model_config = ConfigDict(populate_by_name=True)

    choice_index: Any = Field(default=None, alias="choiceIndex")
