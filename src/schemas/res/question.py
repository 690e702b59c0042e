from typing import List, Optional

from pydantic import BaseModel

from src.models.quiz import Media, QuizQuestion


class ChoiceResponse(BaseModel):
    index: int
    text: str
    media: Optional[Media] = None


class QuestionResponse(BaseModel):
    """Вопрос для клиента: без is_correct и без пояснений к вариантам"""
    index: int
    text: str
    explanation: Optional[str] = None
    media: Optional[Media] = None
    choices: List[ChoiceResponse]

    @classmethod
    def from_question(cls, index: int, question: QuizQuestion) -> "QuestionResponse":
        return cls(
            index=index,
            text=question.text,
            explanation=question.explanation,
            media=question.media,
            choices=[
                ChoiceResponse(index=i, text=choice.text, media=choice.media)
                for i, choice in enumerate(question.choices)
            ],
        )
