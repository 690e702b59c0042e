import uuid

import pytest_asyncio
from beanie import PydanticObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from main import app
from src.core.database import init_db
from src.helpers.jwt_handler import JWT
from src.models.quiz import Choice, Quiz, QuizQuestion
from src.models.user import User


@pytest_asyncio.fixture
async def db():
    client = AsyncMongoMockClient()
    database = client[f"test_{uuid.uuid4().hex}"]
    await init_db(database)
    yield database


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def make_quiz(n_questions: int = 3, is_published: bool = True, title: str = "Sûreté", theme_slug: str = None) -> Quiz:
    """Квиз, где правильный вариант всегда первый (индекс 0)"""
    quiz = Quiz(
        title=title,
        description="Questions de révision",
        is_published=is_published,
        theme_slug=theme_slug,
        questions=[
            QuizQuestion(
                text=f"Question {i + 1}",
                explanation=f"Contexte {i + 1}",
                choices=[
                    Choice(text="Bonne réponse", is_correct=True, explanation="Exact"),
                    Choice(text="Mauvaise réponse", is_correct=False, explanation="Non"),
                    Choice(text="Autre", is_correct=False),
                ],
            )
            for i in range(n_questions)
        ],
    )
    await quiz.insert()
    return quiz


async def make_user(role: str = "user") -> User:
    user = User(email=f"{uuid.uuid4().hex}@example.com", custom_id=uuid.uuid4().hex[:12], role=role)
    await user.insert()
    return user


def auth_headers(user_id: PydanticObjectId, role: str = "user") -> dict:
    token = JWT.encode({"sub": str(user_id), "role": role})
    return {"Authorization": f"Bearer {token}"}
