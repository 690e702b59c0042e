import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from src.core.config import settings
from src.models.quiz import Quiz
from src.models.quiz_progress import QuizProgress
from src.models.user import User

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [
    User,
    Quiz,
    QuizProgress,
]

client = None
db = None


async def init_db(database=None):
    global client, db
    if database is None:
        client = AsyncIOMotorClient(settings.MONGO_URL)
        database = client[settings.MONGO_DB]
    db = database
    await init_beanie(database=db, document_models=DOCUMENT_MODELS)
    logger.info(f"Beanie initialised on database '{db.name}'")
