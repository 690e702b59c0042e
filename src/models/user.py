from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import Field


class UserRoleEnum(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(Document):
    email: str
    name: Optional[str] = None
    custom_id: str
    role: UserRoleEnum = UserRoleEnum.USER
    points: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
