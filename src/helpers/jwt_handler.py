from datetime import datetime, timedelta

import jwt

from src.core.config import settings


class JWT:
    @staticmethod
    def encode(payload: dict, expires_minutes: int = None) -> str:
        """Подписывает токен; sub = id пользователя"""
        minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRES_MINUTES
        to_encode = dict(payload)
        to_encode["exp"] = datetime.utcnow() + timedelta(minutes=minutes)
        return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def decode(token: str) -> dict:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
