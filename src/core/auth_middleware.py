import logging

import jwt
from bson import ObjectId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.exceptions import ForbiddenError, NotAuthenticatedError
from src.helpers.jwt_handler import JWT

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> dict:
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    try:
        token = JWT.decode(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise NotAuthenticatedError("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise NotAuthenticatedError()
    if not ObjectId.is_valid(str(token.get("sub", ""))):
        raise NotAuthenticatedError()
    return token


async def get_current_admin(token: dict = Depends(get_current_user)) -> dict:
    if token.get("role") != "admin":
        raise ForbiddenError()
    return token
