from fastapi import HTTPException


class NotAuthenticatedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Invalid data"):
        super().__init__(status_code=400, detail=detail)


class ConflictError(HTTPException):
    """Попытка завершена, отсутствует или изменена параллельным запросом"""

    def __init__(self, detail: str):
        super().__init__(status_code=409, detail=detail)
