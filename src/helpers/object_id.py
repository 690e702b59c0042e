from beanie import PydanticObjectId
from bson import ObjectId

from src.core.exceptions import ValidationError


def parse_object_id(value: str, detail: str = "Invalid id") -> PydanticObjectId:
    if not ObjectId.is_valid(value):
        raise ValidationError(detail)
    return PydanticObjectId(value)
