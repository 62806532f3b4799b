"""Identifier collaborator backed by ``bson.ObjectId``."""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from formulary.core.exceptions import CollaboratorError


class ObjectIds:
    def is_valid(self, raw: Any) -> bool:
        return ObjectId.is_valid(raw)

    def to_id(self, raw: Any) -> ObjectId:
        if isinstance(raw, ObjectId):
            return raw
        try:
            return ObjectId(raw)
        except (InvalidId, TypeError) as e:
            msg = f"Cannot convert {raw!r} to an ObjectId"
            raise CollaboratorError(msg, collaborator="id", operation="to_id", reason=str(e)) from e
