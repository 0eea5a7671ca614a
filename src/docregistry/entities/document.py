"""Document entity stored in the registry."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """
    A registered document.

    ``id`` and ``created_at`` are assigned by the store when the document is
    added and never change afterwards. ``updated_at`` stays ``None`` until the
    document is modified.
    """

    id: str = Field(..., min_length=1)
    name: str
    description: str | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = {
        "frozen": False,
        "populate_by_name": True,
    }

    def to_json(self) -> str:
        """Serialize to the JSON text kept in the key-value map."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Document":
        return cls.model_validate_json(raw)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
