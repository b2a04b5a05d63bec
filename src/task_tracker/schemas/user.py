"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserPublic(BaseModel):
    """Public representation of a user. The password hash is never included."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "4f0c9a3e8d2b4c7a9e1f2a3b4c5d6e7f",
                "username": "jane",
                "email": "jane@example.com",
                "created_at": "2024-01-01T12:00:00Z",
            }
        },
    )

    id: str
    username: str
    email: str
    created_at: datetime


__all__ = ["UserPublic"]
