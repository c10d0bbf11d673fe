"""Recipient data the engine reads from the platform's user table."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class UserRecord(BaseSchemaModel):
    """A resolved recipient."""

    user_id: UUID = Field(..., description="Unique identifier for the user")
    email: str | None = Field(None, description="Email address, if any")
    name: str = Field("", description="Display name")
    is_active: bool = Field(True, description="Whether the account is active")
