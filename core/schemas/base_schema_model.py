"""Base pydantic model shared by every schema of the engine."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model for centralized schema configuration.

    Fields are snake_case in Python and camelCase on the wire; both spellings
    are accepted on input. ORM instances validate directly via
    ``from_attributes``.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def to_api(self) -> dict:
        """Dump to a JSON-safe dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
