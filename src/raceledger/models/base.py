"""Shared model config: snake_case in Python, camelCase in persisted JSON."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LedgerModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_json_dict(self) -> dict:
        """Shape stored through the persistence gateway."""
        return self.model_dump(by_alias=True, mode="json")
