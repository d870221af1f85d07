# backend/coachbook/schemas/base.py
"""Base model shared by the canonical entities."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """
    Snake-case attributes, camelCase on the wire.

    Assignments are re-validated so an entity never drifts out of its
    constraints after construction.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        validate_default=True,
        use_enum_values=True,
    )

    def public_dict(self) -> Dict[str, Any]:
        """JSON-ready, camelCase representation for API responses."""
        return self.model_dump(mode="json", by_alias=True)
