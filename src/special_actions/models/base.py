"""Shared pydantic base class for engine models.

Field names are snake_case in Python and camelCase in JSON so persisted
creatures and template exports keep the tracker's wire format.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Base model with camelCase aliases.

    Either spelling is accepted on input; ``to_wire`` always emits the
    camelCase form.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump the model as a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["EngineModel"]
