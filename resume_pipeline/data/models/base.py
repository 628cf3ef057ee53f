"""
Base model classes for pipeline data models.

Provides the shared configuration for every model produced by the pipeline.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EmbeddedModel(BaseModel):
    """
    Base model for pipeline outputs.

    Models are frozen: once a stage produces a value, later stages cannot
    mutate it. Field names are snake_case in Python and camelCase on the
    wire (``model_dump(by_alias=True)``).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Convert model to the camelCase JSON-compatible shape."""
        return self.model_dump(by_alias=True, mode="json")
