"""Shared schema bases.

The customer and owner frontends exchange camelCase JSON, so every schema
aliases its snake_case fields and accepts either spelling on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain ``{"message": ...}`` body."""

    message: str
