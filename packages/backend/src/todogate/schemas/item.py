"""Pydantic schemas for task-list items.

Learn: The wire format uses camelCase (`isComplete`) like the original
clients expect. populate_by_name lets Python callers and tests use
snake_case too. FastAPI serializes response models by alias, so
responses always come out camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ItemWrite(_CamelModel):
    """Body for create and update. Any `id` sent by the client is ignored."""
    id: Optional[int] = None
    name: Optional[str] = None
    is_complete: bool = False


class ItemRead(_CamelModel):
    id: int
    name: Optional[str] = None
    is_complete: bool
