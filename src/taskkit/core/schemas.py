"""Base Pydantic schemas for entity input and output."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema whose JSON keys are camelCase while Python attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntityIn(CamelModel):
    """Base input schema for entity payloads."""


class EntityOut(CamelModel):
    """Base output schema for persisted entities."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
