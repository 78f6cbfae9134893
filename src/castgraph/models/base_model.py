# src/castgraph/models/base_model.py
"""Shared Pydantic base model with tolerant enum handling and camelCase aliases."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CastGraphBaseModel(BaseModel):
    """Base model that accepts snake_case or camelCase keys and loose enum spellings."""

    # Relax extra handling to ignore unexpected keys from clients and LLMs instead of failing validation.
    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @staticmethod
    def _match_enum(enum_cls: type[Enum], value: str) -> Enum | None:
        lowered = value.strip().lower()
        for member in enum_cls:
            if lowered in {member.name.lower(), str(member.value).lower()}:
                return member
        return None

    @model_validator(mode="before")
    @classmethod
    def _coerce_enums(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        for field_name, field in cls.model_fields.items():
            annotation = field.annotation
            if not (isinstance(annotation, type) and issubclass(annotation, Enum)):
                continue
            for key in (field_name, field.alias):
                value = data.get(key) if key else None
                if isinstance(value, str):
                    member = cls._match_enum(annotation, value)
                    if member is not None:
                        data = {**data, key: member}
        return data


__all__ = ["CastGraphBaseModel"]
