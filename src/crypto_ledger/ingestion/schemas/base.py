"""Shared base for raw response schemas.

Exchange payloads are duck-typed JSON; every field is optional here so that
"field may be absent" is an explicit `None` the normalizers can test for.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class RawRecord(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )


class RawEnvelope(BaseModel):
    """Response wrapper; a JSON null where a list is expected reads as empty."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_lists_to_empty(cls, v: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if v is None and field is not None and field.default_factory is list:
            return []
        return v
