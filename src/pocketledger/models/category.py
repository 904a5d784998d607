"""Expense category definitions."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._parsing import coerce_identifier, coerce_optional_identifier


class Category(BaseModel):
    """Category as returned by the backend; read-only lookup data on the client."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)


class CategoryUpsertRequest(BaseModel):
    """Payload for creating or renaming a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=64, description="Display name, also the sort key")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_optional_identifier(value)

    def to_payload(self) -> dict[str, str]:
        payload = {"name": self.name}
        if self.id is not None:
            payload["id"] = self.id
        return payload
