"""Expense wire model and the request DTOs sent for mutations."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._parsing import coerce_identifier, coerce_optional_identifier, coerce_timestamp
from .category import Category

WIRE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
MIN_AMOUNT = Decimal("0.01")


class Expense(BaseModel):
    """A single dated expense owned by the backend.

    ``created_at`` is only used to order expenses that fall on the same day.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    amount: Decimal
    date: datetime
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    category: Optional[Category] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("date", "created_at", mode="before")
    @classmethod
    def parse_timestamps(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @property
    def category_id(self) -> Optional[str]:
        return self.category.id if self.category else None


class CreateExpenseRequest(BaseModel):
    """Validated payload for ``POST /expenses``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(ge=MIN_AMOUNT, description="Positive amount, at least one cent")
    date: datetime
    category_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Please provide a name.")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Any:
        # Form fields may use a decimal comma
        if isinstance(value, str):
            return value.strip().replace(",", ".")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def coerce_category_id(cls, value: Any) -> Any:
        return coerce_optional_identifier(value)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "amount": float(self.amount),
            "date": self.date.strftime(WIRE_DATETIME_FORMAT),
        }
        if self.category_id is not None:
            payload["categoryId"] = self.category_id
        return payload


class UpdateExpenseRequest(CreateExpenseRequest):
    """Validated payload for ``PUT /expenses/{id}``; the body repeats the id."""

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @classmethod
    def for_expense(cls, expense_id: str, changes: CreateExpenseRequest) -> "UpdateExpenseRequest":
        return cls(id=expense_id, **changes.model_dump(exclude={"id"}))

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["id"] = self.id
        return payload
