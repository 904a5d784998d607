"""Server paging envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .expense import Expense


class Page(BaseModel):
    """One page of expenses; ``last`` means no further pages exist for the criteria."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: list[Expense] = Field(default_factory=list)
    last: bool = True
    total_elements: int = Field(default=0, ge=0, alias="totalElements")
