"""HTTP implementation of the expense endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ...domain.criteria import ExpenseCriteria
from ...errors import NetworkOrServerError
from ...models import CreateExpenseRequest, Expense, Page, UpdateExpenseRequest
from .client import ApiClient


def _parse(model, body: Any, what: str):
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise NetworkOrServerError(f"Unexpected {what} payload from the server") from exc


class HttpExpenseApi:
    """``/expenses`` resource."""

    BASE_PATH = "/expenses"

    def __init__(self, client: ApiClient):
        self.client = client

    async def find_all(self, criteria: ExpenseCriteria) -> Page:
        body = await self.client.get(self.BASE_PATH, params=criteria.to_params())
        return _parse(Page, body, "page")

    async def find_one(self, expense_id: str) -> Expense:
        body = await self.client.get(f"{self.BASE_PATH}/{expense_id}")
        return _parse(Expense, body, "expense")

    async def create(self, request: CreateExpenseRequest) -> Expense:
        body = await self.client.post(self.BASE_PATH, json=request.to_payload())
        return _parse(Expense, body, "expense")

    async def update(self, request: UpdateExpenseRequest) -> Expense:
        body = await self.client.put(f"{self.BASE_PATH}/{request.id}", json=request.to_payload())
        return _parse(Expense, body, "expense")

    async def delete(self, expense_id: str) -> None:
        await self.client.delete(f"{self.BASE_PATH}/{expense_id}")
