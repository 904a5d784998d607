"""HTTP implementation of the category endpoints."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError

from ...domain.criteria import CategoryCriteria
from ...errors import NetworkOrServerError
from ...models import Category, CategoryUpsertRequest
from .client import ApiClient

_CATEGORY_LIST = TypeAdapter(list[Category])


class HttpCategoryApi:
    """``/categories`` resource."""

    BASE_PATH = "/categories"

    def __init__(self, client: ApiClient):
        self.client = client

    async def find_all(self, criteria: CategoryCriteria | None = None) -> list[Category]:
        criteria = criteria or CategoryCriteria()
        body = await self.client.get(self.BASE_PATH, params=criteria.to_params())
        try:
            return _CATEGORY_LIST.validate_python(body or [])
        except ValidationError as exc:
            raise NetworkOrServerError("Unexpected category list from the server") from exc

    async def find_one(self, category_id: str) -> Category:
        return self._category(await self.client.get(f"{self.BASE_PATH}/{category_id}"))

    async def create(self, request: CategoryUpsertRequest) -> Category:
        return self._category(await self.client.post(self.BASE_PATH, json=request.to_payload()))

    async def update(self, request: CategoryUpsertRequest) -> Category:
        if request.id is None:
            raise ValueError("Updating a category requires its id")
        return self._category(
            await self.client.put(f"{self.BASE_PATH}/{request.id}", json=request.to_payload())
        )

    async def delete(self, category_id: str) -> None:
        await self.client.delete(f"{self.BASE_PATH}/{category_id}")

    @staticmethod
    def _category(body) -> Category:
        try:
            return Category.model_validate(body)
        except ValidationError as exc:
            raise NetworkOrServerError("Unexpected category payload from the server") from exc
