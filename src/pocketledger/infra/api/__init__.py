"""REST backend adapters."""

from .categories import HttpCategoryApi
from .client import ApiClient
from .expenses import HttpExpenseApi

__all__ = ["ApiClient", "HttpCategoryApi", "HttpExpenseApi"]
