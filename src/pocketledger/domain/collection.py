"""Accumulated, de-duplicated expenses for the active period."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from functools import cmp_to_key
from typing import Iterable, Iterator, Optional

from ..models.expense import Expense

DAY_KEY_FORMAT = "%d.%m.%Y"


def day_key(moment: date | datetime) -> str:
    """Display key for the calendar day of ``moment`` (``DD.MM.YYYY``)."""

    return moment.strftime(DAY_KEY_FORMAT)


def parse_day_key(key: str) -> date:
    return datetime.strptime(key, DAY_KEY_FORMAT).date()


def _instant(moment: datetime) -> datetime:
    # Naive timestamps are read as UTC so mixed payloads stay comparable
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def compare_within_day(left: Expense, right: Expense) -> int:
    """Newest ``created_at`` first; falls back to ``id`` descending when either lacks it."""

    if left.created_at is not None and right.created_at is not None:
        a, b = _instant(left.created_at), _instant(right.created_at)
        if a != b:
            return -1 if a > b else 1
    if left.id != right.id:
        return -1 if left.id > right.id else 1
    return 0


class ExpenseCollection:
    """Ordered backing sequence of loaded expenses, unique by ``id``.

    Items keep their arrival order; grouping and in-group sorting are derived
    views computed on demand.
    """

    def __init__(self, items: Iterable[Expense] = ()) -> None:
        self._items: list[Expense] = []
        self._ids: set[str] = set()
        self.append_page(items)

    def reset(self) -> None:
        self._items.clear()
        self._ids.clear()

    def append_page(self, items: Iterable[Expense]) -> int:
        """Append unseen expenses in arrival order and return how many were added."""

        added = 0
        for item in items:
            if item.id in self._ids:
                continue
            self._ids.add(item.id)
            self._items.append(item)
            added += 1
        return added

    @property
    def items(self) -> tuple[Expense, ...]:
        return tuple(self._items)

    def get(self, expense_id: str) -> Optional[Expense]:
        for item in self._items:
            if item.id == expense_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._items))

    def __contains__(self, expense_id: object) -> bool:
        return expense_id in self._ids

    def __bool__(self) -> bool:
        return bool(self._items)

    def group_by_day(self) -> dict[str, list[Expense]]:
        """Bucket expenses by calendar day, most recent day first.

        Group order comes from the parsed day, not the ``DD.MM.YYYY`` label,
        which does not sort as text.
        """

        buckets: dict[str, list[Expense]] = {}
        for item in self._items:
            buckets.setdefault(day_key(item.date), []).append(item)

        ordered_keys = sorted(buckets, key=parse_day_key, reverse=True)
        in_day_order = cmp_to_key(compare_within_day)
        return {key: sorted(buckets[key], key=in_day_order) for key in ordered_keys}

    def total_amount(self) -> Decimal:
        return sum((item.amount for item in self._items), Decimal("0"))

    def day_totals(self) -> dict[str, Decimal]:
        return {
            key: sum((item.amount for item in group), Decimal("0"))
            for key, group in self.group_by_day().items()
        }
