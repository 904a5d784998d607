"""Expense collection: de-duplication, day grouping and ordering."""

from __future__ import annotations

from decimal import Decimal

from pocketledger.domain.collection import ExpenseCollection, day_key, parse_day_key


def test_append_page_skips_known_ids(expense_factory):
    collection = ExpenseCollection()
    first = [expense_factory("a"), expense_factory("b")]
    overlapping = [expense_factory("b"), expense_factory("c"), expense_factory("c")]

    assert collection.append_page(first) == 2
    assert collection.append_page(overlapping) == 1
    ids = [item.id for item in collection]
    assert ids == ["a", "b", "c"]
    assert collection.items == tuple(collection)
    assert len(set(ids)) == len(ids)


def test_reset_empties_collection(expense_factory):
    collection = ExpenseCollection([expense_factory("a")])
    collection.reset()
    assert len(collection) == 0
    assert "a" not in collection
    # ids are forgotten too, so the same record can be loaded again
    assert collection.append_page([expense_factory("a")]) == 1


def test_groups_ordered_by_calendar_day_not_label(expense_factory):
    collection = ExpenseCollection(
        [
            expense_factory("a", "2025-03-31T09:00:00"),
            expense_factory("b", "2025-04-01T09:00:00"),
            expense_factory("c", "2024-12-28T09:00:00"),
            expense_factory("d", "2025-01-05T09:00:00"),
        ]
    )

    # As text, "31.03.2025" would sort above "01.04.2025"
    assert list(collection.group_by_day()) == [
        "01.04.2025",
        "31.03.2025",
        "05.01.2025",
        "28.12.2024",
    ]


def test_within_day_sorted_by_created_at_desc(expense_factory):
    collection = ExpenseCollection(
        [
            expense_factory("a", created_at="2025-03-05T08:00:00"),
            expense_factory("b", created_at="2025-03-05T10:00:00"),
            expense_factory("c", created_at="2025-03-05T09:00:00"),
        ]
    )
    group = collection.group_by_day()["05.03.2025"]
    assert [item.id for item in group] == ["b", "c", "a"]


def test_within_day_falls_back_to_id_desc(expense_factory):
    collection = ExpenseCollection(
        [expense_factory("x1"), expense_factory("x3"), expense_factory("x2")]
    )
    group = collection.group_by_day()["05.03.2025"]
    assert [item.id for item in group] == ["x3", "x2", "x1"]


def test_equal_created_at_breaks_tie_on_id(expense_factory):
    stamp = "2025-03-05T10:00:00"
    collection = ExpenseCollection(
        [expense_factory("a", created_at=stamp), expense_factory("b", created_at=stamp)]
    )
    assert [item.id for item in collection.group_by_day()["05.03.2025"]] == ["b", "a"]


def test_group_by_day_is_deterministic(expense_factory):
    collection = ExpenseCollection(
        [
            expense_factory("a", "2025-03-02T10:00:00", created_at="2025-03-02T10:00:00"),
            expense_factory("b", "2025-03-02T11:00:00"),
            expense_factory("c", "2025-03-09T11:00:00", created_at="2025-03-09T11:00:00"),
        ]
    )
    first = collection.group_by_day()
    second = collection.group_by_day()
    assert list(first) == list(second)
    assert {k: [e.id for e in v] for k, v in first.items()} == {
        k: [e.id for e in v] for k, v in second.items()
    }
    # Grouping must not reorder the backing sequence
    assert [item.id for item in collection] == ["a", "b", "c"]


def test_totals(expense_factory):
    collection = ExpenseCollection(
        [
            expense_factory("a", "2025-03-02T10:00:00", amount="12.50"),
            expense_factory("b", "2025-03-02T11:00:00", amount="0.50"),
            expense_factory("c", "2025-03-09T11:00:00", amount="3.00"),
        ]
    )
    assert collection.total_amount() == Decimal("16.00")
    assert collection.day_totals() == {"09.03.2025": Decimal("3.00"), "02.03.2025": Decimal("13.00")}


def test_day_key_round_trips_to_date(expense_factory):
    expense = expense_factory("a", "2025-03-05T23:59:00")
    key = day_key(expense.date)
    assert key == "05.03.2025"
    assert parse_day_key(key) == expense.date.date()


def test_get_returns_loaded_expense(expense_factory):
    collection = ExpenseCollection([expense_factory("a")])
    assert collection.get("a").id == "a"
    assert collection.get("missing") is None
