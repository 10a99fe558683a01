from datetime import date
from decimal import Decimal

import pytest

from conftest import expense, income
from yachtbook.domain import TOTAL_COLUMN, NodeType
from yachtbook.services import PivotTableBuilder, pivot_columns


@pytest.fixture
def builder(main_categories, actors):
    return PivotTableBuilder(main_categories, actors)


@pytest.fixture
def entries():
    return [
        expense(date(2025, 1, 5), "600", category="Fuel", classification_id=1, actor_id=10),
        expense(date(2025, 2, 5), "200", category="Fuel", classification_id=1),
        expense(date(2025, 2, 9), "100", category="Marina", classification_id=1, actor_id=10),
        expense(date(2025, 12, 1), "300", category="Crew", actor_id=11),
        expense(date(2025, 12, 2), "50", category="Crew", classification_id=2, actor_id=11),
        income(date(2025, 1, 3), "5000", category="Charter", classification_id=2),
        expense(date(2024, 12, 31), "999", category="Fuel", classification_id=1),
        expense(date(2026, 1, 1), "999", category="Fuel", classification_id=1),
    ]


def test_columns_are_months_then_total():
    columns = pivot_columns(2025)

    assert len(columns) == 13
    assert columns[0] == "2025-01"
    assert columns[11] == "2025-12"
    assert columns[12] == TOTAL_COLUMN


def test_column_totals_cover_expenses_of_the_year(builder, entries):
    report = builder.build(entries, 2025, "EUR")

    assert report.year == 2025
    assert report.currency == "EUR"
    assert report.columns == pivot_columns(2025)
    assert report.column_totals["2025-01"] == Decimal("600")
    assert report.column_totals["2025-02"] == Decimal("300")
    assert report.column_totals["2025-06"] == 0
    assert report.column_totals["2025-12"] == Decimal("350")
    assert report.column_totals[TOTAL_COLUMN] == Decimal("1250")


def test_level_one_rows_add_up_to_column_totals(builder, entries):
    report = builder.build(entries, 2025, "EUR")

    for column in report.columns:
        assert sum(r.monthly_values[column] for r in report.rows) == report.column_totals[column]


def test_every_node_has_every_column(builder, entries):
    report = builder.build(entries, 2025, "EUR")

    def walk(nodes):
        for node in nodes:
            yield node
            yield from walk(node.children)

    for node in walk(report.rows):
        assert tuple(node.monthly_values) == report.columns


def test_rows_sorted_by_total_with_composite_ids(builder, entries):
    rows = builder.build(entries, 2025, "EUR").rows

    assert [(r.id, r.name, r.total) for r in rows] == [
        ("1", "Teknik", Decimal("900")),
        ("none", "Unassigned", Decimal("300")),
        ("2", "Operasyon", Decimal("50")),
    ]
    assert all(r.level == 1 and r.type == NodeType.CLASSIFICATION for r in rows)

    fuel, marina = rows[0].children
    fuel_id = entries[0].category_id
    assert fuel.id == f"1-{fuel_id}"
    assert marina.id == f"1-{entries[2].category_id}"
    assert fuel.type == NodeType.CATEGORY and fuel.level == 2
    assert fuel.monthly_values["2025-01"] == Decimal("600")
    assert fuel.monthly_values["2025-02"] == Decimal("200")

    captain, unspecified = fuel.children
    assert captain.id == f"1-{fuel_id}-10"
    assert captain.name_en == "Captain"
    assert unspecified.id == f"1-{fuel_id}-none"
    assert unspecified.name == "Unspecified"
    assert captain.type == NodeType.ACTOR and captain.level == 3


def test_row_ids_are_unique(builder, entries):
    report = builder.build(entries, 2025, "EUR")

    ids = []
    stack = list(report.rows)
    while stack:
        node = stack.pop()
        ids.append(node.id)
        stack.extend(node.children)
    assert len(ids) == len(set(ids))


def test_lookups_called_once(builder, entries, main_categories, actors):
    builder.build(entries, 2025, "EUR")

    assert main_categories.calls == [frozenset({1, 2})]
    assert actors.calls == [frozenset({10, 11})]


def test_unknown_classification_gets_placeholder(builder):
    rows = builder.build(
        [expense(date(2025, 4, 1), "10", classification_id=42)], 2025, "EUR"
    ).rows

    assert rows[0].id == "42"
    assert rows[0].name == "Unknown MainCategory (ID: 42)"


def test_empty_year(builder, main_categories):
    report = builder.build([], 2025, "EUR")

    assert report.rows == ()
    assert len(report.column_totals) == 13
    assert all(v == 0 for v in report.column_totals.values())
    assert main_categories.calls == []


def test_unknown_actor_gets_placeholder(builder):
    rows = builder.build(
        [expense(date(2025, 5, 1), "25", category="Fuel", classification_id=1, actor_id=77)],
        2025,
        "EUR",
    ).rows

    (fuel,) = rows[0].children
    (who,) = fuel.children
    assert who.name == who.name_en == "Unknown Who (ID: 77)"
    assert who.id == f"{fuel.id}-77"
    assert who.is_technical is None
    assert who.monthly_values["2025-05"] == Decimal("25")


def test_categories_sorted_by_total_descending(builder):
    entries = [
        expense(date(2025, 1, 1), "5", category="Paint", classification_id=2),
        expense(date(2025, 2, 1), "20", category="Ropes", classification_id=2),
        expense(date(2025, 3, 1), "40", category="Fuel", classification_id=2),
        expense(date(2025, 4, 1), "30", category="Paint", classification_id=2),
        expense(date(2025, 5, 1), "15", category="Engine", classification_id=2),
    ]

    (operations,) = builder.build(entries, 2025, "EUR").rows

    assert [(c.name, c.total) for c in operations.children] == [
        ("Fuel", Decimal("40")),
        ("Paint", Decimal("35")),
        ("Ropes", Decimal("20")),
        ("Engine", Decimal("15")),
    ]
    assert operations.total == Decimal("110")


def test_report_mappings_are_read_only(builder, entries):
    report = builder.build(entries, 2025, "EUR")

    with pytest.raises(TypeError):
        report.column_totals[TOTAL_COLUMN] = Decimal("0")
    with pytest.raises(TypeError):
        report.rows[0].monthly_values["2025-01"] = Decimal("0")
