from collections.abc import Mapping, Sequence
from decimal import Decimal
from operator import attrgetter
from types import MappingProxyType

from ..domain import (
    MONTHS,
    TOTAL_COLUMN,
    DimensionLookup,
    DimensionRecord,
    NodeType,
    PivotTreeNode,
    PivotTreeReport,
    ReportEntry,
)
from ..logging_config import get_logger
from .grouping import (
    NodeLabel,
    ZERO,
    actor_dimension,
    base_amount_of,
    category_label,
    classification_dimension,
    expenses_within,
    group_by,
)

logger = get_logger(__name__)


def month_column(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def pivot_columns(year: int) -> tuple[str, ...]:
    """``"YYYY-01"`` .. ``"YYYY-12"`` followed by ``"TOTAL"``."""
    return tuple(month_column(year, m) for m in MONTHS) + (TOTAL_COLUMN,)


def monthly_values(entries: Sequence[ReportEntry], columns: Sequence[str]) -> Mapping[str, Decimal]:
    """Sum entries into their month column and into TOTAL; every column is present.

    The result is a read-only view.
    """
    values = {column: ZERO for column in columns}
    for entry in entries:
        amount = base_amount_of(entry)
        values[month_column(entry.entry_date.year, entry.entry_date.month)] += amount
        values[TOTAL_COLUMN] += amount
    return MappingProxyType(values)


def _by_total_desc(nodes: list[PivotTreeNode]) -> tuple[PivotTreeNode, ...]:
    return tuple(sorted(nodes, key=attrgetter("total"), reverse=True))


class PivotTableBuilder:
    """
    Builds the expense tree of one calendar year with a column per month.

    Grouping and labels follow HierarchicalTreeBuilder. Node ids are composite
    (``parent-child``) so each row id is unique within the report. Column
    totals are computed from the year's expenses directly, not from the tree.
    """

    def __init__(
        self,
        resolve_classifications: DimensionLookup,
        resolve_actors: DimensionLookup,
    ):
        self.classifications = classification_dimension(resolve_classifications)
        self.actors = actor_dimension(resolve_actors)

    def build(
        self,
        entries: Sequence[ReportEntry],
        year: int,
        currency: str,
    ) -> PivotTreeReport:
        expenses = expenses_within(entries, lambda d: d.year == year)
        columns = pivot_columns(year)
        column_totals = monthly_values(expenses, columns)

        classification_records = self.classifications.load(expenses)
        actor_records = self.actors.load(expenses)

        rows = self._classification_nodes(
            expenses, columns, classification_records, actor_records
        )

        logger.debug(
            f"Built pivot report for {year}: {len(expenses)} expenses, "
            f"{len(rows)} classifications, total {column_totals[TOTAL_COLUMN]} {currency}"
        )
        return PivotTreeReport(
            year=year,
            currency=currency,
            columns=columns,
            column_totals=column_totals,
            rows=rows,
        )

    def _classification_nodes(
        self,
        entries: list[ReportEntry],
        columns: tuple[str, ...],
        classification_records: Mapping[int, DimensionRecord],
        actor_records: Mapping[int, DimensionRecord],
    ) -> tuple[PivotTreeNode, ...]:
        nodes = []
        for key, group in group_by(entries, self.classifications.key_of).items():
            node_id = key.token
            nodes.append(self._node(
                node_id,
                1,
                NodeType.CLASSIFICATION,
                self.classifications.describe(key, classification_records),
                monthly_values(group, columns),
                self._category_nodes(group, columns, actor_records, node_id),
            ))
        return _by_total_desc(nodes)

    def _category_nodes(
        self,
        entries: list[ReportEntry],
        columns: tuple[str, ...],
        actor_records: Mapping[int, DimensionRecord],
        parent_id: str,
    ) -> tuple[PivotTreeNode, ...]:
        nodes = []
        for category_id, group in group_by(entries, attrgetter("category_id")).items():
            node_id = f"{parent_id}-{category_id}"
            nodes.append(self._node(
                node_id,
                2,
                NodeType.CATEGORY,
                category_label(group[0]),
                monthly_values(group, columns),
                self._actor_nodes(group, columns, actor_records, node_id),
            ))
        return _by_total_desc(nodes)

    def _actor_nodes(
        self,
        entries: list[ReportEntry],
        columns: tuple[str, ...],
        actor_records: Mapping[int, DimensionRecord],
        parent_id: str,
    ) -> tuple[PivotTreeNode, ...]:
        nodes = [
            self._node(
                f"{parent_id}-{key.token}",
                3,
                NodeType.ACTOR,
                self.actors.describe(key, actor_records),
                monthly_values(group, columns),
            )
            for key, group in group_by(entries, self.actors.key_of).items()
        ]
        return _by_total_desc(nodes)

    @staticmethod
    def _node(
        node_id: str,
        level: int,
        node_type: NodeType,
        label: NodeLabel,
        values: Mapping[str, Decimal],
        children: tuple[PivotTreeNode, ...] = (),
    ) -> PivotTreeNode:
        return PivotTreeNode(
            id=node_id,
            level=level,
            type=node_type,
            name=label.name,
            name_en=label.name_en,
            is_technical=label.is_technical,
            monthly_values=values,
            children=children,
        )
