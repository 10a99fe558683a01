from collections.abc import Mapping, Sequence
from decimal import Decimal
from operator import attrgetter

from ..domain import (
    DimensionLookup,
    DimensionRecord,
    ExpenseTreeReport,
    NodeType,
    Period,
    ReportEntry,
    TreeNode,
)
from ..logging_config import get_logger
from .grouping import (
    NodeLabel,
    actor_dimension,
    calculate_percentage,
    category_label,
    classification_dimension,
    expenses_in_period,
    group_by,
    sum_base_amounts,
)

logger = get_logger(__name__)


def _by_amount_desc(nodes: list[TreeNode]) -> tuple[TreeNode, ...]:
    # sorted() is stable with reverse=True, so equal amounts keep first-seen order
    return tuple(sorted(nodes, key=attrgetter("amount"), reverse=True))


def _node(
    level: int,
    node_type: NodeType,
    label: NodeLabel,
    amount: Decimal,
    parent_amount: Decimal,
    children: tuple[TreeNode, ...] = (),
) -> TreeNode:
    return TreeNode(
        level=level,
        type=node_type,
        id=label.id,
        name=label.name,
        name_en=label.name_en,
        amount=amount,
        percentage=calculate_percentage(amount, parent_amount),
        is_technical=label.is_technical,
        children=children,
    )


class HierarchicalTreeBuilder:
    """
    Builds the classification -> category -> actor expense tree for a period.

    Every node carries its amount and its percentage of the parent node's
    amount. The two lookups resolve classification and actor ids to display
    records; each is called at most once per build.
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
        period: Period,
        currency: str,
    ) -> ExpenseTreeReport:
        expenses = expenses_in_period(entries, period)
        total_amount = sum_base_amounts(expenses)

        classification_records = self.classifications.load(expenses)
        actor_records = self.actors.load(expenses)

        rows = self._classification_nodes(
            expenses, total_amount, classification_records, actor_records
        )

        logger.debug(
            f"Built expense tree for {period}: {len(expenses)} expenses, "
            f"{len(rows)} classifications, total {total_amount} {currency}"
        )
        return ExpenseTreeReport(
            period=period,
            currency=currency,
            total_amount=total_amount,
            rows=rows,
        )

    def _classification_nodes(
        self,
        entries: list[ReportEntry],
        total_amount: Decimal,
        classification_records: Mapping[int, DimensionRecord],
        actor_records: Mapping[int, DimensionRecord],
    ) -> tuple[TreeNode, ...]:
        nodes = []
        for key, group in group_by(entries, self.classifications.key_of).items():
            amount = sum_base_amounts(group)
            nodes.append(_node(
                1,
                NodeType.CLASSIFICATION,
                self.classifications.describe(key, classification_records),
                amount,
                total_amount,
                self._category_nodes(group, amount, actor_records),
            ))
        return _by_amount_desc(nodes)

    def _category_nodes(
        self,
        entries: list[ReportEntry],
        parent_amount: Decimal,
        actor_records: Mapping[int, DimensionRecord],
    ) -> tuple[TreeNode, ...]:
        nodes = []
        for group in group_by(entries, attrgetter("category_id")).values():
            amount = sum_base_amounts(group)
            nodes.append(_node(
                2,
                NodeType.CATEGORY,
                category_label(group[0]),
                amount,
                parent_amount,
                self._actor_nodes(group, amount, actor_records),
            ))
        return _by_amount_desc(nodes)

    def _actor_nodes(
        self,
        entries: list[ReportEntry],
        parent_amount: Decimal,
        actor_records: Mapping[int, DimensionRecord],
    ) -> tuple[TreeNode, ...]:
        nodes = [
            _node(
                3,
                NodeType.ACTOR,
                self.actors.describe(key, actor_records),
                sum_base_amounts(group),
                parent_amount,
            )
            for key, group in group_by(entries, self.actors.key_of).items()
        ]
        return _by_amount_desc(nodes)
