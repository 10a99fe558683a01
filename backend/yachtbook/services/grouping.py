"""
Grouping helpers shared by the expense tree and pivot builders.

Both builders group expense entries three levels deep: classification, then
category, then actor. Classification and actor ids are optional, so entries
are keyed by ``Present(id)`` or ``ABSENT``; every entry without an id lands in
one labeled group. Ids that the lookup cannot resolve keep their own group
under an "Unknown ..." placeholder label.
"""

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from ..domain import (
    Absent,
    DimensionLookup,
    DimensionRecord,
    EntryKind,
    GroupKey,
    MissingBaseAmountError,
    Period,
    ReportEntry,
    group_key,
)
from ..logging_config import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
_RATIO_QUANTUM = Decimal("0.0001")
_PERCENT_QUANTUM = Decimal("0.01")

UNASSIGNED_LABEL = "Unassigned"
UNSPECIFIED_LABEL = "Unspecified"


def base_amount_of(entry: ReportEntry) -> Decimal:
    """Base-currency amount of an entry; entries without one break the input contract."""
    if entry.base_amount is None:
        raise MissingBaseAmountError(entry)
    return entry.base_amount.amount


def sum_base_amounts(entries: Iterable[ReportEntry]) -> Decimal:
    return sum((base_amount_of(e) for e in entries), ZERO)


def calculate_percentage(amount: Decimal, total: Decimal) -> Decimal:
    """
    Share of ``total`` as a percentage with two decimals.

    The ratio is rounded half-up to four decimals first, then scaled and rounded
    half-up to two. A zero total gives zero.
    """
    if total == 0:
        return ZERO
    ratio = (amount / total).quantize(_RATIO_QUANTUM, rounding=ROUND_HALF_UP)
    return (ratio * HUNDRED).quantize(_PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


def group_by(
    entries: Iterable[ReportEntry],
    key: Callable[[ReportEntry], K],
) -> dict[K, list[ReportEntry]]:
    """Group entries by key, keeping groups in first-seen order."""
    groups: dict[K, list[ReportEntry]] = {}
    for entry in entries:
        groups.setdefault(key(entry), []).append(entry)
    return groups


def expenses_within(
    entries: Iterable[ReportEntry],
    accept_date: Callable,
) -> list[ReportEntry]:
    return [
        e for e in entries
        if e.kind == EntryKind.EXPENSE and accept_date(e.entry_date)
    ]


def expenses_in_period(entries: Iterable[ReportEntry], period: Period) -> list[ReportEntry]:
    return expenses_within(entries, period.contains)


@dataclass(frozen=True)
class NodeLabel:
    """Display fields of a tree node."""
    id: str | None
    name: str
    name_en: str
    is_technical: bool | None


@dataclass(frozen=True)
class Dimension:
    """
    An optional grouping dimension attached to entries.

    ``label`` names the dimension in placeholder text, ``unassigned_label``
    names the group of entries with no id.
    """

    label: str
    unassigned_label: str
    id_of: Callable[[ReportEntry], int | None]
    lookup: DimensionLookup

    def key_of(self, entry: ReportEntry) -> GroupKey:
        return group_key(self.id_of(entry))

    def load(self, entries: Sequence[ReportEntry]) -> Mapping[int, DimensionRecord]:
        """
        Resolve every id present among ``entries`` with a single lookup call.

        The lookup is skipped when no entry carries an id.
        """
        ids = frozenset(i for i in map(self.id_of, entries) if i is not None)
        if not ids:
            return {}
        records = dict(self.lookup(ids))
        logger.debug(f"Resolved {len(records)} of {len(ids)} {self.label} ids")
        missing = ids.difference(records)
        if missing:
            logger.warning(
                f"{self.label} ids not found, reporting as placeholders: {sorted(missing)}"
            )
        return records

    def describe(self, key: GroupKey, records: Mapping[int, DimensionRecord]) -> NodeLabel:
        if isinstance(key, Absent):
            return NodeLabel(None, self.unassigned_label, self.unassigned_label, None)

        record = records.get(key.id)
        if record is None:
            placeholder = f"Unknown {self.label} (ID: {key.id})"
            return NodeLabel(str(key.id), placeholder, placeholder, None)

        return NodeLabel(
            str(record.id),
            record.name,
            record.name_en or record.name,
            record.is_technical,
        )


def classification_dimension(lookup: DimensionLookup) -> Dimension:
    return Dimension(
        label="MainCategory",
        unassigned_label=UNASSIGNED_LABEL,
        id_of=lambda e: e.classification_id,
        lookup=lookup,
    )


def actor_dimension(lookup: DimensionLookup) -> Dimension:
    return Dimension(
        label="Who",
        unassigned_label=UNSPECIFIED_LABEL,
        id_of=lambda e: e.actor_id,
        lookup=lookup,
    )


def category_label(entry: ReportEntry) -> NodeLabel:
    """Label of the category an entry belongs to; categories are never absent."""
    return NodeLabel(
        str(entry.category_id),
        entry.category_name,
        entry.category_name,
        entry.category_is_technical,
    )
