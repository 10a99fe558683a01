from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date

from .money import Money


class EntryKind(enum.Enum):
    """Direction of a ledger entry."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class ReportEntry:
    """
    Read-only view of one ledger entry as the report generators see it.

    ``base_amount`` is already converted into the ledger's base currency by
    whoever loads the entry. ``classification_id`` and ``actor_id`` are
    optional grouping tags; ``category_id`` is always set.
    """

    entry_date: date
    kind: EntryKind
    category_id: int
    category_name: str
    base_amount: Money | None
    category_is_technical: bool = False
    classification_id: int | None = None
    actor_id: int | None = None


@dataclass(frozen=True)
class DimensionRecord:
    """A classification (main category) or actor ("who") row used for labels."""
    id: int
    name: str
    name_en: str | None = None
    is_technical: bool | None = None


# Batch lookup: ids -> records found. Ids with no row are simply absent.
DimensionLookup = Callable[[frozenset[int]], Mapping[int, DimensionRecord]]


@dataclass(frozen=True)
class Present:
    """Grouping key for an entry that carries a dimension id."""
    id: int

    @property
    def token(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class Absent:
    """Grouping key shared by every entry without a dimension id."""

    @property
    def token(self) -> str:
        return "none"


ABSENT = Absent()

GroupKey = Present | Absent


def group_key(value: int | None) -> GroupKey:
    return ABSENT if value is None else Present(value)
