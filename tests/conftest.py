from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from yachtbook.domain import DimensionRecord, EntryKind, Money, ReportEntry
from yachtbook.models import Base, FinancialCategory, FinancialEntry, MainCategory, Who

CATEGORY_IDS = {}


def make_entry(
    entry_date: date,
    kind: EntryKind,
    amount: str,
    category: str = "Test Category",
    classification_id: int | None = None,
    actor_id: int | None = None,
    technical: bool = False,
    currency: str = "EUR",
) -> ReportEntry:
    """Build a report entry; category ids are stable per category name."""
    category_id = CATEGORY_IDS.setdefault(category, len(CATEGORY_IDS) + 1)
    return ReportEntry(
        entry_date=entry_date,
        kind=kind,
        category_id=category_id,
        category_name=category,
        category_is_technical=technical,
        classification_id=classification_id,
        actor_id=actor_id,
        base_amount=Money.of(amount, currency),
    )


def income(entry_date: date, amount: str, **kwargs) -> ReportEntry:
    return make_entry(entry_date, EntryKind.INCOME, amount, **kwargs)


def expense(entry_date: date, amount: str, **kwargs) -> ReportEntry:
    return make_entry(entry_date, EntryKind.EXPENSE, amount, **kwargs)


class RecordingLookup:
    """Batch lookup over a fixed set of records that remembers every call."""

    def __init__(self, records: list[DimensionRecord]):
        self.records = {r.id: r for r in records}
        self.calls: list[frozenset[int]] = []

    def __call__(self, ids: frozenset[int]) -> dict[int, DimensionRecord]:
        self.calls.append(ids)
        return {i: self.records[i] for i in ids if i in self.records}


@pytest.fixture
def main_categories():
    return RecordingLookup([
        DimensionRecord(1, "Teknik", "Technical", True),
        DimensionRecord(2, "Operasyon", "Operations", False),
    ])


@pytest.fixture
def actors():
    return RecordingLookup([
        DimensionRecord(10, "Kaptan", "Captain", False),
        DimensionRecord(11, "Misafir", None, False),
    ])


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


def book(db, entry_date, kind, amount, category, main_category=None, who=None,
         currency="EUR", base_amount=None, base_currency="EUR"):
    """Insert one ledger entry; ``base_amount`` defaults to ``amount``."""
    entry = FinancialEntry(
        entry_date=entry_date,
        entry_type=kind,
        amount=Decimal(amount),
        currency_code=currency,
        base_amount=Decimal(base_amount if base_amount is not None else amount),
        base_currency_code=base_currency,
        category_id=category.id,
        main_category_id=main_category.id if main_category else None,
        who_id=who.id if who else None,
    )
    db.add(entry)
    return entry


@pytest.fixture
def ledger(db):
    """A small 2025 ledger: two classifications, three categories, two actors."""
    fuel = FinancialCategory(name="Fuel", is_technical=True)
    marina = FinancialCategory(name="Marina")
    charter = FinancialCategory(name="Charter")
    technical = MainCategory(name="Teknik", name_en="Technical", is_technical=True)
    operations = MainCategory(name="Operasyon", name_en="Operations", is_technical=False)
    captain = Who(name="Kaptan", name_en="Captain")
    guest = Who(name="Misafir")
    db.add_all([fuel, marina, charter, technical, operations, captain, guest])
    db.flush()

    book(db, date(2025, 1, 10), EntryKind.INCOME, "3000", charter, operations)
    book(db, date(2025, 1, 20), EntryKind.EXPENSE, "600", fuel, technical, captain)
    book(db, date(2025, 2, 5), EntryKind.EXPENSE, "200", fuel, technical)
    book(db, date(2025, 2, 9), EntryKind.EXPENSE, "100", marina, operations, guest)
    book(db, date(2025, 3, 1), EntryKind.EXPENSE, "100", marina)
    # USD invoice booked at its EUR base amount
    book(db, date(2025, 3, 15), EntryKind.EXPENSE, "110", fuel, technical, captain,
         currency="USD", base_amount="100")
    book(db, date(2024, 12, 31), EntryKind.EXPENSE, "999", fuel, technical)
    db.commit()
    return db
