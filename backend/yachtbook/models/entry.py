from datetime import date
from decimal import Decimal
from sqlalchemy import String, Integer, Date, ForeignKey, Enum, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..domain import EntryKind, Money, ReportEntry
from .base import Base, TimestampMixin


class FinancialEntry(Base, TimestampMixin):
    """
    One income or expense booked in the ledger.

    ``amount``/``currency_code`` hold the original figure as entered.
    ``base_amount``/``base_currency_code`` hold it converted into the ledger's
    base currency; reports only ever read the base figure.
    """

    __tablename__ = "financial_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Core fields
    entry_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    entry_type: Mapped[EntryKind] = mapped_column(Enum(EntryKind), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Original amount
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False)

    # Amount in base currency, filled in once the exchange rate is known
    base_amount: Mapped[Decimal | None] = mapped_column(Numeric(19, 2), nullable=True)
    base_currency_code: Mapped[str | None] = mapped_column(String(3), nullable=True)

    # Grouping
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("financial_categories.id"), nullable=False
    )
    main_category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("main_categories.id"), nullable=True
    )
    who_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("who.id"), nullable=True
    )

    # Relationships
    category: Mapped["FinancialCategory"] = relationship(
        "FinancialCategory", back_populates="entries"
    )

    def to_report_entry(self) -> ReportEntry:
        """Read-only view handed to the report generators."""
        base = None
        if self.base_amount is not None and self.base_currency_code:
            base = Money.of(self.base_amount, self.base_currency_code)

        return ReportEntry(
            entry_date=self.entry_date,
            kind=self.entry_type,
            category_id=self.category_id,
            category_name=self.category.name,
            category_is_technical=bool(self.category.is_technical),
            classification_id=self.main_category_id,
            actor_id=self.who_id,
            base_amount=base,
        )

    def __repr__(self) -> str:
        return (
            f"<FinancialEntry(id={self.id}, date={self.entry_date}, "
            f"type={self.entry_type.value}, amount={self.amount} {self.currency_code})>"
        )
