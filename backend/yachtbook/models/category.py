from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class FinancialCategory(Base, TimestampMixin):
    """
    Category an entry is booked under (fuel, marina fees, crew salary, ...).
    Forms level 2 of the expense tree.
    """

    __tablename__ = "financial_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Technical (engine, hull, electronics) vs. operational spending
    is_technical: Mapped[bool] = mapped_column(Boolean, default=False)

    # Display order for UI
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    entries: Mapped[list["FinancialEntry"]] = relationship(
        "FinancialEntry", back_populates="category"
    )

    def __repr__(self) -> str:
        return f"<FinancialCategory(id={self.id}, name='{self.name}')>"
