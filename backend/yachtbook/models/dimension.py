from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ..domain import DimensionRecord
from .base import Base, TimestampMixin


class _DimensionMixin:
    """Columns shared by the optional grouping dimensions."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_en: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_technical: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    def to_record(self) -> DimensionRecord:
        return DimensionRecord(
            id=self.id,
            name=self.name,
            name_en=self.name_en,
            is_technical=self.is_technical,
        )


class MainCategory(_DimensionMixin, Base, TimestampMixin):
    """
    Top-level classification of expenses (level 1 of the expense tree).
    """

    __tablename__ = "main_categories"

    def __repr__(self) -> str:
        return f"<MainCategory(id={self.id}, name='{self.name}')>"


class Who(_DimensionMixin, Base, TimestampMixin):
    """
    Who an expense was for: a crew member, a guest, the vessel itself
    (level 3 of the expense tree).
    """

    __tablename__ = "who"

    def __repr__(self) -> str:
        return f"<Who(id={self.id}, name='{self.name}')>"
