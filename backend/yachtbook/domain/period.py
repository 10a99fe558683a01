from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass
from datetime import date

from .exceptions import InvalidPeriodError


class PeriodType(enum.Enum):
    """Granularity accepted by Period.parse."""
    YEAR = "YEAR"
    MONTH = "MONTH"


@dataclass(frozen=True)
class Period:
    """
    Inclusive date range.

    Both bounds belong to the period; start may equal end (a single day).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start is None or self.end is None:
            raise InvalidPeriodError("Period dates cannot be None")
        if self.start > self.end:
            raise InvalidPeriodError(
                f"Start date {self.start} must be on or before end date {self.end}"
            )

    @classmethod
    def of(cls, start: date, end: date) -> Period:
        return cls(start, end)

    @classmethod
    def of_year(cls, year: int) -> Period:
        return cls(date(year, 1, 1), date(year, 12, 31))

    @classmethod
    def of_month(cls, year: int, month: int) -> Period:
        try:
            last_day = calendar.monthrange(year, month)[1]
        except calendar.IllegalMonthError as e:
            raise InvalidPeriodError(f"Invalid month: {month}") from e
        return cls(date(year, month, 1), date(year, month, last_day))

    @classmethod
    def of_first_half(cls, year: int) -> Period:
        return cls(date(year, 1, 1), date(year, 6, 30))

    @classmethod
    def of_second_half(cls, year: int) -> Period:
        return cls(date(year, 7, 1), date(year, 12, 31))

    @classmethod
    def parse(cls, text: str, period_type: PeriodType | str) -> Period:
        """
        Parse a period string.

        ``"2024"`` with YEAR gives the whole year, ``"2024-03"`` with MONTH gives
        that month. Any other combination raises InvalidPeriodError.
        """
        try:
            period_type = PeriodType(period_type)
        except ValueError as e:
            raise InvalidPeriodError(f"Unknown period type: {period_type!r}") from e

        try:
            if period_type == PeriodType.YEAR:
                return cls.of_year(int(text))
            year_part, month_part = text.split("-")
            return cls.of_month(int(year_part), int(month_part))
        except (AttributeError, ValueError) as e:
            if isinstance(e, InvalidPeriodError):
                raise
            raise InvalidPeriodError(
                f"Cannot parse {text!r} as a {period_type.value} period"
            ) from e

    @property
    def year(self) -> int:
        """Year of the start date."""
        return self.start.year

    @property
    def days_count(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"
