"""
Money -- immutable monetary amount paired with its ISO 4217 currency.

Amounts are non-negative Decimals held at a fixed scale of two decimals.
Every construction and every arithmetic result is rounded ROUND_HALF_EVEN.
Binary operations and comparisons refuse to mix currencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from .currency import CurrencyRegistry
from .exceptions import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidCurrencyError,
    InvalidExchangeRateError,
    MoneyError,
    NegativeAmountError,
)

SCALE = 2
ROUNDING = ROUND_HALF_EVEN
_QUANTUM = Decimal(1).scaleb(-SCALE)  # 0.01


def _to_decimal(value: Decimal | int | str | float) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() first so floats keep their printed value, not their binary one
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise MoneyError(f"Invalid amount: {value!r}") from e
    if not result.is_finite():
        raise MoneyError(f"Invalid amount: {value!r}")
    return result


@dataclass(frozen=True)
class Money:
    """
    Monetary value object.

    Guarantees:
        - amount is a Decimal with exactly two decimal places, never negative
        - currency_code is an uppercase ISO 4217 code
        - arithmetic returns new instances; the original is never changed
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self) -> None:
        if self.amount is None:
            raise MoneyError("Amount cannot be None")
        amount = _to_decimal(self.amount)
        if amount < 0:
            raise NegativeAmountError(amount)

        if not isinstance(self.currency_code, str) or not CurrencyRegistry.is_valid(self.currency_code):
            raise InvalidCurrencyError(self.currency_code)

        object.__setattr__(self, "amount", amount.quantize(_QUANTUM, rounding=ROUNDING))
        object.__setattr__(self, "currency_code", CurrencyRegistry.normalize(self.currency_code))

    # --- Factories ---

    @classmethod
    def of(cls, amount: Decimal | int | str, currency_code: str) -> Money:
        return cls(_to_decimal(amount), currency_code)

    @classmethod
    def of_major(cls, amount_major: int, currency_code: str) -> Money:
        """Whole currency units, e.g. ``of_major(12, "EUR")`` is 12.00 EUR."""
        return cls(Decimal(amount_major), currency_code)

    @classmethod
    def of_minor(cls, amount_minor: int, currency_code: str) -> Money:
        """Minor units (cents), e.g. ``of_minor(1250, "EUR")`` is 12.50 EUR."""
        return cls(Decimal(amount_minor).scaleb(-SCALE), currency_code)

    @classmethod
    def zero(cls, currency_code: str) -> Money:
        return cls(Decimal(0), currency_code)

    # --- Arithmetic ---

    def add(self, other: Money) -> Money:
        self._require_same_currency(other)
        return Money(self.amount + other.amount, self.currency_code)

    def subtract(self, other: Money) -> Money:
        self._require_same_currency(other)
        return Money(self.amount - other.amount, self.currency_code)

    def multiply(self, multiplier: Decimal | int | str) -> Money:
        return Money(self.amount * _to_decimal(multiplier), self.currency_code)

    def divide(self, divisor: Decimal | int | str) -> Money:
        divisor = _to_decimal(divisor)
        if divisor == 0:
            raise DivisionByZeroError()
        return Money(self.amount / divisor, self.currency_code)

    def abs(self) -> Money:
        return Money(abs(self.amount), self.currency_code)

    def convert_using(self, rate: Decimal | int | str, target_currency: str) -> Money:
        """
        Convert to another currency.

        ``rate`` is how many units of ``target_currency`` one unit of this
        currency buys. The product is rounded to two decimals half-even.
        """
        if rate is None:
            raise InvalidExchangeRateError(rate)
        rate = _to_decimal(rate)
        if rate <= 0:
            raise InvalidExchangeRateError(rate)
        converted = (self.amount * rate).quantize(_QUANTUM, rounding=ROUNDING)
        return Money(converted, target_currency)

    # --- Queries ---

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def is_greater_than(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount >= other.amount

    def is_less_than(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount < other.amount

    def is_less_than_or_equal(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount <= other.amount

    def has_same_currency(self, other: Money) -> bool:
        return self.currency_code == other.currency_code

    def is_currency(self, currency_code: str) -> bool:
        return self.currency_code == CurrencyRegistry.normalize(currency_code)

    @property
    def amount_major(self) -> int:
        """Whole units, truncated toward zero."""
        return int(self.amount)

    @property
    def amount_minor(self) -> int:
        return int(self.amount.scaleb(SCALE))

    def format(self) -> str:
        return f"{self.currency_code} {self.amount:,.2f}"

    # --- Operators ---

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other) -> Money:
        # Lets sum() start from its default 0
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor: Decimal | int) -> Money:
        if not isinstance(factor, (Decimal, int)):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: Decimal | int) -> Money:
        if not isinstance(divisor, (Decimal, int)):
            return NotImplemented
        return self.divide(divisor)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_less_than_or_equal(other)

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_greater_than_or_equal(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency_code}"

    def __repr__(self) -> str:
        return f"Money({str(self.amount)!r}, {self.currency_code!r})"

    def _require_same_currency(self, other: Money) -> None:
        if not self.has_same_currency(other):
            raise CurrencyMismatchError(self.currency_code, other.currency_code)
