"""
Typed errors raised by the reporting engine.

Every error carries a machine-readable ``code`` so callers can catch by type
and report by code. Contract violations on Money and Period also derive from
ValueError, since they reject bad input values.
"""


class YachtbookError(Exception):
    """Base exception for all yachtbook errors."""

    code: str = "YACHTBOOK_ERROR"


# Money


class MoneyError(YachtbookError, ValueError):
    """Base exception for monetary contract violations."""

    code: str = "MONEY_ERROR"


class InvalidCurrencyError(MoneyError):
    """Currency code is missing or not an ISO 4217 code."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency_code):
        self.currency_code = currency_code
        super().__init__(f"Invalid currency code: {currency_code!r}")


class NegativeAmountError(MoneyError):
    """Money amounts cannot be negative."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount cannot be negative: {amount}")


class CurrencyMismatchError(MoneyError):
    """Attempted a binary operation on two different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str):
        self.currency1 = currency1
        self.currency2 = currency2
        super().__init__(f"Currency mismatch: {currency1} vs {currency2}")


class InvalidExchangeRateError(MoneyError):
    """Exchange rates must be strictly positive."""

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Exchange rate must be positive, got {rate}")


class DivisionByZeroError(MoneyError):
    code: str = "DIVISION_BY_ZERO"

    def __init__(self):
        super().__init__("Cannot divide by zero")


# Periods


class PeriodError(YachtbookError, ValueError):
    code: str = "PERIOD_ERROR"


class InvalidPeriodError(PeriodError):
    """Period bounds are missing, inverted, or could not be parsed."""

    code: str = "INVALID_PERIOD"


# Report input


class ReportInputError(YachtbookError):
    """An entry handed to a report generator breaks the input contract."""

    code: str = "REPORT_INPUT_ERROR"


class MissingBaseAmountError(ReportInputError):
    """Entry reached a generator without its base-currency amount."""

    code: str = "MISSING_BASE_AMOUNT"

    def __init__(self, entry):
        self.entry = entry
        super().__init__(
            f"Entry dated {entry.entry_date} in category "
            f"{entry.category_name!r} has no base amount"
        )


class BaseCurrencyMismatchError(ReportInputError):
    """Entry's base amount is in a currency other than the report's base currency."""

    code: str = "BASE_CURRENCY_MISMATCH"

    def __init__(self, entry, base_currency: str):
        self.entry = entry
        self.base_currency = base_currency
        super().__init__(
            f"Entry dated {entry.entry_date} in category {entry.category_name!r} "
            f"has base currency {entry.base_amount.currency_code}, expected {base_currency}"
        )
