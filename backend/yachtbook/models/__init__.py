from .base import Base
from .category import FinancialCategory
from .dimension import MainCategory, Who
from .entry import FinancialEntry

__all__ = [
    "Base",
    "FinancialCategory",
    "MainCategory",
    "Who",
    "FinancialEntry",
]
