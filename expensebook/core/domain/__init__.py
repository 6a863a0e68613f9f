"""
Domain models для expensebook

Снимки займа и вклада, типы результата расчёта погашения.
"""

from expensebook.core.domain.fixed_deposit import FixedDepositSnapshot
from expensebook.core.domain.loan import (
    LoanPayoffResult,
    LoanSnapshot,
    PayoffMonths,
    PayoffMonthsKind,
)

__all__ = [
    # Loan model
    "LoanSnapshot",
    "LoanPayoffResult",
    "PayoffMonths",
    "PayoffMonthsKind",
    # Fixed deposit model
    "FixedDepositSnapshot",
]
