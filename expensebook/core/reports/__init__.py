"""
Отчёты по спискам записей: сортировка таблицы займов и итоги.
"""

from expensebook.core.reports.loan_table import (
    LoanPortfolioSummary,
    LoanRow,
    LoanSortKey,
    filter_loans,
    sort_loans,
    summarize_loans,
)

__all__ = [
    "LoanPortfolioSummary",
    "LoanRow",
    "LoanSortKey",
    "filter_loans",
    "sort_loans",
    "summarize_loans",
]
