"""
Loan Table — сортировка, фильтр и итоги по списку займов

Расчёт по каждой строке делегируется calculate_loan_payoff. Строки с
UNBOUNDED ("платёж не покрывает проценты") сортируются и суммируются через
тег, без подстановки float('inf').
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel, Field

from expensebook.core.domain.loan import LoanPayoffResult, LoanSnapshot, PayoffMonthsKind
from expensebook.core.math.loan_payoff import calculate_loan_payoff


# =============================================================================
# ENUMS
# =============================================================================


class LoanSortKey(str, Enum):
    """Критерий сортировки таблицы займов."""

    MONTHS_LEFT = "monthsLeft"  # дольше всего гасить — первыми
    TOTAL_REMAINING = "totalRemaining"  # больше всего платить — первыми
    REMAINING = "remaining"  # больший остаток долга — первым
    NAME = "name"  # по алфавиту
    INTEREST_RATE = "interestRate"  # большая ставка — первой


# =============================================================================
# LOAN ROW
# =============================================================================


class LoanRow(BaseModel):
    """Строка таблицы займов."""

    name: str = Field("", description="Название займа")
    lender: str = Field("", description="Кредитор")
    snapshot: LoanSnapshot = Field(default_factory=LoanSnapshot)

    model_config = {"frozen": True}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LoanRow":
        return cls(
            name=str(record.get("name") or ""),
            lender=str(record.get("lender") or ""),
            snapshot=LoanSnapshot.from_record(record),
        )

    def payoff(self) -> LoanPayoffResult:
        return calculate_loan_payoff(self.snapshot)


# =============================================================================
# FILTER / SORT
# =============================================================================


def filter_loans(rows: Iterable[LoanRow], query: str) -> list[LoanRow]:
    """Подстрока без учёта регистра по name или lender; пустой запрос — все строки."""
    needle = query.strip().lower()
    if not needle:
        return list(rows)
    return [row for row in rows if needle in row.name.lower() or needle in row.lender.lower()]


def _months_left_key(result: LoanPayoffResult) -> tuple[int, float]:
    months = result.months_left
    if months.kind is PayoffMonthsKind.UNBOUNDED:
        return (0, 0.0)
    if months.kind is PayoffMonthsKind.FINITE:
        return (1, -float(months.months))
    return (2, 0.0)


def _total_remaining_key(result: LoanPayoffResult) -> tuple[int, float]:
    if result.total_remaining_payments is None:
        return (0, 0.0)
    return (1, -result.total_remaining_payments)


def sort_loans(rows: Iterable[LoanRow], key: Union[LoanSortKey, str]) -> list[LoanRow]:
    """
    Сортировка таблицы займов.

    Все критерии, кроме NAME, — по убыванию. Для MONTHS_LEFT и
    TOTAL_REMAINING займы, которые никогда не погасятся, идут первыми;
    займы без заданного платежа (NOT_APPLICABLE) — последними.
    Сортировка стабильная. key может быть строкой ("monthsLeft", "name", ...);
    неизвестный ключ → ValueError.
    """
    key = LoanSortKey(key)
    rows = list(rows)

    if key is LoanSortKey.NAME:
        return sorted(rows, key=lambda row: row.name.casefold())

    if key is LoanSortKey.INTEREST_RATE:
        return sorted(rows, key=lambda row: -row.snapshot.annual_rate_percent)

    pairs = [(row, row.payoff()) for row in rows]

    if key is LoanSortKey.REMAINING:
        pairs.sort(key=lambda pair: -pair[1].remaining_principal)
    elif key is LoanSortKey.MONTHS_LEFT:
        pairs.sort(key=lambda pair: _months_left_key(pair[1]))
    else:
        pairs.sort(key=lambda pair: _total_remaining_key(pair[1]))

    return [row for row, _ in pairs]


# =============================================================================
# SUMMARY
# =============================================================================


@dataclass(frozen=True)
class LoanPortfolioSummary:
    """Итоги по всем займам для карточек над таблицей."""

    total_principal: float
    total_paid: float
    remaining_principal: float
    total_remaining_interest: float  # UNBOUNDED строки не учитываются
    total_liability: float  # UNBOUNDED строки учитываются остатком долга
    unbounded_count: int
    loan_count: int


def summarize_loans(rows: Iterable[LoanRow]) -> LoanPortfolioSummary:
    """
    Итоги по займам.

    remaining_principal суммирует остатки по строкам, поэтому переплата по
    одному займу не уменьшает долг по другим.
    """
    total_principal = 0.0
    total_paid = 0.0
    remaining = 0.0
    interest = 0.0
    liability = 0.0
    unbounded = 0
    count = 0

    for row in rows:
        result = row.payoff()
        count += 1
        total_principal += row.snapshot.principal
        total_paid += row.snapshot.paid_amount
        remaining += result.remaining_principal

        if result.months_left.is_unbounded:
            unbounded += 1
            liability += result.remaining_principal
            continue

        interest += result.remaining_interest or 0.0
        liability += result.total_remaining_payments or 0.0

    return LoanPortfolioSummary(
        total_principal=total_principal,
        total_paid=total_paid,
        remaining_principal=remaining,
        total_remaining_interest=interest,
        total_liability=liability,
        unbounded_count=unbounded,
        loan_count=count,
    )
