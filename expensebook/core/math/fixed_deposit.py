"""
Fixed Deposit — сумма к погашению срочного вклада

Простые проценты за срок вклада:
    maturity = principal * (1 + annual_rate_percent / 100 * tenure_months / 12)
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from expensebook.core.domain.fixed_deposit import FixedDepositSnapshot
from expensebook.core.numeric_limits import MONTHS_PER_YEAR, clamp_non_negative, round_money


def calculate_maturity_amount(
    principal: float,
    annual_rate_percent: float,
    tenure_months: float,
) -> float:
    """
    Сумма к погашению по простым процентам.

    Examples:
        >>> round(calculate_maturity_amount(100000, 7.0, 12), 2)
        107000.0
        >>> calculate_maturity_amount(100000, 0.0, 12)
        100000.0
    """
    principal = clamp_non_negative(principal)
    years = clamp_non_negative(tenure_months) / MONTHS_PER_YEAR
    return principal * (1 + clamp_non_negative(annual_rate_percent) / 100 * years)


def suggest_maturity_amount(snapshot: FixedDepositSnapshot) -> Optional[float]:
    """
    Подсказка суммы к погашению для формы вклада.

    Возвращает None, пока не заполнены все три поля (сумма, ставка, срок):
    форма не должна затирать введённое значение нулём.
    """
    if snapshot.principal <= 0 or snapshot.annual_rate_percent <= 0 or snapshot.tenure_months <= 0:
        return None

    return round_money(
        calculate_maturity_amount(
            snapshot.principal, snapshot.annual_rate_percent, snapshot.tenure_months
        )
    )


@dataclass(frozen=True)
class DepositPortfolioSummary:
    """Итоги по всем вкладам."""

    total_principal: float
    total_maturity_value: float
    total_interest_earned: float
    average_rate_percent: float
    deposit_count: int


def summarize_deposits(deposits: Iterable[FixedDepositSnapshot]) -> DepositPortfolioSummary:
    """
    Итоги для карточек на странице вкладов.

    Для вкладов без сохранённой суммы к погашению она рассчитывается.
    Средняя ставка невзвешенная; для пустого списка 0.
    """
    deposits = list(deposits)

    total_principal = 0.0
    total_maturity = 0.0
    total_rate = 0.0

    for deposit in deposits:
        maturity = deposit.maturity_amount
        if maturity is None:
            maturity = calculate_maturity_amount(
                deposit.principal, deposit.annual_rate_percent, deposit.tenure_months
            )
        total_principal += deposit.principal
        total_maturity += maturity
        total_rate += deposit.annual_rate_percent

    average_rate = total_rate / len(deposits) if deposits else 0.0

    return DepositPortfolioSummary(
        total_principal=total_principal,
        total_maturity_value=total_maturity,
        total_interest_earned=total_maturity - total_principal,
        average_rate_percent=average_rate,
        deposit_count=len(deposits),
    )
