"""
Loan Payoff — оценка погашения займа фиксированным платежом

По снимку займа вычисляет остаток основного долга, оставшиеся проценты,
сумму оставшихся платежей и число месяцев до полного погашения.

ФОРМУЛЫ:
    remaining = max(0, principal - paid_amount)
    monthly_rate = annual_rate_percent / 100 / 12

    Аннуитет (payment > 0, monthly_rate > 0):
        denominator = payment - remaining * monthly_rate
        n = ceil( ln(payment / denominator) / ln(1 + monthly_rate) )
        total = n * payment
        interest = total - remaining

    Без процентов (monthly_rate == 0):
        n = ceil(remaining / payment)

    Без платежа (payment <= 0), простые проценты за год:
        interest = remaining * annual_rate_percent / 100

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. remaining_principal >= 0
2. remaining == 0 → всегда "погашен", независимо от остальных входов
3. denominator <= 0 → PayoffMonths.unbounded(), суммы None (не inf, не NaN)
4. Неполный последний месяц округляется вверх (ceil)
5. Не бросает исключений для конечных неотрицательных входов
"""

import math
from typing import Optional

import structlog

from expensebook.core.domain.loan import LoanPayoffResult, LoanSnapshot, PayoffMonths
from expensebook.core.numeric_limits import MONTHS_PER_YEAR, clamp_non_negative, is_valid_float

logger = structlog.get_logger(__name__)


def monthly_rate(annual_rate_percent: float) -> float:
    """
    Месячная ставка из годовой в процентах.

    Examples:
        >>> monthly_rate(12.0)
        0.01
        >>> monthly_rate(0.0)
        0.0
    """
    return clamp_non_negative(annual_rate_percent) / 100 / MONTHS_PER_YEAR


def remaining_principal(snapshot: LoanSnapshot) -> float:
    """Остаток основного долга, никогда не отрицательный."""
    return max(0.0, snapshot.principal - snapshot.paid_amount)


def minimum_amortizing_payment(snapshot: LoanSnapshot) -> float:
    """
    Проценты первого месяца на текущий остаток.

    Платёж строго больше этого значения гасит займ за конечное число
    месяцев; платёж меньше или равный никогда не погасит займ.
    """
    return remaining_principal(snapshot) * monthly_rate(snapshot.annual_rate_percent)


def calculate_loan_payoff(snapshot: LoanSnapshot) -> LoanPayoffResult:
    """
    Расчёт погашения займа.

    Args:
        snapshot: Снимок займа (principal, paid_amount, annual_rate_percent,
            monthly_payment)

    Returns:
        LoanPayoffResult. months_left:
        - FINITE(0) если займ погашен
        - NOT_APPLICABLE если платёж не задан (оценка простыми процентами)
        - UNBOUNDED если платёж не покрывает проценты первого месяца
        - FINITE(n) иначе

    Examples:
        >>> r = calculate_loan_payoff(LoanSnapshot(principal=12000, monthly_payment=1000))
        >>> r.months_left.months, r.remaining_interest
        (12, 0.0)
    """
    remaining = remaining_principal(snapshot)

    if remaining <= 0:
        return LoanPayoffResult(
            remaining_principal=0.0,
            remaining_interest=0.0,
            total_remaining_payments=0.0,
            months_left=PayoffMonths.finite(0),
            is_paid_off=True,
        )

    rate = monthly_rate(snapshot.annual_rate_percent)
    payment = snapshot.monthly_payment

    if payment <= 0:
        # Платёж неизвестен: годовые простые проценты, срок не определён
        interest = remaining * (snapshot.annual_rate_percent / 100)
        return LoanPayoffResult(
            remaining_principal=remaining,
            remaining_interest=interest,
            total_remaining_payments=remaining + interest,
            months_left=PayoffMonths.not_applicable(),
            is_paid_off=False,
        )

    if rate == 0:
        months = _whole_months(remaining / payment)
        if months is None:
            return _never_paid_off(remaining)
        return LoanPayoffResult(
            remaining_principal=remaining,
            remaining_interest=0.0,
            total_remaining_payments=remaining,
            months_left=PayoffMonths.finite(months),
            is_paid_off=False,
        )

    denominator = payment - remaining * rate
    if denominator <= 0:
        logger.debug(
            "loan_payment_below_interest",
            remaining=remaining,
            monthly_payment=payment,
            first_month_interest=remaining * rate,
        )
        return _never_paid_off(remaining)

    # ln(payment / denominator) == -ln(1 - remaining * rate / payment);
    # log1p не теряет точность при малых ставках
    interest_share = remaining * rate / payment
    if interest_share >= 1:
        return _never_paid_off(remaining)

    months = _whole_months(-math.log1p(-interest_share) / math.log1p(rate))
    if months is None:
        return _never_paid_off(remaining)

    total = months * payment
    if not is_valid_float(total):
        return _never_paid_off(remaining)

    return LoanPayoffResult(
        remaining_principal=remaining,
        remaining_interest=total - remaining,
        total_remaining_payments=total,
        months_left=PayoffMonths.finite(months),
        is_paid_off=False,
    )


def _whole_months(exact_months: float) -> Optional[int]:
    # Хотя бы один платёж, если остаток положительный
    if not is_valid_float(exact_months):
        return None
    return max(1, math.ceil(exact_months))


def _never_paid_off(remaining: float) -> LoanPayoffResult:
    return LoanPayoffResult(
        remaining_principal=remaining,
        remaining_interest=None,
        total_remaining_payments=None,
        months_left=PayoffMonths.unbounded(),
        is_paid_off=False,
    )
