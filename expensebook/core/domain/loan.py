"""
Loan — снимок займа и результат расчёта погашения

Immutable модели:
- LoanSnapshot — входные данные расчёта (из записи займа)
- PayoffMonths — tagged variant "сколько месяцев осталось"
- LoanPayoffResult — производный результат calculate_loan_payoff

"Никогда не погасится" представлено тегом UNBOUNDED, а не float('inf'),
чтобы бесконечность не протекала в форматирование, сортировку и суммы.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

import structlog
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from expensebook.core.numeric_limits import clamp_non_negative, coerce_form_number

logger = structlog.get_logger(__name__)


# =============================================================================
# LOAN SNAPSHOT
# =============================================================================


class LoanSnapshot(BaseModel):
    """
    Снимок займа на момент расчёта.

    Значения приходят из редактируемых полей формы, поэтому валидаторы не
    отвергают, а клампят: NaN/Inf, мусор и отрицательные значения → 0.0.
    """

    principal: float = Field(0.0, ge=0, description="Исходная сумма займа")
    paid_amount: float = Field(0.0, ge=0, description="Уже выплачено")
    annual_rate_percent: float = Field(0.0, ge=0, description="Годовая ставка, %")
    monthly_payment: float = Field(0.0, ge=0, description="Фиксированный ежемесячный платёж (EMI)")

    model_config = {"frozen": True}

    @field_validator(
        "principal", "paid_amount", "annual_rate_percent", "monthly_payment", mode="before"
    )
    @classmethod
    def clamp_form_value(cls, v: Any, info: ValidationInfo) -> float:
        clamped = clamp_non_negative(coerce_form_number(v))

        # Пустое поле — штатный 0, остальное логируем
        if v is not None and str(v).strip() != "":
            try:
                raw = float(v)
            except (TypeError, ValueError):
                raw = None
            if raw != clamped:
                logger.warning(
                    "loan_value_clamped", field=info.field_name, raw=repr(v), value=clamped
                )

        return clamped

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LoanSnapshot":
        """
        Построение снимка из сохранённой записи займа.

        Ожидаемые ключи: amount, paidAmount, interestRate, monthlyPayment.
        Отсутствующие ключи → 0.
        """
        return cls(
            principal=record.get("amount"),
            paid_amount=record.get("paidAmount"),
            annual_rate_percent=record.get("interestRate"),
            monthly_payment=record.get("monthlyPayment"),
        )


# =============================================================================
# PAYOFF MONTHS (TAGGED VARIANT)
# =============================================================================


class PayoffMonthsKind(str, Enum):
    """Вид ответа на вопрос "сколько месяцев осталось"."""

    FINITE = "finite"
    UNBOUNDED = "unbounded"  # платёж не покрывает проценты
    NOT_APPLICABLE = "not_applicable"  # платёж не задан


_KIND_ORDER = {
    PayoffMonthsKind.FINITE: 0,
    PayoffMonthsKind.NOT_APPLICABLE: 1,
    PayoffMonthsKind.UNBOUNDED: 2,
}


@dataclass(frozen=True)
class PayoffMonths:
    """
    Количество оставшихся месяцев.

    months задан только для FINITE. Для сортировки используйте sort_key():
    FINITE по возрастанию месяцев, затем NOT_APPLICABLE, затем UNBOUNDED.
    """

    kind: PayoffMonthsKind
    months: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is PayoffMonthsKind.FINITE:
            if self.months is None or self.months < 0:
                raise ValueError(f"finite payoff months must be >= 0, got {self.months}")
        elif self.months is not None:
            raise ValueError(f"{self.kind.value} payoff months must not carry a count")

    @classmethod
    def finite(cls, months: int) -> "PayoffMonths":
        return cls(PayoffMonthsKind.FINITE, int(months))

    @classmethod
    def unbounded(cls) -> "PayoffMonths":
        return cls(PayoffMonthsKind.UNBOUNDED)

    @classmethod
    def not_applicable(cls) -> "PayoffMonths":
        return cls(PayoffMonthsKind.NOT_APPLICABLE)

    @property
    def is_finite(self) -> bool:
        return self.kind is PayoffMonthsKind.FINITE

    @property
    def is_unbounded(self) -> bool:
        return self.kind is PayoffMonthsKind.UNBOUNDED

    def sort_key(self) -> tuple[int, int]:
        return (_KIND_ORDER[self.kind], self.months or 0)

    def label(self) -> str:
        """Подпись для таблицы займов: "Paid", "14 mo", "Insufficient", "N/A"."""
        if self.kind is PayoffMonthsKind.UNBOUNDED:
            return "Insufficient"
        if self.kind is PayoffMonthsKind.NOT_APPLICABLE:
            return "N/A"
        if self.months == 0:
            return "Paid"
        return f"{self.months} mo"


# =============================================================================
# LOAN PAYOFF RESULT
# =============================================================================


@dataclass(frozen=True)
class LoanPayoffResult:
    """
    Результат расчёта погашения.

    remaining_interest и total_remaining_payments равны None только вместе
    с months_left.is_unbounded: конечного ответа не существует.
    """

    remaining_principal: float
    remaining_interest: Optional[float]
    total_remaining_payments: Optional[float]
    months_left: PayoffMonths
    is_paid_off: bool

    @property
    def is_amortizing(self) -> bool:
        """True если фиксированный платёж гасит займ за конечное число месяцев."""
        return self.months_left.is_finite and not self.is_paid_off
