"""
FixedDeposit — снимок срочного вклада

Immutable Pydantic модель входных данных расчёта суммы к погашению.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from expensebook.core.numeric_limits import clamp_non_negative, coerce_form_number


class FixedDepositSnapshot(BaseModel):
    """
    Снимок вклада.

    maturity_amount — сумма к погашению, как она сохранена в записи
    (может быть не задана, если пользователь её ещё не рассчитал).
    """

    principal: float = Field(0.0, ge=0, description="Сумма вклада")
    annual_rate_percent: float = Field(0.0, ge=0, description="Годовая ставка, %")
    tenure_months: float = Field(0.0, ge=0, description="Срок вклада в месяцах")
    maturity_amount: Optional[float] = Field(None, ge=0, description="Сумма к погашению")

    model_config = {"frozen": True}

    @field_validator("principal", "annual_rate_percent", "tenure_months", mode="before")
    @classmethod
    def clamp_form_value(cls, v: Any) -> float:
        return clamp_non_negative(coerce_form_number(v))

    @field_validator("maturity_amount", mode="before")
    @classmethod
    def clamp_optional_amount(cls, v: Any) -> Optional[float]:
        if v is None or str(v).strip() == "":
            return None
        return clamp_non_negative(coerce_form_number(v))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "FixedDepositSnapshot":
        """Ключи записи: principalAmount, interestRate, tenureMonths, maturityAmount."""
        return cls(
            principal=record.get("principalAmount"),
            annual_rate_percent=record.get("interestRate"),
            tenure_months=record.get("tenureMonths"),
            maturity_amount=record.get("maturityAmount"),
        )
