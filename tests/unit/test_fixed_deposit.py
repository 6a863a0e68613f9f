"""
Тесты для Fixed Deposit — сумма к погашению и итоги по вкладам
"""

import pytest

from expensebook.core.domain import FixedDepositSnapshot
from expensebook.core.math.fixed_deposit import (
    calculate_maturity_amount,
    suggest_maturity_amount,
    summarize_deposits,
)


class TestMaturityAmount:
    """Простые проценты за срок вклада."""

    def test_one_year(self):
        assert calculate_maturity_amount(100000, 7.0, 12) == pytest.approx(107000.0)

    def test_eighteen_months(self):
        assert calculate_maturity_amount(50000, 6.5, 18) == pytest.approx(54875.0)

    def test_zero_rate(self):
        assert calculate_maturity_amount(100000, 0.0, 24) == 100000.0

    def test_negative_inputs_clamped(self):
        assert calculate_maturity_amount(-100, 7.0, 12) == 0.0
        assert calculate_maturity_amount(1000, -7.0, 12) == 1000.0


class TestSuggestMaturityAmount:
    """Подсказка для формы вклада."""

    def test_rounded_to_cents(self):
        snapshot = FixedDepositSnapshot(principal=10000, annual_rate_percent=7.1, tenure_months=7)
        # 10000 * (1 + 0.071 * 7 / 12) = 10414.1666...
        assert suggest_maturity_amount(snapshot) == 10414.17

    @pytest.mark.parametrize(
        "principal, rate, tenure",
        [
            (0, 7, 12),
            (10000, 0, 12),
            (10000, 7, 0),
            ("", "7", "12"),
        ],
    )
    def test_incomplete_form_returns_none(self, principal, rate, tenure):
        snapshot = FixedDepositSnapshot(principal=principal, annual_rate_percent=rate, tenure_months=tenure)
        assert suggest_maturity_amount(snapshot) is None


class TestFixedDepositSnapshot:
    """Тесты FixedDepositSnapshot."""

    def test_from_record(self):
        snapshot = FixedDepositSnapshot.from_record(
            {"principalAmount": "250000", "interestRate": 7.25, "tenureMonths": 36, "maturityAmount": None}
        )
        assert snapshot.principal == 250000.0
        assert snapshot.tenure_months == 36.0
        assert snapshot.maturity_amount is None

    def test_empty_maturity_is_none(self):
        assert FixedDepositSnapshot(maturity_amount="").maturity_amount is None
        assert FixedDepositSnapshot(maturity_amount="   ").maturity_amount is None

    def test_negative_maturity_clamped(self):
        assert FixedDepositSnapshot(maturity_amount=-5).maturity_amount == 0.0


class TestSummarizeDeposits:
    """Итоги по вкладам."""

    def test_uses_stored_maturity(self):
        deposits = [
            FixedDepositSnapshot(principal=100000, annual_rate_percent=7, tenure_months=12, maturity_amount=107500),
        ]
        summary = summarize_deposits(deposits)
        assert summary.total_maturity_value == 107500.0
        assert summary.total_interest_earned == 7500.0

    def test_computes_missing_maturity(self):
        deposits = [
            FixedDepositSnapshot(principal=100000, annual_rate_percent=7, tenure_months=12),
            FixedDepositSnapshot(principal=50000, annual_rate_percent=6.5, tenure_months=18, maturity_amount=54875),
        ]
        summary = summarize_deposits(deposits)

        assert summary.deposit_count == 2
        assert summary.total_principal == 150000.0
        assert summary.total_maturity_value == pytest.approx(161875.0)
        assert summary.total_interest_earned == pytest.approx(11875.0)
        assert summary.average_rate_percent == pytest.approx(6.75)

    def test_empty(self):
        summary = summarize_deposits([])
        assert summary.deposit_count == 0
        assert summary.total_principal == 0.0
        assert summary.average_rate_percent == 0.0

    def test_accepts_generator(self):
        summary = summarize_deposits(
            FixedDepositSnapshot(principal=p, annual_rate_percent=5, tenure_months=12) for p in (1000, 2000)
        )
        assert summary.deposit_count == 2
        assert summary.average_rate_percent == 5.0
