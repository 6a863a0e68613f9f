"""
Тесты для Loan Table — сортировка, фильтр и итоги по займам

Проверяет:
1. Фильтр по name/lender без учёта регистра
2. Сортировку по всем критериям, включая UNBOUNDED строки
3. Итоги: UNBOUNDED строки не дают бесконечных сумм
"""

import pytest

from expensebook.core.domain.loan import LoanSnapshot
from expensebook.core.reports.loan_table import (
    LoanRow,
    LoanSortKey,
    filter_loans,
    sort_loans,
    summarize_loans,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def home_loan():
    """Аннуитет: 40000 остаток, 10%, 2000/мес → 22 месяца."""
    return LoanRow(
        name="Home renovation",
        lender="City Bank",
        snapshot=LoanSnapshot(principal=50000, paid_amount=10000, annual_rate_percent=10, monthly_payment=2000),
    )


@pytest.fixture
def interest_free_loan():
    """Без процентов: 12 месяцев."""
    return LoanRow(
        name="Phone EMI",
        lender="Retailer",
        snapshot=LoanSnapshot(principal=12000, monthly_payment=1000),
    )


@pytest.fixture
def stuck_loan():
    """Платёж не покрывает проценты."""
    return LoanRow(
        name="business credit line",
        lender="Shadow Finance",
        snapshot=LoanSnapshot(principal=1000000, annual_rate_percent=12, monthly_payment=100),
    )


@pytest.fixture
def family_loan():
    """Платёж не задан: оценка простыми процентами."""
    return LoanRow(
        name="Family loan",
        lender="Uncle",
        snapshot=LoanSnapshot(principal=20000, paid_amount=5000, annual_rate_percent=5),
    )


@pytest.fixture
def paid_loan():
    """Погашен."""
    return LoanRow(
        name="Bike loan",
        lender="City Bank",
        snapshot=LoanSnapshot(principal=80000, paid_amount=80000, annual_rate_percent=11, monthly_payment=4000),
    )


@pytest.fixture
def all_loans(home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
    return [home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan]


# =============================================================================
# ТЕСТЫ: LoanRow
# =============================================================================


class TestLoanRow:
    """Тесты LoanRow."""

    def test_from_record(self):
        row = LoanRow.from_record(
            {"name": "Car", "lender": "Auto Bank", "amount": "300000", "paidAmount": None, "interestRate": 9}
        )
        assert row.name == "Car"
        assert row.lender == "Auto Bank"
        assert row.snapshot.principal == 300000.0
        assert row.snapshot.paid_amount == 0.0

    def test_from_record_missing_names(self):
        row = LoanRow.from_record({"amount": 100})
        assert row.name == ""
        assert row.lender == ""

    def test_payoff(self, interest_free_loan):
        assert interest_free_loan.payoff().months_left.months == 12


# =============================================================================
# ТЕСТЫ: Фильтр
# =============================================================================


class TestFilterLoans:
    """Тесты filter_loans."""

    def test_empty_query_returns_all(self, all_loans):
        assert filter_loans(all_loans, "") == all_loans
        assert filter_loans(all_loans, "   ") == all_loans

    def test_matches_name_case_insensitive(self, all_loans, home_loan):
        assert filter_loans(all_loans, "RENOVATION") == [home_loan]

    def test_matches_lender(self, all_loans, home_loan, paid_loan):
        assert filter_loans(all_loans, "city bank") == [home_loan, paid_loan]

    def test_no_match(self, all_loans):
        assert filter_loans(all_loans, "mortgage") == []


# =============================================================================
# ТЕСТЫ: Сортировка
# =============================================================================


class TestSortLoans:
    """Тесты sort_loans."""

    def test_months_left_longest_first(self, all_loans, home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
        ordered = sort_loans(all_loans, LoanSortKey.MONTHS_LEFT)
        assert ordered == [stuck_loan, home_loan, interest_free_loan, paid_loan, family_loan]

    def test_total_remaining_unbounded_first(self, all_loans, home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
        ordered = sort_loans(all_loans, LoanSortKey.TOTAL_REMAINING)
        # 44000 (home) > 15750 (family) > 12000 (phone) > 0 (paid)
        assert ordered == [stuck_loan, home_loan, family_loan, interest_free_loan, paid_loan]

    def test_remaining_principal_desc(self, all_loans, home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
        ordered = sort_loans(all_loans, LoanSortKey.REMAINING)
        assert ordered == [stuck_loan, home_loan, family_loan, interest_free_loan, paid_loan]

    def test_name_ascending_case_insensitive(self, all_loans, home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
        ordered = sort_loans(all_loans, LoanSortKey.NAME)
        assert ordered == [paid_loan, stuck_loan, family_loan, home_loan, interest_free_loan]

    def test_interest_rate_desc(self, all_loans, home_loan, interest_free_loan, stuck_loan, family_loan, paid_loan):
        ordered = sort_loans(all_loans, LoanSortKey.INTEREST_RATE)
        assert ordered == [stuck_loan, paid_loan, home_loan, family_loan, interest_free_loan]

    @pytest.mark.parametrize("raw, key", [(key.value, key) for key in LoanSortKey])
    def test_plain_string_key(self, all_loans, raw, key):
        assert sort_loans(all_loans, raw) == sort_loans(all_loans, key)

    def test_unknown_key_rejected(self, all_loans):
        with pytest.raises(ValueError):
            sort_loans(all_loans, "lender")

    def test_does_not_mutate_input(self, all_loans):
        original = list(all_loans)
        sort_loans(all_loans, LoanSortKey.NAME)
        assert all_loans == original

    def test_empty(self):
        assert sort_loans([], LoanSortKey.MONTHS_LEFT) == []


# =============================================================================
# ТЕСТЫ: Итоги
# =============================================================================


class TestSummarizeLoans:
    """Тесты summarize_loans."""

    def test_totals(self, all_loans):
        summary = summarize_loans(all_loans)

        assert summary.loan_count == 5
        assert summary.unbounded_count == 1
        assert summary.total_principal == pytest.approx(50000 + 12000 + 1000000 + 20000 + 80000)
        assert summary.total_paid == pytest.approx(10000 + 5000 + 80000)
        assert summary.remaining_principal == pytest.approx(40000 + 12000 + 1000000 + 15000)

    def test_interest_skips_unbounded(self, all_loans):
        summary = summarize_loans(all_loans)
        # home 4000 + family 750 (простые проценты 5% от 15000)
        assert summary.total_remaining_interest == pytest.approx(4750.0)

    def test_liability_uses_remaining_for_unbounded(self, all_loans):
        summary = summarize_loans(all_loans)
        # home 44000 + phone 12000 + stuck 1000000 + family 15750 + paid 0
        assert summary.total_liability == pytest.approx(1071750.0)

    def test_overpaid_loan_does_not_reduce_other_debt(self):
        rows = [
            LoanRow(name="a", snapshot=LoanSnapshot(principal=1000, paid_amount=1500)),
            LoanRow(name="b", snapshot=LoanSnapshot(principal=2000, paid_amount=0)),
        ]
        assert summarize_loans(rows).remaining_principal == 2000.0

    def test_empty(self):
        summary = summarize_loans([])
        assert summary.loan_count == 0
        assert summary.total_liability == 0.0
        assert summary.total_remaining_interest == 0.0
