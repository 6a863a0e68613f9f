"""
Core math modules для expensebook

Калькулятор поля суммы, погашение займов, срочные вклады.
"""

# Amount Expression
from expensebook.core.math.amount_expression import (
    INVALID,
    MAX_NESTING_DEPTH,
    AmountCheck,
    AmountCheckStatus,
    AmountResult,
    Invalid,
    accept_amount_keystroke,
    check_amount_input,
    evaluate_amount_expression,
    exceeds_amount_limit,
    exceeds_decimal_precision,
    is_allowed_amount_input,
)

# Loan Payoff
from expensebook.core.math.loan_payoff import (
    calculate_loan_payoff,
    minimum_amortizing_payment,
    monthly_rate,
    remaining_principal,
)

# Fixed Deposit
from expensebook.core.math.fixed_deposit import (
    DepositPortfolioSummary,
    calculate_maturity_amount,
    suggest_maturity_amount,
    summarize_deposits,
)

__all__ = [
    # Amount Expression — Constants
    "INVALID",
    "MAX_NESTING_DEPTH",
    # Amount Expression — Types
    "AmountCheck",
    "AmountCheckStatus",
    "AmountResult",
    "Invalid",
    # Amount Expression — Functions
    "accept_amount_keystroke",
    "check_amount_input",
    "evaluate_amount_expression",
    "exceeds_amount_limit",
    "exceeds_decimal_precision",
    "is_allowed_amount_input",
    # Loan Payoff
    "calculate_loan_payoff",
    "minimum_amortizing_payment",
    "monthly_rate",
    "remaining_principal",
    # Fixed Deposit
    "DepositPortfolioSummary",
    "calculate_maturity_amount",
    "suggest_maturity_amount",
    "summarize_deposits",
]
