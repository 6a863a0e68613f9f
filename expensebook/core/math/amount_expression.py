"""
Amount Expression — калькулятор для поля суммы

Пользователь может вводить в поле amount не только число, но и
арифметическое выражение: "120+45", "50*10%", "(10+5)*2". Модуль вычисляет
такое выражение в одну конечную сумму или сообщает, что это невозможно.

Грамматика (стандартный приоритет, слева направо внутри уровня):

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := unary ('%')*
    unary      := ('+' | '-') unary | primary
    primary    := '(' expression ')' | number
    number     := digits ('.' digits?)? | '.' digits

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибки пользовательского ввода никогда не бросают исключение: возвращается INVALID
2. Парсер создаётся заново на каждый вызов (нет разделяемого состояния)
3. Деление на ноль → INVALID (не Inf)
4. Выражение должно быть разобрано целиком, хвост → INVALID
5. Лимиты суммы и точности проверяются по сырым токенам строки
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional, Union

import structlog

from expensebook.core.numeric_limits import (
    ALLOWED_AMOUNT_INPUT_PATTERN,
    DEFAULT_AMOUNT_LIMITS,
    NUMERIC_TOKEN_PATTERN,
    SPLIT_NUMBER_PATTERN,
    WHITESPACE_PATTERN,
    AmountLimits,
    is_valid_float,
)

logger = structlog.get_logger(__name__)

# Предел вложенности скобок и унарных знаков ("((((1))))", "----1")
MAX_NESTING_DEPTH: Final[int] = 64


# =============================================================================
# РЕЗУЛЬТАТ "НЕВОЗМОЖНО ВЫЧИСЛИТЬ"
# =============================================================================


class Invalid(Enum):
    """
    Маркер "выражение не даёт числа".

    Единственное значение INVALID. Ложно в булевом контексте, но проверять
    его нужно через `is INVALID`: сумма 0.0 тоже ложна.
    """

    INVALID = "invalid"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID"


INVALID: Final = Invalid.INVALID

AmountResult = Union[float, Invalid]


class _InvalidExpression(Exception):
    """Внутренний сигнал парсера; наружу не выходит."""


# =============================================================================
# ПАРСЕР
# =============================================================================


class _AmountExpressionParser:
    """
    Рекурсивный спуск с вычислением на лету.

    Курсор живёт только внутри экземпляра; экземпляр одноразовый.
    """

    def __init__(self, source: str, max_decimal_places: int):
        self._source = source
        self._index = 0
        self._depth = 0
        self._max_decimal_places = max_decimal_places

    def parse(self) -> float:
        value = self._parse_expression()

        if self._index != len(self._source):
            raise _InvalidExpression(f"unexpected {self._peek()!r} at position {self._index}")

        if not is_valid_float(value):
            raise _InvalidExpression("result is not finite")

        return value

    def _peek(self) -> Optional[str]:
        if self._index < len(self._source):
            return self._source[self._index]
        return None

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise _InvalidExpression("nesting too deep")

    def _parse_expression(self) -> float:
        value = self._parse_term()

        while self._peek() in ("+", "-"):
            op = self._source[self._index]
            self._index += 1
            rhs = self._parse_term()
            value = value + rhs if op == "+" else value - rhs

        return value

    def _parse_term(self) -> float:
        value = self._parse_factor()

        while self._peek() in ("*", "/"):
            op = self._source[self._index]
            self._index += 1
            rhs = self._parse_factor()
            if op == "/":
                if rhs == 0:
                    raise _InvalidExpression("division by zero")
                value = value / rhs
            else:
                value = value * rhs

        return value

    def _parse_factor(self) -> float:
        value = self._parse_unary()

        # Постфиксный процент: "50%" → 0.5, "50%%" → 0.005
        while self._peek() == "%":
            value = value / 100
            self._index += 1

        return value

    def _parse_unary(self) -> float:
        op = self._peek()
        if op in ("+", "-"):
            self._index += 1
            self._enter()
            value = self._parse_unary()
            self._depth -= 1
            return value if op == "+" else -value
        return self._parse_primary()

    def _parse_primary(self) -> float:
        if self._peek() == "(":
            self._index += 1
            self._enter()
            value = self._parse_expression()
            if self._peek() != ")":
                raise _InvalidExpression("unbalanced parenthesis")
            self._index += 1
            self._depth -= 1
            return value
        return self._parse_number()

    def _parse_number(self) -> float:
        start = self._index
        has_dot = False

        while self._index < len(self._source):
            ch = self._source[self._index]
            if "0" <= ch <= "9":
                self._index += 1
                continue
            if ch == ".":
                if has_dot:
                    raise _InvalidExpression("number with two decimal points")
                has_dot = True
                self._index += 1
                continue
            break

        raw = self._source[start:self._index]
        if not raw or raw == ".":
            raise _InvalidExpression(f"expected number at position {start}")

        if has_dot and len(raw.partition(".")[2]) > self._max_decimal_places:
            raise _InvalidExpression(f"too many decimal places in {raw!r}")

        value = float(raw)
        if not is_valid_float(value):
            raise _InvalidExpression(f"number {raw!r} is not finite")

        return value


# =============================================================================
# ПУБЛИЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def _compact(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"amount expression must be str, got {type(text).__name__}")
    return WHITESPACE_PATTERN.sub("", text)


def evaluate_amount_expression(
    text: str,
    limits: AmountLimits = DEFAULT_AMOUNT_LIMITS,
) -> AmountResult:
    """
    Вычисление выражения из поля amount.

    Поддерживает +, -, *, /, постфиксный %, скобки и десятичные числа.
    Пробелы между токенами игнорируются, но "10 3" — это INVALID, а не 103.

    Args:
        text: Строка, введённая пользователем
        limits: Лимиты (используется max_decimal_places)

    Returns:
        Конечный float или INVALID

    Raises:
        TypeError: Если text не строка

    Examples:
        >>> evaluate_amount_expression("10+3")
        13.0
        >>> evaluate_amount_expression("50*10%")
        5.0
        >>> evaluate_amount_expression("(10+5)*2")
        30.0
        >>> evaluate_amount_expression("10/0")
        INVALID
    """
    source = _compact(text)
    if not source:
        return INVALID

    # Пробел разделяет токены: "10 3" — два числа подряд, а не 103
    if SPLIT_NUMBER_PATTERN.search(text):
        logger.debug("amount_expression_rejected", reason="numbers separated by whitespace")
        return INVALID

    parser = _AmountExpressionParser(source, limits.max_decimal_places)
    try:
        return parser.parse()
    except _InvalidExpression as exc:
        logger.debug("amount_expression_rejected", reason=str(exc), length=len(source))
        return INVALID


def exceeds_amount_limit(
    text: str,
    evaluated_result: Optional[AmountResult] = None,
    limits: AmountLimits = DEFAULT_AMOUNT_LIMITS,
) -> bool:
    """
    Проверка потолка суммы.

    True, если любой сырой числовой токен строки или итог вычисления по
    модулю больше limits.max_amount. Токены проверяются независимо от
    итога: "99999999999/99999999999" отвергается, хотя равно 1.

    Args:
        text: Строка выражения
        evaluated_result: Уже вычисленный результат (INVALID тоже считается
            вычисленным). None → выражение вычисляется здесь.
        limits: Лимиты

    Returns:
        True если потолок превышен
    """
    compact = _compact(text)
    if not compact:
        return False

    for token in NUMERIC_TOKEN_PATTERN.findall(text):
        token_value = float(token)
        if is_valid_float(token_value) and abs(token_value) > limits.max_amount:
            return True

    if evaluated_result is None:
        evaluated_result = evaluate_amount_expression(text, limits)

    if evaluated_result is INVALID:
        return False

    return abs(evaluated_result) > limits.max_amount


def exceeds_decimal_precision(
    text: str,
    limits: AmountLimits = DEFAULT_AMOUNT_LIMITS,
) -> bool:
    """
    True, если хотя бы один числовой токен имеет больше
    limits.max_decimal_places цифр после точки ("1.005" → True).
    """
    compact = _compact(text)
    if not compact:
        return False

    for token in NUMERIC_TOKEN_PATTERN.findall(text):
        _, dot, fraction = token.partition(".")
        if dot and len(fraction) > limits.max_decimal_places:
            return True

    return False


def is_allowed_amount_input(text: str) -> bool:
    """True, если строка состоит только из цифр, операторов, точек, скобок и пробелов."""
    if not isinstance(text, str):
        raise TypeError(f"amount input must be str, got {type(text).__name__}")
    return ALLOWED_AMOUNT_INPUT_PATTERN.match(text) is not None


# =============================================================================
# СВОДНАЯ ПРОВЕРКА ПОЛЯ
# =============================================================================


class AmountCheckStatus(str, Enum):
    """Вердикт проверки поля amount (порядок приоритета сверху вниз)."""

    OK = "ok"
    EMPTY = "empty"
    TOO_MANY_DECIMALS = "too_many_decimals"
    INVALID_EXPRESSION = "invalid_expression"
    TOO_LARGE = "too_large"


@dataclass(frozen=True)
class AmountCheck:
    """Результат сводной проверки поля amount."""

    status: AmountCheckStatus
    amount: AmountResult

    @property
    def is_valid(self) -> bool:
        return self.status is AmountCheckStatus.OK


def check_amount_input(
    text: str,
    limits: AmountLimits = DEFAULT_AMOUNT_LIMITS,
) -> AmountCheck:
    """
    Сводная проверка поля amount перед сохранением.

    Порядок: пусто → точность → синтаксис → потолок. Сообщение для
    пользователя выбирает вызывающая сторона по status.
    """
    amount = evaluate_amount_expression(text, limits)

    if not _compact(text):
        status = AmountCheckStatus.EMPTY
    elif exceeds_decimal_precision(text, limits):
        status = AmountCheckStatus.TOO_MANY_DECIMALS
    elif amount is INVALID:
        status = AmountCheckStatus.INVALID_EXPRESSION
    elif exceeds_amount_limit(text, amount, limits):
        status = AmountCheckStatus.TOO_LARGE
    else:
        status = AmountCheckStatus.OK

    return AmountCheck(status=status, amount=amount)


def accept_amount_keystroke(
    text: str,
    limits: AmountLimits = DEFAULT_AMOUNT_LIMITS,
) -> bool:
    """
    Можно ли принять новое содержимое поля при наборе.

    Недопустимые символы, лишние знаки после точки и превышение потолка
    блокируют изменение. Незаконченное выражение ("10+") допускается.
    """
    if not is_allowed_amount_input(text):
        return False
    if exceeds_decimal_precision(text, limits):
        return False
    return not exceeds_amount_limit(text, limits=limits)
