"""
Numeric Limits — общие лимиты сумм и защитные float-примитивы

Модуль содержит:
- Жёсткий потолок суммы и лимит знаков после запятой для поля amount
- Регулярные выражения для посимвольного сканирования числовых токенов
- NaN/Inf санитизацию и приведение значений из пользовательских форм
- Округление денежных сумм

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют из форм в расчёты (заменяются на fallback)
2. Отрицательные значения из форм клампятся к 0
3. Все операции детерминированы и не имеют состояния
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Final

# =============================================================================
# ЛИМИТЫ СУММ
# =============================================================================

# Потолок абсолютного значения суммы (99,99,99,999 в индийской группировке)
# Проверяется и для сырых токенов выражения, и для итогового результата
MAX_AMOUNT: Final[float] = 9_999_999_999.0

# Максимум цифр после десятичной точки в любом числовом литерале
MAX_DECIMAL_PLACES: Final[int] = 2

MONTHS_PER_YEAR: Final[int] = 12


# =============================================================================
# ШАБЛОНЫ СКАНИРОВАНИЯ
# =============================================================================

# Максимальная числовая подстрока: "12", "12.", "12.5", ".5"
NUMERIC_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:\d+\.\d*|\.\d+|\d+)", re.ASCII)

# Символы, допустимые при наборе в поле amount
ALLOWED_AMOUNT_INPUT_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9+\-*/%.()\s]*$")

WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")

# Два числовых литерала, разделённых только пробелом: "10 3"
SPLIT_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9.]\s+[0-9.]")


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение конечное (не NaN, не Inf)."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Замена NaN/Inf на fallback значение.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def coerce_form_number(value: Any, fallback: float = 0.0) -> float:
    """
    Приведение значения из редактируемого поля формы к конечному float.

    Принимает числа, числовые строки, None и пустые строки. Всё, что не
    парсится как число или даёт NaN/Inf, заменяется на fallback.

    Args:
        value: Сырое значение поля (как оно хранится в записи)
        fallback: Значение по умолчанию (default: 0.0)

    Returns:
        Конечный float

    Examples:
        >>> coerce_form_number("1200.50")
        1200.5
        >>> coerce_form_number("")
        0.0
        >>> coerce_form_number(None)
        0.0
        >>> coerce_form_number("abc", fallback=-1.0)
        -1.0
    """
    if value is None or isinstance(value, bool):
        return fallback

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return fallback

    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback

    return sanitize_float(number, fallback=fallback)


def clamp_non_negative(value: float) -> float:
    """
    Санитизация и clamp к [0, +inf).

    Examples:
        >>> clamp_non_negative(-5.0)
        0.0
        >>> clamp_non_negative(float('inf'))
        0.0
        >>> clamp_non_negative(12.5)
        12.5
    """
    return max(0.0, sanitize_float(value, fallback=0.0))


def round_money(value: float, places: int = MAX_DECIMAL_PLACES) -> float:
    """Округление суммы до places знаков (half away from zero)."""
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")

    scale = 10**places
    scaled = value * scale
    if scaled >= 0:
        steps = math.floor(scaled + 0.5)
    else:
        steps = math.ceil(scaled - 0.5)
    return steps / scale


# =============================================================================
# КОНФИГУРАЦИЯ ЛИМИТОВ
# =============================================================================


@dataclass(frozen=True)
class AmountLimits:
    """Конфигурация лимитов поля amount.

    По умолчанию совпадает с MAX_AMOUNT / MAX_DECIMAL_PLACES.
    """

    max_amount: float = MAX_AMOUNT
    max_decimal_places: int = MAX_DECIMAL_PLACES

    def __post_init__(self) -> None:
        if not is_valid_float(self.max_amount) or self.max_amount <= 0:
            raise ValueError(f"max_amount must be a positive finite number, got {self.max_amount}")
        if self.max_decimal_places < 0:
            raise ValueError(
                f"max_decimal_places must be non-negative, got {self.max_decimal_places}"
            )

    @classmethod
    def from_settings(cls, settings: Any) -> "AmountLimits":
        """Построение лимитов из CoreSettings (или любого объекта с теми же атрибутами)."""
        return cls(
            max_amount=float(settings.max_amount),
            max_decimal_places=int(settings.max_decimal_places),
        )


DEFAULT_AMOUNT_LIMITS: Final[AmountLimits] = AmountLimits()
