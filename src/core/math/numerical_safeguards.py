"""
Numerical Safeguards — сравнения масс с учётом машинной точности

Модуль обеспечивает численную устойчивость всех операций над массами:
- Epsilon-константы для сравнения масс (абсолютная и относительная толерантность)
- Проверка float на NaN/Inf
- Сравнения ≤ / = / 0 с учётом толерантности
- Валидация параметров (диапазон, неотрицательность)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Равенство масс никогда не проверяется через ==, только через is_close
2. Неравенство a ≤ b проверяется как a ≤ b + tol
3. math.inf допустим только как sentinel extended-значения, NaN не допустим
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для масс множеств (значения в [0, 1])
# Используется при snap значений к границам отрезка
EPS_MASS: Final[float] = 1e-12

# Epsilon для сравнения масс (относительная толерантность)
EPS_MASS_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения масс (абсолютная толерантность)
# Сумма n float-значений теряет ~n * 1e-16, 1e-9 оставляет большой запас
EPS_MASS_COMPARE_ABS: Final[float] = 1e-9


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite, False если NaN или Inf
    """
    return math.isfinite(value)


def is_extended_nonnegative(value: float) -> bool:
    """
    Проверка принадлежности значения [0, ∞] (extended nonnegative reals).

    math.inf допустим (top sentinel), NaN и отрицательные значения — нет.

    Examples:
        >>> is_extended_nonnegative(0.5)
        True
        >>> is_extended_nonnegative(float('inf'))
        True
        >>> is_extended_nonnegative(-1e-3)
        False
    """
    if math.isnan(value):
        return False
    return value >= 0.0


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_MASS_COMPARE_REL,
    abs_tol: float = EPS_MASS_COMPARE_ABS,
) -> bool:
    """
    Сравнение масс с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Два значения math.inf считаются равными (одинаковый sentinel).

    Examples:
        >>> is_close(1.0, 1.0 + 1e-12)
        True
        >>> is_close(0.5, 0.6)
        False
        >>> is_close(float('inf'), float('inf'))
        True
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_MASS_COMPARE_ABS) -> bool:
    """
    Проверка, близко ли значение к нулю.

    Returns:
        True если abs(value) <= tol
    """
    return abs(value) <= tol


def is_le(a: float, b: float, tol: float = EPS_MASS_COMPARE_ABS) -> bool:
    """
    Проверка a ≤ b с толерантностью.

    Корректно работает с sentinel math.inf:
    - inf ≤ inf → True
    - inf ≤ конечное → False
    - конечное ≤ inf → True

    Examples:
        >>> is_le(0.5, 0.5 - 1e-12)
        True
        >>> is_le(0.6, 0.5)
        False
        >>> is_le(1.0, float('inf'))
        True
    """
    if math.isinf(a) or math.isinf(b):
        return a <= b
    return a <= b + tol


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(1.0 + 1e-15, 0.0, 1.0)
        1.0
        >>> clamp(-1e-15, 0.0, 1.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное и конечное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Валидация, что значение в заданном диапазоне.

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
