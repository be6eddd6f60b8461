"""
Bounded Arithmetic — арифметика масс на отрезке [0, 1]

Значения масс живут в [0, 1], но промежуточные результаты liminf/limsup
вычисляются в extended nonnegative reals [0, ∞] (sentinel — math.inf).
Модуль даёт единственную операцию вычитания — усечённую (truncated):

    a ⊖ b = max(a - b, 0)

с соглашениями ∞ ⊖ конечное = ∞, конечное ⊖ ∞ = 0, ∞ ⊖ ∞ = 0.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение вне [0, 1] — нарушение контракта (UnitIntervalViolation)
2. Граница 1 конечна: законы сокращения требуют require_finite_bound
3. 1 ⊖ (1 ⊖ x) = x для 0 ≤ x ≤ 1 (с толерантностью EPS_MASS_COMPARE_ABS)
4. Extended-значение возвращается наружу только после rebound
"""

import math
from typing import Final

from src.core.contracts.violations import ExtendedTopViolation, UnitIntervalViolation
from src.core.math.numerical_safeguards import (
    EPS_MASS,
    EPS_MASS_COMPARE_ABS,
    clamp,
    is_close,
    is_extended_nonnegative,
    is_le,
)

# =============================================================================
# КОНСТАНТЫ ОТРЕЗКА
# =============================================================================

UNIT_LOWER: Final[float] = 0.0
UNIT_UPPER: Final[float] = 1.0

# Top sentinel extended nonnegative reals
EXTENDED_TOP: Final[float] = math.inf


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_unit_value(value: float, name: str = "value", tol: float = EPS_MASS) -> float:
    """
    Валидация массы: значение должно лежать в [0, 1].

    Значения, вышедшие за границу не более чем на tol (накопленная ошибка
    суммирования float), прижимаются к границе.

    Args:
        value: Проверяемая масса
        name: Имя параметра (для сообщения об ошибке)
        tol: Допуск на выход за границу

    Returns:
        Значение, гарантированно лежащее в [0, 1]

    Raises:
        UnitIntervalViolation: Если значение NaN/Inf или вне [-tol, 1 + tol]
    """
    if not math.isfinite(value):
        raise UnitIntervalViolation(f"{name} must be a finite mass in [0, 1], got {value}")

    if value < UNIT_LOWER - tol or value > UNIT_UPPER + tol:
        raise UnitIntervalViolation(f"{name} must lie in [0, 1], got {value}")

    return clamp(value, UNIT_LOWER, UNIT_UPPER)


def validate_extended_value(value: float, name: str = "value") -> float:
    """
    Валидация extended-значения: [0, ∞], NaN запрещён.

    Raises:
        UnitIntervalViolation: Если значение отрицательное или NaN
    """
    if not is_extended_nonnegative(value):
        raise UnitIntervalViolation(
            f"{name} must be an extended nonnegative value in [0, inf], got {value}"
        )
    return value


def is_finite_bound(bound: float) -> bool:
    """Граница конечна (не top sentinel)."""
    return bound != EXTENDED_TOP and math.isfinite(bound)


def require_finite_bound(bound: float, name: str = "bound") -> float:
    """
    Проверка, что граница конечна.

    Используется перед применением законов сокращения: для bound = ∞
    выражение ∞ ⊖ a не зависит от a, и сокращение невозможно.

    Raises:
        ExtendedTopViolation: Если bound — top sentinel
    """
    if not is_finite_bound(bound):
        raise ExtendedTopViolation(
            f"{name} must be a finite bound, got the extended top element {bound}"
        )
    return bound


# =============================================================================
# EXTENDED-АРИФМЕТИКА
# =============================================================================


def subtract_truncated(a: float, b: float) -> float:
    """
    Усечённое вычитание a ⊖ b = max(a - b, 0) в [0, ∞].

    Examples:
        >>> subtract_truncated(0.75, 0.25)
        0.5
        >>> subtract_truncated(0.25, 0.75)
        0.0
        >>> subtract_truncated(float('inf'), 1.0)
        inf
        >>> subtract_truncated(1.0, float('inf'))
        0.0
    """
    a = validate_extended_value(a, "a")
    b = validate_extended_value(b, "b")

    if b == EXTENDED_TOP:
        # конечное ⊖ ∞ = 0, ∞ ⊖ ∞ = 0
        return 0.0
    if a == EXTENDED_TOP:
        return EXTENDED_TOP

    return max(a - b, 0.0)


def add_extended(a: float, b: float) -> float:
    """Сложение в [0, ∞]; ∞ поглощает."""
    a = validate_extended_value(a, "a")
    b = validate_extended_value(b, "b")
    return a + b


def rebound(value: float, name: str = "value") -> float:
    """
    Возврат extended-промежуточного результата в [0, 1].

    Raises:
        ExtendedTopViolation: Если значение — top sentinel
        UnitIntervalViolation: Если значение вне [0, 1]
    """
    value = validate_extended_value(value, name)
    if value == EXTENDED_TOP:
        raise ExtendedTopViolation(f"{name} is the extended top element and cannot be re-bounded")
    return validate_unit_value(value, name)


def complement_value(x: float) -> float:
    """
    Дополнение массы: 1 ⊖ x.

    Соответствует закону μ(Sᶜ) = 1 - μ(S) для вероятностной меры.
    """
    return subtract_truncated(UNIT_UPPER, validate_unit_value(x, "x"))


def is_involutive(x: float, tol: float = EPS_MASS_COMPARE_ABS) -> bool:
    """
    Проверка закона 1 ⊖ (1 ⊖ x) = x для массы x.

    Examples:
        >>> is_involutive(0.1)
        True
        >>> is_involutive(1.0)
        True
    """
    return is_close(complement_value(complement_value(x)), x, abs_tol=tol)


# =============================================================================
# ЗАКОНЫ СОКРАЩЕНИЯ
# =============================================================================


def le_of_truncated_sub_le(
    a: float,
    b: float,
    bound: float = UNIT_UPPER,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> bool:
    """
    Сокращение: из bound ⊖ a ≤ bound ⊖ b следует b ≤ a.

    Предусловия:
    - bound конечна (иначе обе части равны ∞)
    - a ≤ bound и b ≤ bound (иначе усечение съедает разницу)

    Args:
        a: Правая часть заключения
        b: Левая часть заключения
        bound: Конечная верхняя граница (default: 1)
        tol: Толерантность сравнения

    Returns:
        True если посылка bound ⊖ a ≤ bound ⊖ b выполнена; тогда b ≤ a.
        False если посылка не выполнена (заключение не выводится).

    Raises:
        ExtendedTopViolation: Если bound бесконечна
        UnitIntervalViolation: Если a или b превышают bound
    """
    bound = require_finite_bound(bound)
    if not is_le(a, bound, tol) or not is_le(b, bound, tol):
        raise UnitIntervalViolation(f"operands must not exceed bound={bound}, got a={a}, b={b}")

    # a, b ≤ bound: усечение не срабатывает, bound ⊖ x = bound - x
    return is_le(subtract_truncated(bound, a), subtract_truncated(bound, b), tol)
