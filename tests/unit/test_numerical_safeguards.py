"""
Тесты для Numerical Safeguards — сравнения масс с учётом машинной точности

Проверяемые инварианты:
1. Равенство масс проверяется через is_close
2. a ≤ b проверяется как a ≤ b + tol
3. math.inf — допустимый sentinel, NaN — нет
4. Валидация параметров отклоняет NaN/Inf и значения вне диапазона
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    EPS_MASS,
    EPS_MASS_COMPARE_ABS,
    EPS_MASS_COMPARE_REL,
    clamp,
    is_close,
    is_extended_nonnegative,
    is_le,
    is_valid_float,
    is_zero,
    validate_in_range,
    validate_non_negative,
)


# =============================================================================
# ТЕСТЫ: Константы
# =============================================================================


class TestEpsilonConstants:
    """Epsilon-константы положительны и упорядочены."""

    def test_constants_positive(self):
        assert EPS_MASS > 0
        assert EPS_MASS_COMPARE_ABS > 0
        assert EPS_MASS_COMPARE_REL > 0

    def test_snap_tolerance_tighter_than_compare(self):
        """Snap к границам отрезка строже, чем сравнение масс."""
        assert EPS_MASS < EPS_MASS_COMPARE_ABS


# =============================================================================
# ТЕСТЫ: NaN/Inf
# =============================================================================


class TestFloatChecks:
    """Проверки is_valid_float и is_extended_nonnegative."""

    def test_valid_float(self):
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert not is_valid_float(math.inf)
        assert not is_valid_float(-math.inf)
        assert not is_valid_float(math.nan)

    def test_extended_nonnegative_accepts_top(self):
        """math.inf — допустимый top sentinel."""
        assert is_extended_nonnegative(0.0)
        assert is_extended_nonnegative(0.5)
        assert is_extended_nonnegative(math.inf)

    def test_extended_nonnegative_rejects_negative_and_nan(self):
        assert not is_extended_nonnegative(-1e-3)
        assert not is_extended_nonnegative(-math.inf)
        assert not is_extended_nonnegative(math.nan)


# =============================================================================
# ТЕСТЫ: Epsilon-сравнения
# =============================================================================


class TestComparisons:
    """is_close / is_zero / is_le."""

    def test_is_close_within_tolerance(self):
        assert is_close(1.0, 1.0 + 1e-12)
        assert is_close(0.1 + 0.2, 0.3)
        assert not is_close(0.5, 0.6)

    def test_is_close_infinite_sentinel(self):
        assert is_close(math.inf, math.inf)
        assert not is_close(math.inf, 1.0)

    def test_is_zero(self):
        assert is_zero(0.0)
        assert is_zero(1e-12)
        assert is_zero(-1e-12)
        assert not is_zero(1e-6)
        assert is_zero(1e-6, tol=1e-5)

    def test_is_le_with_tolerance(self):
        """a ≤ b + tol: малое превышение допустимо."""
        assert is_le(0.5, 0.5)
        assert is_le(0.5, 0.5 - 1e-12)
        assert not is_le(0.6, 0.5)
        assert is_le(0.6, 0.5, tol=0.2)

    def test_is_le_infinite_sentinel(self):
        """Сравнения с math.inf без толерантности."""
        assert is_le(1.0, math.inf)
        assert is_le(math.inf, math.inf)
        assert not is_le(math.inf, 1.0)


# =============================================================================
# ТЕСТЫ: Утилиты и валидация
# =============================================================================


class TestClamp:
    def test_clamp_bounds(self):
        assert clamp(1.0 + 1e-15, 0.0, 1.0) == 1.0
        assert clamp(-1e-15, 0.0, 1.0) == 0.0
        assert clamp(0.3, 0.0, 1.0) == 0.3

    def test_clamp_one_sided(self):
        assert clamp(-2.0, min_value=0.0) == 0.0
        assert clamp(5.0, max_value=1.0) == 1.0
        assert clamp(5.0) == 5.0


class TestValidation:
    def test_validate_non_negative(self):
        validate_non_negative(0.0, "w")
        validate_non_negative(3.5, "w")

        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative(-0.1, "w")

        with pytest.raises(ValueError, match="valid float"):
            validate_non_negative(math.nan, "w")

    def test_validate_in_range(self):
        validate_in_range(0.5, "tolerance", 0.0, 1.0)

        with pytest.raises(ValueError, match=">= 0.0"):
            validate_in_range(-0.5, "tolerance", 0.0, 1.0)

        with pytest.raises(ValueError, match="<= 1.0"):
            validate_in_range(1.5, "tolerance", 0.0, 1.0)

        with pytest.raises(ValueError, match="valid float"):
            validate_in_range(math.inf, "tolerance", 0.0, 1.0)
