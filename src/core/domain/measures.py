"""
Measures — конечные и вероятностные меры

Ядро использует меру только как "масса множества S" и закон
μ(Sᶜ) = 1 - μ(S) для вероятностной меры. Счётная аддитивность и
нормировка обеспечиваются конкретными реализациями.

Immutable Pydantic модели:
- FiniteAtomicMeasure — конечная мера с конечным числом атомов (любая масса)
- DiracMeasure — точечная масса δ_x
- DiscreteMeasure — вероятностная мера с конечным числом атомов
- UniformMeasure — нормированная мера Лебега на [low, high] (только IntervalSet)
- MixtureMeasure — выпуклая комбинация вероятностных мер
"""

import math
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.contracts.violations import ContractViolation
from src.core.domain.interval_sets import IntervalSet
from src.core.math.bounded_arithmetic import complement_value, validate_unit_value
from src.core.math.numerical_safeguards import (
    EPS_MASS_COMPARE_ABS,
    is_close,
    validate_non_negative,
)


# =============================================================================
# BASE
# =============================================================================


class FiniteMeasure(BaseModel, ABC):
    """Конечная мера: S ↦ μ(S) ∈ [0, ∞)."""

    model_config = {"frozen": True}

    @abstractmethod
    def mass(self, s: Any) -> float:
        """Масса множества s."""


class ProbabilityMeasure(FiniteMeasure):
    """
    Вероятностная мера: значения в [0, 1], μ(универсум) = 1.

    Все массы возвращаются через validate_unit_value.
    """

    def complement_mass(self, s: Any) -> float:
        """μ(Sᶜ) = 1 ⊖ μ(S)."""
        return complement_value(self.mass(s))

    def total_mass(self, whole: Any) -> float:
        """Масса универсума (должна быть 1)."""
        return self.mass(whole)


def _validate_weights(weights: dict[Any, float]) -> dict[Any, float]:
    for p, w in weights.items():
        validate_non_negative(w, f"weight[{p!r}]")
    return weights


# =============================================================================
# ATOMIC MEASURES
# =============================================================================


class FiniteAtomicMeasure(FiniteMeasure):
    """Конечная мера Σ w_p δ_p без требования нормировки."""

    atoms: dict[Any, float] = Field(..., description="Точка → масса атома")

    @field_validator("atoms")
    @classmethod
    def validate_atoms(cls, v: dict[Any, float]) -> dict[Any, float]:
        return _validate_weights(v)

    def mass(self, s: Any) -> float:
        return math.fsum(w for p, w in self.atoms.items() if s.contains(p))


class DiracMeasure(ProbabilityMeasure):
    """Точечная масса δ_at."""

    at: Any = Field(..., description="Носитель точечной массы")

    def mass(self, s: Any) -> float:
        return 1.0 if s.contains(self.at) else 0.0

    def __str__(self) -> str:
        return f"δ({self.at})"


class DiscreteMeasure(ProbabilityMeasure):
    """Вероятностная мера Σ w_p δ_p, Σ w_p = 1."""

    atoms: dict[Any, float] = Field(..., min_length=1, description="Точка → вероятность атома")

    @field_validator("atoms")
    @classmethod
    def validate_atoms(cls, v: dict[Any, float]) -> dict[Any, float]:
        _validate_weights(v)
        total = math.fsum(v.values())
        if not is_close(total, 1.0):
            raise ValueError(f"atom weights must sum to 1, got {total}")
        return v

    def mass(self, s: Any) -> float:
        return validate_unit_value(math.fsum(w for p, w in self.atoms.items() if s.contains(p)), "mass")

    def total_variation(self, other: "DiscreteMeasure") -> float:
        """
        Расстояние по вариации: sup_S |μ(S) - ν(S)| = ½ Σ_p |μ{p} - ν{p}|.
        """
        support = set(self.atoms) | set(other.atoms)
        diff = math.fsum(abs(self.atoms.get(p, 0.0) - other.atoms.get(p, 0.0)) for p in support)
        return validate_unit_value(diff / 2.0, "total_variation")


# =============================================================================
# UNIFORM
# =============================================================================


class UniformMeasure(ProbabilityMeasure):
    """Нормированная мера Лебега на [low, high]; определена на IntervalSet."""

    low: float = Field(..., description="Левый конец носителя")
    high: float = Field(..., description="Правый конец носителя")

    @model_validator(mode="after")
    def validate_support(self) -> "UniformMeasure":
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ValueError("uniform support must be bounded")
        if self.high <= self.low:
            raise ValueError(f"uniform support requires low < high, got [{self.low}, {self.high}]")
        return self

    def mass(self, s: Any) -> float:
        if not isinstance(s, IntervalSet):
            raise ContractViolation(f"UniformMeasure is defined on IntervalSet, got {type(s).__name__}")
        return validate_unit_value(s.length_within(self.low, self.high) / (self.high - self.low), "mass")

    def __str__(self) -> str:
        return f"U[{self.low:g}, {self.high:g}]"


# =============================================================================
# MIXTURE
# =============================================================================


class MixtureMeasure(ProbabilityMeasure):
    """Выпуклая комбинация Σ w_k μ_k вероятностных мер."""

    components: tuple[ProbabilityMeasure, ...] = Field(..., min_length=1)
    weights: tuple[float, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_weights(self) -> "MixtureMeasure":
        if len(self.components) != len(self.weights):
            raise ValueError(
                f"components and weights must have equal length, "
                f"got {len(self.components)} and {len(self.weights)}"
            )
        _validate_weights(dict(enumerate(self.weights)))
        total = math.fsum(self.weights)
        if not is_close(total, 1.0, abs_tol=EPS_MASS_COMPARE_ABS):
            raise ValueError(f"mixture weights must sum to 1, got {total}")
        return self

    def mass(self, s: Any) -> float:
        return validate_unit_value(
            math.fsum(w * c.mass(s) for c, w in zip(self.components, self.weights)), "mass"
        )
