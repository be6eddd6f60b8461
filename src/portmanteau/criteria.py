"""Convergence Criteria — три критерия слабой сходимости μₙ ⇒ μ

- LiminfCriterion:      для всякого открытого S:   μ(S) ≤ liminf μₙ(S)
- LimsupCriterion:      для всякого замкнутого S:  limsup μₙ(S) ≤ μ(S)
- PointwiseConvergence: для всякого continuity set S: μₙ(S) → μ(S)

Каждый критерий привязан к (MeasureSequence, μ, topology, config).
bound(S) проверяет одно множество, verify(sets) — семейство. Для
FiniteTopology семейство по умолчанию перечисляется исчерпывающе.

Неподходящее множество (неоткрытое для liminf, незамкнутое для limsup,
не continuity set для pointwise) — нарушение контракта, а не "ложь".
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Iterable, Optional

from src.core.contracts.violations import (
    ContractViolation,
    NotAContinuitySet,
    NotClosedSet,
    NotOpenSet,
)
from src.core.domain.finite_space import FiniteTopology
from src.core.domain.measure_sequence import MeasureSequence
from src.core.domain.measures import ProbabilityMeasure
from src.core.domain.topology import Topology
from src.core.math.numerical_safeguards import EPS_MASS_COMPARE_ABS, is_le, validate_in_range
from src.core.math.sequence_limits import (
    DEFAULT_TAIL_WINDOW,
    TailWindow,
    converges_to,
    liminf_le_limsup,
)
from src.portmanteau.continuity import is_continuity_set
from src.portmanteau.witness import ConvergenceWitness, CriterionKind, SetBound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CriterionConfig:
    """Конфигурация проверки критериев.

    tolerance — допуск сравнения масс и пределов
    window — probe-индексы хвоста для liminf/limsup/eventually
    """

    tolerance: float = EPS_MASS_COMPARE_ABS
    window: TailWindow = DEFAULT_TAIL_WINDOW

    def __post_init__(self) -> None:
        validate_in_range(self.tolerance, "tolerance", min_value=0.0, max_value=1.0)


class ConvergenceCriterion(ABC):
    """Базовый критерий: проверка на множестве и на семействе множеств."""

    kind: CriterionKind
    derived_from: Optional[CriterionKind] = None

    def __init__(
        self,
        sequence: MeasureSequence,
        limit: ProbabilityMeasure,
        topology: Topology,
        config: Optional[CriterionConfig] = None,
    ):
        """
        Args:
            sequence: последовательность мер μₙ
            limit: предельная мера μ
            topology: топологический коллаборатор
            config: допуски и окно хвоста
        """
        if not isinstance(limit, ProbabilityMeasure):
            raise ContractViolation(f"limit must be a ProbabilityMeasure, got {type(limit).__name__}")
        self.sequence = sequence
        self.limit = limit
        self.topology = topology
        self.config = config or CriterionConfig()

    @abstractmethod
    def bound(self, s: Any) -> SetBound:
        """Проверка критерия на множестве s."""

    @abstractmethod
    def default_family(self) -> Iterable[Any]:
        """Семейство множеств по умолчанию (только для FiniteTopology)."""

    def holds_for(self, s: Any) -> bool:
        return self.bound(s).holds

    def verify(self, sets: Optional[Iterable[Any]] = None) -> ConvergenceWitness:
        """
        Проверка критерия на семействе sets.

        Args:
            sets: семейство множеств; None — семейство по умолчанию

        Returns:
            ConvergenceWitness со всеми SetBound
        """
        family = list(self.default_family() if sets is None else sets)
        bounds = tuple(self.bound(s) for s in family)
        holds = all(b.holds for b in bounds)
        logger.info(
            "%s for %s: %s on %d sets",
            self.kind.value,
            self.sequence.label,
            "holds" if holds else "fails",
            len(bounds),
        )
        return ConvergenceWitness(
            criterion=self.kind,
            derived_from=self.derived_from,
            holds=holds,
            bounds=bounds,
            steps=self.steps(),
        )

    def steps(self) -> tuple[str, ...]:
        return ()

    # --- Общие вычисления ---------------------------------------------------

    def _finite_topology(self) -> FiniteTopology:
        if not isinstance(self.topology, FiniteTopology):
            raise ContractViolation(
                f"{self.kind.value}: an explicit set family is required for "
                f"{type(self.topology).__name__}"
            )
        return self.topology

    def _measure_bound(self, s: Any, holds_fn) -> SetBound:
        f = self.sequence.mass_sequence(s)
        pair = liminf_le_limsup(f, self.config.window)
        limit_mass = self.limit.mass(s)
        holds = holds_fn(limit_mass, pair)
        logger.debug(
            "%s on %s: μ=%.12g liminf=%.12g limsup=%.12g holds=%s",
            self.kind.value, s, limit_mass, pair.liminf, pair.limsup, holds,
        )
        return SetBound(
            set_label=str(s),
            limit_mass=limit_mass,
            liminf=pair.liminf,
            limsup=pair.limsup,
            holds=holds,
        )


class LiminfCriterion(ConvergenceCriterion):
    """μ(S) ≤ liminf μₙ(S) для всякого открытого S."""

    kind = CriterionKind.LIMINF_OPEN

    def bound(self, s: Any) -> SetBound:
        if not self.topology.is_open(s):
            raise NotOpenSet(f"{s} is not open")
        tol = self.config.tolerance
        result = self._measure_bound(s, lambda mu, pair: is_le(mu, pair.liminf, tol))
        return result.model_copy(
            update={"details": f"μ(S) = {result.limit_mass:.12g} ≤ liminf μₙ(S) = {result.liminf:.12g}"}
        )

    def default_family(self) -> Iterable[Any]:
        return self._finite_topology().open_sets()


class LimsupCriterion(ConvergenceCriterion):
    """limsup μₙ(S) ≤ μ(S) для всякого замкнутого S."""

    kind = CriterionKind.LIMSUP_CLOSED

    def bound(self, s: Any) -> SetBound:
        if not self.topology.is_closed(s):
            raise NotClosedSet(f"{s} is not closed")
        tol = self.config.tolerance
        result = self._measure_bound(s, lambda mu, pair: is_le(pair.limsup, mu, tol))
        return result.model_copy(
            update={"details": f"limsup μₙ(S) = {result.limsup:.12g} ≤ μ(S) = {result.limit_mass:.12g}"}
        )

    def default_family(self) -> Iterable[Any]:
        return self._finite_topology().closed_sets()


class PointwiseConvergence(ConvergenceCriterion):
    """μₙ(S) → μ(S) для всякого continuity set S предельной меры."""

    kind = CriterionKind.POINTWISE

    def require_continuity_set(self, s: Any) -> None:
        if not is_continuity_set(self.limit, s, self.topology, self.config.tolerance):
            raise NotAContinuitySet(f"{s} is not a continuity set of {self.limit}")

    def bound(self, s: Any) -> SetBound:
        self.require_continuity_set(s)
        window = self.config.window
        tol = self.config.tolerance
        f = self.sequence.mass_sequence(s)
        result = self._measure_bound(s, lambda mu, pair: converges_to(f, mu, window, tol))
        return result.model_copy(
            update={"details": f"μₙ(S) → {result.limit_mass:.12g}: {result.holds}"}
        )

    def default_family(self) -> Iterable[Any]:
        topology = self._finite_topology()
        points = sorted(topology.universe, key=str)
        for r in range(len(points) + 1):
            for subset in combinations(points, r):
                s = topology.subset(subset)
                if is_continuity_set(self.limit, s, topology, self.config.tolerance):
                    yield s
