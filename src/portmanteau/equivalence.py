"""Equivalence — выводы между критериями слабой сходимости (portmanteau)

1. Liminf ⇒ Limsup. Для замкнутого S дополнение Sᶜ открыто:
       μ(Sᶜ) ≤ liminf μₙ(Sᶜ)                       (liminf-критерий на Sᶜ)
       1 - μ(S) ≤ liminf (1 - μₙ(S))                (μ(Sᶜ) = 1 - μ(S), по n и в пределе)
       1 - μ(S) ≤ 1 - limsup μₙ(S)                  (двойственность)
       limsup μₙ(S) ≤ μ(S)                          (сокращение усечённого вычитания)
   Limsup ⇒ Liminf симметрично.

2. Liminf ⇒ Pointwise. Для continuity set S:
       μ(S) = μ(int S) ≤ liminf μₙ(int S) ≤ liminf μₙ(S)
            ≤ limsup μₙ(S) ≤ limsup μₙ(cl S) ≤ μ(cl S) = μ(S)
   т.е. liminf μₙ(S) = limsup μₙ(S) = μ(S).

3. Limsup ⇒ Pointwise: сначала Limsup ⇒ Liminf, затем (2).

Выведенный критерий хранит источник; обратный вывод из выведенного
критерия возвращает источник без изменений.
"""

import logging
from typing import Any, Iterable, Optional

from src.core.contracts.violations import ContractViolation, NotClosedSet, NotOpenSet
from src.core.domain.measure_sequence import MeasureSequence
from src.core.domain.measures import ProbabilityMeasure
from src.core.domain.topology import Topology
from src.core.math.bounded_arithmetic import complement_value, le_of_truncated_sub_le
from src.core.math.numerical_safeguards import is_close
from src.core.math.sequence_limits import (
    BoundednessWitness,
    ValueSequence,
    establish_bounds,
    eventually,
    liminf_le_limsup,
    liminf_of_complement,
    limsup_of_complement,
    transport_liminf,
    transport_limsup,
)
from src.portmanteau.continuity import measure_equals_closure, measure_equals_interior
from src.portmanteau.criteria import (
    ConvergenceCriterion,
    CriterionConfig,
    LiminfCriterion,
    LimsupCriterion,
    PointwiseConvergence,
)
from src.portmanteau.witness import CriterionKind, PortmanteauReport, SetBound

logger = logging.getLogger(__name__)


# =============================================================================
# ПЕРЕПИСЫВАНИЕ ДОПОЛНЕНИЙ
# =============================================================================


def _rewrite_complement(criterion: ConvergenceCriterion, s: Any) -> tuple[float, float]:
    """
    Проверка μₙ(Sᶜ) = 1 - μₙ(S) eventually и μ(Sᶜ) = 1 - μ(S).

    Returns:
        (μ(S), μ(Sᶜ))

    Raises:
        ContractViolation: если мера нарушает закон дополнения
    """
    tol = criterion.config.tolerance
    complement = s.complement()
    f = criterion.sequence.mass_sequence(s)
    g = criterion.sequence.mass_sequence(complement)

    rewrites = eventually(
        lambda n: is_close(g(n), complement_value(f(n)), abs_tol=tol), criterion.config.window
    )
    if rewrites is None:
        raise ContractViolation(f"μₙ(Sᶜ) = 1 - μₙ(S) fails eventually for S = {s}")

    limit_mass = criterion.limit.mass(s)
    complement_mass = criterion.limit.mass(complement)
    if not is_close(complement_mass, criterion.limit.complement_mass(s), abs_tol=tol):
        raise ContractViolation(f"μ(Sᶜ) = 1 - μ(S) fails for S = {s}")
    return limit_mass, complement_mass


def _bounded(criterion: ConvergenceCriterion, f: ValueSequence) -> BoundednessWitness:
    return establish_bounds(f, window=criterion.config.window, tol=criterion.config.tolerance)


# =============================================================================
# ВЫВЕДЕННЫЕ КРИТЕРИИ
# =============================================================================


class DerivedLimsupCriterion(LimsupCriterion):
    """limsup-критерий, выведенный из liminf-критерия через дополнения."""

    derived_from = CriterionKind.LIMINF_OPEN

    def __init__(self, source: LiminfCriterion):
        super().__init__(source.sequence, source.limit, source.topology, source.config)
        self.source = source

    def bound(self, s: Any) -> SetBound:
        if not self.topology.is_closed(s):
            raise NotClosedSet(f"{s} is not closed")
        window = self.config.window
        tol = self.config.tolerance

        # Sᶜ открыто: liminf-критерий источника
        source_bound = self.source.bound(s.complement())

        limit_mass, complement_mass = _rewrite_complement(self, s)
        f = self.sequence.mass_sequence(s)
        one_minus_limsup = liminf_of_complement(f, _bounded(self, f), window)
        if not is_close(source_bound.liminf, one_minus_limsup, abs_tol=tol):
            raise ContractViolation(f"liminf μₙ(Sᶜ) ≠ 1 - limsup μₙ(S) for S = {s}")

        pair = liminf_le_limsup(f, window)
        # 1 ⊖ μ(S) ≤ 1 ⊖ limsup μₙ(S)  ⇒  limsup μₙ(S) ≤ μ(S)
        holds = source_bound.holds and le_of_truncated_sub_le(limit_mass, pair.limsup, tol=tol)
        logger.debug("limsup on %s derived from liminf on complement: holds=%s", s, holds)
        return SetBound(
            set_label=str(s),
            limit_mass=limit_mass,
            liminf=pair.liminf,
            limsup=pair.limsup,
            holds=holds,
            details=(
                f"μ(Sᶜ) = {complement_mass:.12g} ≤ liminf μₙ(Sᶜ) = {source_bound.liminf:.12g}; "
                f"1 - μ(S) ≤ 1 - limsup μₙ(S) ⇒ limsup μₙ(S) = {pair.limsup:.12g} ≤ μ(S) = {limit_mass:.12g}"
            ),
        )

    def steps(self) -> tuple[str, ...]:
        return (
            "S замкнуто ⇒ Sᶜ открыто",
            "μ(Sᶜ) ≤ liminf μₙ(Sᶜ) (liminf-критерий)",
            "μ(Sᶜ) = 1 - μ(S), μₙ(Sᶜ) = 1 - μₙ(S)",
            "liminf (1 - μₙ(S)) = 1 - limsup μₙ(S) (двойственность)",
            "1 - μ(S) ≤ 1 - limsup μₙ(S) ⇒ limsup μₙ(S) ≤ μ(S) (сокращение, 1 < ∞)",
        )


class DerivedLiminfCriterion(LiminfCriterion):
    """liminf-критерий, выведенный из limsup-критерия через дополнения."""

    derived_from = CriterionKind.LIMSUP_CLOSED

    def __init__(self, source: LimsupCriterion):
        super().__init__(source.sequence, source.limit, source.topology, source.config)
        self.source = source

    def bound(self, s: Any) -> SetBound:
        if not self.topology.is_open(s):
            raise NotOpenSet(f"{s} is not open")
        window = self.config.window
        tol = self.config.tolerance

        # Sᶜ замкнуто: limsup-критерий источника
        source_bound = self.source.bound(s.complement())

        limit_mass, complement_mass = _rewrite_complement(self, s)
        f = self.sequence.mass_sequence(s)
        one_minus_liminf = limsup_of_complement(f, _bounded(self, f), window)
        if not is_close(source_bound.limsup, one_minus_liminf, abs_tol=tol):
            raise ContractViolation(f"limsup μₙ(Sᶜ) ≠ 1 - liminf μₙ(S) for S = {s}")

        pair = liminf_le_limsup(f, window)
        # 1 ⊖ liminf μₙ(S) ≤ 1 ⊖ μ(S)  ⇒  μ(S) ≤ liminf μₙ(S)
        holds = source_bound.holds and le_of_truncated_sub_le(pair.liminf, limit_mass, tol=tol)
        logger.debug("liminf on %s derived from limsup on complement: holds=%s", s, holds)
        return SetBound(
            set_label=str(s),
            limit_mass=limit_mass,
            liminf=pair.liminf,
            limsup=pair.limsup,
            holds=holds,
            details=(
                f"limsup μₙ(Sᶜ) = {source_bound.limsup:.12g} ≤ μ(Sᶜ) = {complement_mass:.12g}; "
                f"1 - liminf μₙ(S) ≤ 1 - μ(S) ⇒ μ(S) = {limit_mass:.12g} ≤ liminf μₙ(S) = {pair.liminf:.12g}"
            ),
        )

    def steps(self) -> tuple[str, ...]:
        return (
            "S открыто ⇒ Sᶜ замкнуто",
            "limsup μₙ(Sᶜ) ≤ μ(Sᶜ) (limsup-критерий)",
            "μ(Sᶜ) = 1 - μ(S), μₙ(Sᶜ) = 1 - μₙ(S)",
            "limsup (1 - μₙ(S)) = 1 - liminf μₙ(S) (двойственность)",
            "1 - liminf μₙ(S) ≤ 1 - μ(S) ⇒ μ(S) ≤ liminf μₙ(S) (сокращение, 1 < ∞)",
        )


class DerivedPointwiseConvergence(PointwiseConvergence):
    """Поточечная сходимость на continuity sets, выведенная squeeze-аргументом."""

    def __init__(
        self,
        liminf_criterion: LiminfCriterion,
        limsup_criterion: LimsupCriterion,
        derived_from: CriterionKind,
    ):
        super().__init__(
            liminf_criterion.sequence,
            liminf_criterion.limit,
            liminf_criterion.topology,
            liminf_criterion.config,
        )
        self.liminf_criterion = liminf_criterion
        self.limsup_criterion = limsup_criterion
        self.derived_from = derived_from

    def bound(self, s: Any) -> SetBound:
        self.require_continuity_set(s)
        window = self.config.window
        tol = self.config.tolerance

        # μ(int S) = μ(S) = μ(cl S)
        squeeze = measure_equals_interior(self.limit, s, self.topology, tol)
        measure_equals_closure(self.limit, s, self.topology, tol)

        interior = self.topology.interior(s)
        closure = self.topology.closure(s)
        lower = self.liminf_criterion.bound(interior)
        upper = self.limsup_criterion.bound(closure)

        f = self.sequence.mass_sequence(s)
        f_interior = self.sequence.mass_sequence(interior)
        f_closure = self.sequence.mass_sequence(closure)

        # μₙ(int S) ≤ μₙ(S) ≤ μₙ(cl S) для всех n
        low = transport_liminf(f_interior, f, _bounded(self, f), window, tol)
        high = transport_limsup(f, f_closure, _bounded(self, f_closure), window, tol)
        pair = liminf_le_limsup(f, window)

        holds = lower.holds and upper.holds
        logger.debug(
            "pointwise on %s: %.12g ≤ liminf %.12g ≤ limsup %.12g ≤ %.12g, holds=%s",
            s, squeeze.interior_mass, low.upper_limit, high.lower_limit, squeeze.closure_mass, holds,
        )
        return SetBound(
            set_label=str(s),
            limit_mass=squeeze.set_mass,
            liminf=pair.liminf,
            limsup=pair.limsup,
            holds=holds,
            details=(
                f"μ(int S) = {squeeze.interior_mass:.12g} ≤ liminf μₙ(int S) = {low.lower_limit:.12g} "
                f"≤ liminf μₙ(S) = {pair.liminf:.12g} ≤ limsup μₙ(S) = {pair.limsup:.12g} "
                f"≤ limsup μₙ(cl S) = {high.upper_limit:.12g} ≤ μ(cl S) = {squeeze.closure_mass:.12g}"
            ),
        )

    def steps(self) -> tuple[str, ...]:
        return (
            "S — continuity set ⇒ μ(int S) = μ(S) = μ(cl S)",
            "int S открыто ⇒ μ(int S) ≤ liminf μₙ(int S)",
            "cl S замкнуто ⇒ limsup μₙ(cl S) ≤ μ(cl S)",
            "μₙ(int S) ≤ μₙ(S) ≤ μₙ(cl S) ⇒ монотонный перенос liminf / limsup",
            "liminf μₙ(S) ≤ limsup μₙ(S) ⇒ liminf = limsup = μ(S)",
        )


# =============================================================================
# ВЫВОДЫ
# =============================================================================


def limsup_from_liminf(criterion: LiminfCriterion) -> LimsupCriterion:
    """Liminf ⇒ Limsup; для выведенного критерия возвращает его источник."""
    if isinstance(criterion, DerivedLiminfCriterion):
        return criterion.source
    return DerivedLimsupCriterion(criterion)


def liminf_from_limsup(criterion: LimsupCriterion) -> LiminfCriterion:
    """Limsup ⇒ Liminf; для выведенного критерия возвращает его источник."""
    if isinstance(criterion, DerivedLimsupCriterion):
        return criterion.source
    return DerivedLiminfCriterion(criterion)


def pointwise_from_liminf(criterion: LiminfCriterion) -> PointwiseConvergence:
    """Liminf ⇒ Limsup ⇒ Pointwise (squeeze)."""
    return DerivedPointwiseConvergence(
        criterion, limsup_from_liminf(criterion), derived_from=CriterionKind.LIMINF_OPEN
    )


def pointwise_from_limsup(criterion: LimsupCriterion) -> PointwiseConvergence:
    """Limsup ⇒ Liminf ⇒ Pointwise (squeeze)."""
    return DerivedPointwiseConvergence(
        liminf_from_limsup(criterion), criterion, derived_from=CriterionKind.LIMSUP_CLOSED
    )


# =============================================================================
# PORTMANTEAU
# =============================================================================


def verify_portmanteau(
    sequence: MeasureSequence,
    limit: ProbabilityMeasure,
    topology: Topology,
    open_sets: Optional[Iterable[Any]] = None,
    closed_sets: Optional[Iterable[Any]] = None,
    continuity_sets: Optional[Iterable[Any]] = None,
    config: Optional[CriterionConfig] = None,
) -> PortmanteauReport:
    """
    Прямая проверка трёх критериев и всех выводов между ними.

    Для FiniteTopology семейства по умолчанию перечисляются исчерпывающе;
    для остальных топологий они обязательны.
    """
    liminf_criterion = LiminfCriterion(sequence, limit, topology, config)
    limsup_criterion = LimsupCriterion(sequence, limit, topology, config)
    pointwise = PointwiseConvergence(sequence, limit, topology, config)

    open_family = list(liminf_criterion.default_family() if open_sets is None else open_sets)
    closed_family = list(limsup_criterion.default_family() if closed_sets is None else closed_sets)
    continuity_family = list(pointwise.default_family() if continuity_sets is None else continuity_sets)
    complementary = {s.complement() for s in closed_family} == set(open_family)

    report = PortmanteauReport(
        liminf_open=liminf_criterion.verify(open_family),
        limsup_closed=limsup_criterion.verify(closed_family),
        pointwise=pointwise.verify(continuity_family),
        limsup_from_liminf=limsup_from_liminf(liminf_criterion).verify(closed_family),
        liminf_from_limsup=liminf_from_limsup(limsup_criterion).verify(open_family),
        pointwise_from_liminf=pointwise_from_liminf(liminf_criterion).verify(continuity_family),
        pointwise_from_limsup=pointwise_from_limsup(limsup_criterion).verify(continuity_family),
        complementary_families=complementary,
    )
    logger.info(
        "portmanteau for %s: converges_weakly=%s consistent=%s",
        sequence.label, report.converges_weakly, report.consistent,
    )
    return report
