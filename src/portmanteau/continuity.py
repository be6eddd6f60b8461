"""Continuity Sets — множества с границей нулевой массы

Для меры μ и множества S:

    S — continuity set  ⇔  μ(frontier S) = 0

Лемма 1 (interior = closure):
    closure S = interior S ⊔ frontier S  ⇒  μ(closure S) = μ(interior S) + μ(frontier S)
                                             = μ(interior S)

Лемма 2 (squeeze):
    interior S ⊆ S ⊆ closure S, монотонность μ и лемма 1
    ⇒ μ(interior S) = μ(S) = μ(closure S)

Предикат определён для любой конечной меры (FiniteMeasure), не только для
вероятностной: нормировка нужна только критериям сходимости.
"""

import logging
from typing import Any

from src.core.contracts.violations import (
    ContractViolation,
    NotAContinuitySet,
    TopologyInvariantViolation,
)
from src.core.domain.measures import FiniteMeasure
from src.core.domain.topology import Topology
from src.core.math.bounded_arithmetic import add_extended
from src.core.math.numerical_safeguards import EPS_MASS_COMPARE_ABS, is_close, is_le, is_zero
from src.portmanteau.witness import ContinuityWitness

logger = logging.getLogger(__name__)


def is_continuity_set(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> bool:
    """μ(frontier S) = 0 (с толерантностью tol)."""
    return is_zero(measure.mass(topology.frontier(s)), tol)


def _same_set(a: Any, b: Any) -> bool:
    return a.is_subset(b) and b.is_subset(a)


def _decompose(s: Any, topology: Topology) -> tuple[Any, Any, Any]:
    """
    interior, closure, frontier с проверкой структурных фактов коллаборатора.

    Raises:
        TopologyInvariantViolation: если нарушено interior ⊆ S ⊆ closure или
            closure ≠ interior ⊔ frontier
    """
    interior = topology.interior(s)
    closure = topology.closure(s)
    frontier = topology.frontier(s)

    if not interior.is_subset(s) or not s.is_subset(closure):
        raise TopologyInvariantViolation(f"interior ⊆ S ⊆ closure fails for {s}")
    if not _same_set(interior.union(frontier), closure):
        raise TopologyInvariantViolation(f"closure ≠ interior ∪ frontier for {s}")
    if not interior.intersection(frontier).is_empty():
        raise TopologyInvariantViolation(f"interior and frontier intersect for {s}")

    return interior, closure, frontier


def analyze_continuity(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> ContinuityWitness:
    """
    Массы interior / S / closure / frontier без требования continuity.

    Используется для диагностики и контрпримеров (например, δ_0.5 и [0, 0.5]).
    """
    interior, closure, frontier = _decompose(s, topology)
    frontier_mass = measure.mass(frontier)
    return ContinuityWitness(
        set_label=str(s),
        interior_mass=measure.mass(interior),
        set_mass=measure.mass(s),
        closure_mass=measure.mass(closure),
        frontier_mass=frontier_mass,
        is_continuity_set=is_zero(frontier_mass, tol),
    )


def _require_continuity_set(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float,
) -> float:
    frontier_mass = measure.mass(topology.frontier(s))
    if not is_zero(frontier_mass, tol):
        raise NotAContinuitySet(f"{s} is not a continuity set: μ(frontier) = {frontier_mass}")
    return frontier_mass


def measure_interior_equals_closure(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> ContinuityWitness:
    """
    μ(interior S) = μ(closure S) для continuity set S.

    Raises:
        NotAContinuitySet: если μ(frontier S) ≠ 0
        TopologyInvariantViolation: если нарушена декомпозиция closure
        ContractViolation: если мера не аддитивна на декомпозиции
    """
    frontier_mass = _require_continuity_set(measure, s, topology, tol)
    interior, closure, _ = _decompose(s, topology)

    interior_mass = measure.mass(interior)
    closure_mass = measure.mass(closure)
    # Аддитивность на дизъюнктном объединении interior ⊔ frontier
    additive_mass = add_extended(interior_mass, frontier_mass)
    if not is_close(closure_mass, additive_mass, abs_tol=tol):
        raise ContractViolation(
            f"measure is not additive on closure = interior ⊔ frontier for {s}: "
            f"{closure_mass} != {interior_mass} + {frontier_mass}"
        )

    logger.debug("μ(int %s) = μ(cl %s) = %.12g", s, s, interior_mass)
    return ContinuityWitness(
        set_label=str(s),
        interior_mass=interior_mass,
        set_mass=measure.mass(s),
        closure_mass=closure_mass,
        frontier_mass=frontier_mass,
        is_continuity_set=True,
        steps=(
            "closure S = interior S ⊔ frontier S",
            f"μ(closure S) = μ(interior S) + μ(frontier S) = {interior_mass:.12g} + {frontier_mass:.3g}",
            "μ(frontier S) = 0 ⇒ μ(interior S) = μ(closure S)",
        ),
    )


def _squeeze(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float,
    conclusion: str,
) -> ContinuityWitness:
    equality = measure_interior_equals_closure(measure, s, topology, tol)
    set_mass = equality.set_mass

    # Монотонность: interior S ⊆ S ⊆ closure S
    if not (is_le(equality.interior_mass, set_mass, tol) and is_le(set_mass, equality.closure_mass, tol)):
        raise ContractViolation(
            f"measure is not monotone on interior ⊆ S ⊆ closure for {s}: "
            f"{equality.interior_mass}, {set_mass}, {equality.closure_mass}"
        )

    return equality.model_copy(
        update={
            "steps": equality.steps
            + (
                f"μ(interior S) ≤ μ(S) ≤ μ(closure S): "
                f"{equality.interior_mass:.12g} ≤ {set_mass:.12g} ≤ {equality.closure_mass:.12g}",
                conclusion,
            )
        }
    )


def measure_equals_interior(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> ContinuityWitness:
    """
    μ(S) = μ(interior S) для continuity set S (squeeze).

    Raises:
        NotAContinuitySet: если μ(frontier S) ≠ 0
    """
    return _squeeze(measure, s, topology, tol, "μ(interior S) = μ(closure S) ⇒ μ(S) = μ(interior S)")


def measure_equals_closure(
    measure: FiniteMeasure,
    s: Any,
    topology: Topology,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> ContinuityWitness:
    """
    μ(S) = μ(closure S) для continuity set S (squeeze).

    Raises:
        NotAContinuitySet: если μ(frontier S) ≠ 0
    """
    return _squeeze(measure, s, topology, tol, "μ(interior S) = μ(closure S) ⇒ μ(S) = μ(closure S)")
