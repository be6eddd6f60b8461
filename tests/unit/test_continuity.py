"""
Тесты для Continuity Sets

Проверяемые инварианты:
1. S — continuity set ⇔ μ(frontier S) = 0
2. Для continuity set: μ(interior S) = μ(S) = μ(closure S)
3. Для не-continuity set вывод отклоняется (NotAContinuitySet)
4. Нарушение структурных фактов коллаборатора — TopologyInvariantViolation
5. Предикат определён для любой конечной меры
"""

from typing import Any

import pytest

from src.core.contracts.violations import (
    ContractViolation,
    NotAContinuitySet,
    TopologyInvariantViolation,
)
from src.core.domain.finite_space import FiniteSet, FiniteTopology
from src.core.domain.interval_sets import closed_interval, open_interval, point
from src.core.domain.measures import (
    DiracMeasure,
    FiniteAtomicMeasure,
    FiniteMeasure,
    UniformMeasure,
)
from src.core.domain.topology import RealLineTopology
from src.portmanteau.continuity import (
    analyze_continuity,
    is_continuity_set,
    measure_equals_closure,
    measure_equals_interior,
    measure_interior_equals_closure,
)


@pytest.fixture
def real_line():
    return RealLineTopology()


@pytest.fixture
def sierpinski():
    return FiniteTopology([0, 1], [[1]])


class SelfFrontierTopology:
    """Коллаборатор, нарушающий interior ∩ frontier = ∅."""

    def is_open(self, s: FiniteSet) -> bool:
        return True

    def is_closed(self, s: FiniteSet) -> bool:
        return True

    def interior(self, s: FiniteSet) -> FiniteSet:
        return s

    def closure(self, s: FiniteSet) -> FiniteSet:
        return s

    def frontier(self, s: FiniteSet) -> FiniteSet:
        return s


class TableMeasure(FiniteMeasure):
    """Мера, заданная таблицей масс (без аддитивности)."""

    table: dict[frozenset, float]

    def mass(self, s: Any) -> float:
        return self.table[s.points]


# =============================================================================
# ТЕСТЫ: Предикат
# =============================================================================


class TestIsContinuitySet:
    def test_uniform_interval(self, real_line):
        u = UniformMeasure(low=0.0, high=1.0)
        assert is_continuity_set(u, open_interval(0.0, 0.5), real_line)
        assert is_continuity_set(u, point(0.5), real_line)

    def test_dirac_on_boundary(self, real_line):
        delta = DiracMeasure(at=0.5)
        assert not is_continuity_set(delta, closed_interval(0.0, 0.5), real_line)
        assert is_continuity_set(delta, open_interval(0.0, 0.25), real_line)

    def test_finite_measure(self, sierpinski):
        m = FiniteAtomicMeasure(atoms={1: 2.0})
        assert is_continuity_set(m, sierpinski.subset([1]), sierpinski)
        assert not is_continuity_set(FiniteAtomicMeasure(atoms={0: 2.0}), sierpinski.subset([1]), sierpinski)


# =============================================================================
# ТЕСТЫ: Squeeze-леммы
# =============================================================================


class TestSqueeze:
    def test_uniform_open_interval(self, real_line):
        u = UniformMeasure(low=0.0, high=1.0)
        witness = measure_equals_interior(u, open_interval(0.0, 0.5), real_line)
        assert witness.is_continuity_set
        assert witness.set_mass == pytest.approx(0.5)
        assert witness.interior_mass == pytest.approx(0.5)
        assert witness.closure_mass == pytest.approx(0.5)
        assert witness.frontier_mass == 0.0
        assert len(witness.steps) == 5

    def test_interior_equals_closure(self, real_line):
        u = UniformMeasure(low=0.0, high=1.0)
        witness = measure_interior_equals_closure(u, closed_interval(0.25, 0.75), real_line)
        assert witness.interior_mass == pytest.approx(witness.closure_mass)
        assert len(witness.steps) == 3

    def test_each_lemma_records_its_own_conclusion(self, real_line):
        u = UniformMeasure(low=0.0, high=1.0)
        s = open_interval(0.0, 0.5)
        interior = measure_equals_interior(u, s, real_line)
        closure = measure_equals_closure(u, s, real_line)
        assert interior.steps[-1].endswith("μ(S) = μ(interior S)")
        assert closure.steps[-1].endswith("μ(S) = μ(closure S)")
        assert interior.steps[:-1] == closure.steps[:-1]

    def test_equals_closure_finite_measure(self, sierpinski):
        m = FiniteAtomicMeasure(atoms={1: 2.0})
        witness = measure_equals_closure(m, sierpinski.subset([1]), sierpinski)
        assert witness.set_mass == pytest.approx(2.0)
        assert witness.closure_mass == pytest.approx(2.0)

    def test_not_a_continuity_set(self, real_line):
        delta = DiracMeasure(at=0.5)
        s = closed_interval(0.0, 0.5)
        with pytest.raises(NotAContinuitySet):
            measure_interior_equals_closure(delta, s, real_line)
        with pytest.raises(NotAContinuitySet):
            measure_equals_interior(delta, s, real_line)
        with pytest.raises(NotAContinuitySet):
            measure_equals_closure(delta, s, real_line)

    def test_non_additive_measure(self, sierpinski):
        table = {
            frozenset(): 0.0,
            frozenset({0}): 0.0,
            frozenset({1}): 0.2,
            frozenset({0, 1}): 1.0,
        }
        m = TableMeasure(table=table)
        with pytest.raises(ContractViolation, match="not additive"):
            measure_interior_equals_closure(m, sierpinski.subset([1]), sierpinski)


# =============================================================================
# ТЕСТЫ: Диагностика
# =============================================================================


class TestAnalyzeContinuity:
    def test_dirac_counterexample(self, real_line):
        """δ_0.5 и [0, 0.5]: μ(int S) = 0, μ(S) = μ(cl S) = 1."""
        witness = analyze_continuity(DiracMeasure(at=0.5), closed_interval(0.0, 0.5), real_line)
        assert not witness.is_continuity_set
        assert witness.interior_mass == 0.0
        assert witness.set_mass == 1.0
        assert witness.closure_mass == 1.0
        assert witness.frontier_mass == 1.0
        assert witness.set_label == "[0, 0.5]"

    def test_broken_topology(self):
        universe = frozenset({"a"})
        s = FiniteSet(frozenset({"a"}), universe)
        with pytest.raises(TopologyInvariantViolation, match="intersect"):
            analyze_continuity(DiracMeasure(at="a"), s, SelfFrontierTopology())
