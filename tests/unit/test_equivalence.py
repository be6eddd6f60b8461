"""
Тесты для Equivalence — выводы между критериями слабой сходимости

Проверяемые инварианты:
1. Liminf ⇒ Limsup и Limsup ⇒ Liminf через дополнения
2. Обратный вывод из выведенного критерия возвращает источник
3. Односторонний критерий ⇒ поточечная сходимость на continuity sets
4. Выведенный критерий согласуется с прямой проверкой
"""

import pytest

from src.core.contracts.violations import NotAContinuitySet, NotClosedSet
from src.core.domain.finite_space import FiniteTopology
from src.core.domain.interval_sets import (
    REAL_LINE,
    closed_interval,
    open_interval,
    point,
    ray_above,
)
from src.core.domain.measure_sequence import MeasureSequence
from src.core.domain.measures import DiracMeasure, DiscreteMeasure, UniformMeasure
from src.core.domain.topology import RealLineTopology
from src.portmanteau.criteria import LiminfCriterion, LimsupCriterion
from src.portmanteau.equivalence import (
    DerivedLiminfCriterion,
    DerivedLimsupCriterion,
    DerivedPointwiseConvergence,
    liminf_from_limsup,
    limsup_from_liminf,
    pointwise_from_liminf,
    pointwise_from_limsup,
    verify_portmanteau,
)
from src.portmanteau.witness import CriterionKind


@pytest.fixture
def real_line():
    return RealLineTopology()


@pytest.fixture
def dirac_to_zero():
    """δ(1/n) ⇒ δ(0)."""
    return MeasureSequence(lambda n: DiracMeasure(at=1.0 / max(n, 1)), REAL_LINE, label="δ")


@pytest.fixture
def shrinking_uniform():
    """U[0, 1 + 1/n] ⇒ U[0, 1]."""
    return MeasureSequence(
        lambda n: UniformMeasure(low=0.0, high=1.0 + 1.0 / max(n, 1)), REAL_LINE, label="U"
    )


@pytest.fixture
def two_points():
    return FiniteTopology.discrete(["a", "b"])


@pytest.fixture
def vanishing_b(two_points):
    def term(n):
        eps = 1.0 / (n + 2)
        return DiscreteMeasure(atoms={"a": 1.0 - eps, "b": eps})

    return MeasureSequence(term, two_points.whole, label="ν")


OPEN_SETS = [open_interval(-1.0, 1.0), open_interval(0.0, 1.0), ray_above(0.0), open_interval(0.5, 2.0)]
CLOSED_SETS = [point(0.0), closed_interval(0.0, 1.0), closed_interval(0.5, 1.0), closed_interval(-1.0, 2.0)]
CONTINUITY_SETS = [open_interval(-1.0, 1.0), closed_interval(0.5, 1.0), REAL_LINE]


# =============================================================================
# ТЕСТЫ: Liminf ⇔ Limsup
# =============================================================================


class TestComplementDerivation:
    def test_limsup_from_liminf(self, dirac_to_zero, real_line):
        source = LiminfCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line)
        derived = limsup_from_liminf(source)

        assert isinstance(derived, DerivedLimsupCriterion)
        assert derived.source is source

        witness = derived.verify(CLOSED_SETS)
        assert witness.holds
        assert witness.criterion == CriterionKind.LIMSUP_CLOSED
        assert witness.derived_from == CriterionKind.LIMINF_OPEN
        assert len(witness.steps) == 5

    def test_liminf_from_limsup(self, dirac_to_zero, real_line):
        source = LimsupCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line)
        derived = liminf_from_limsup(source)

        assert isinstance(derived, DerivedLiminfCriterion)
        witness = derived.verify(OPEN_SETS)
        assert witness.holds
        assert witness.derived_from == CriterionKind.LIMSUP_CLOSED

    def test_derived_matches_direct(self, dirac_to_zero, real_line):
        limit = DiracMeasure(at=0.0)
        direct = LimsupCriterion(dirac_to_zero, limit, real_line)
        derived = limsup_from_liminf(LiminfCriterion(dirac_to_zero, limit, real_line))
        for s in CLOSED_SETS:
            a = direct.bound(s)
            b = derived.bound(s)
            assert a.holds == b.holds
            assert a.limsup == pytest.approx(b.limsup)
            assert a.limit_mass == pytest.approx(b.limit_mass)

    def test_failure_propagates(self, dirac_to_zero, real_line):
        """δ(1/n) к δ(1): [-0.5, 0.5] нарушает limsup, дополнение нарушает liminf."""
        source = LiminfCriterion(dirac_to_zero, DiracMeasure(at=1.0), real_line)
        bound = limsup_from_liminf(source).bound(closed_interval(-0.5, 0.5))
        assert not bound.holds
        assert bound.limsup == 1.0
        assert bound.limit_mass == 0.0

    def test_derived_rejects_non_closed(self, dirac_to_zero, real_line):
        derived = limsup_from_liminf(LiminfCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line))
        with pytest.raises(NotClosedSet):
            derived.bound(open_interval(0.0, 1.0))

    def test_round_trip_returns_source(self, dirac_to_zero, real_line):
        liminf_source = LiminfCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line)
        assert liminf_from_limsup(limsup_from_liminf(liminf_source)) is liminf_source

        limsup_source = LimsupCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line)
        assert limsup_from_liminf(liminf_from_limsup(limsup_source)) is limsup_source


# =============================================================================
# ТЕСТЫ: ⇒ Pointwise
# =============================================================================


class TestPointwiseDerivation:
    def test_pointwise_from_liminf(self, dirac_to_zero, real_line):
        criterion = pointwise_from_liminf(LiminfCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line))
        assert isinstance(criterion, DerivedPointwiseConvergence)

        witness = criterion.verify(CONTINUITY_SETS)
        assert witness.holds
        assert witness.criterion == CriterionKind.POINTWISE
        assert witness.derived_from == CriterionKind.LIMINF_OPEN
        assert len(witness.steps) == 5

    def test_pointwise_from_limsup(self, dirac_to_zero, real_line):
        criterion = pointwise_from_limsup(LimsupCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line))
        witness = criterion.verify(CONTINUITY_SETS)
        assert witness.holds
        assert witness.derived_from == CriterionKind.LIMSUP_CLOSED

    def test_shrinking_uniform(self, shrinking_uniform, real_line):
        """U[0, 1 + 1/n]: μₙ[0, 0.5] = 0.5 / (1 + 1/n) → 0.5."""
        limit = UniformMeasure(low=0.0, high=1.0)
        criterion = pointwise_from_liminf(LiminfCriterion(shrinking_uniform, limit, real_line))
        bound = criterion.bound(closed_interval(0.0, 0.5))
        assert bound.holds
        assert bound.limit_mass == pytest.approx(0.5)
        assert bound.liminf == pytest.approx(0.5, abs=1e-9)
        assert bound.limsup == pytest.approx(0.5, abs=1e-9)

    def test_rejects_non_continuity_set(self, dirac_to_zero, real_line):
        criterion = pointwise_from_limsup(LimsupCriterion(dirac_to_zero, DiracMeasure(at=0.0), real_line))
        with pytest.raises(NotAContinuitySet):
            criterion.bound(closed_interval(0.0, 1.0))

    def test_wrong_limit_fails(self, dirac_to_zero, real_line):
        criterion = pointwise_from_liminf(LiminfCriterion(dirac_to_zero, DiracMeasure(at=1.0), real_line))
        witness = criterion.verify([open_interval(0.5, 2.0)])
        assert not witness.holds


# =============================================================================
# ТЕСТЫ: verify_portmanteau
# =============================================================================


class TestVerifyPortmanteau:
    def test_real_line(self, dirac_to_zero, real_line):
        report = verify_portmanteau(
            dirac_to_zero,
            DiracMeasure(at=0.0),
            real_line,
            open_sets=OPEN_SETS,
            closed_sets=CLOSED_SETS,
            continuity_sets=CONTINUITY_SETS,
        )
        assert report.converges_weakly
        assert report.consistent
        assert report.limsup_from_liminf.holds
        assert report.pointwise_from_limsup.holds

    def test_finite_space_exhaustive(self, vanishing_b, two_points):
        report = verify_portmanteau(vanishing_b, DiracMeasure(at="a"), two_points)
        assert report.converges_weakly
        assert report.consistent
        assert len(report.liminf_open.bounds) == 4
        assert len(report.pointwise.bounds) == 4
        assert report.complementary_families

    def test_finite_space_total_variation_limit(self, vanishing_b, two_points):
        """ν_n = (1 - ε_n) δa + ε_n δb, ε_n = 1 / (n + 2): TV(ν_n, δa) = ε_n → 0."""
        point_mass_a = DiscreteMeasure(atoms={"a": 1.0})
        for n in (0, 10**3, 10**6):
            assert vanishing_b[n].total_variation(point_mass_a) == pytest.approx(1.0 / (n + 2))

        report = verify_portmanteau(vanishing_b, DiracMeasure(at="a"), two_points)
        bounds = {b.set_label: b for b in report.pointwise.bounds}
        assert set(bounds) == {"∅", "{a}", "{b}", "{a, b}"}

        assert bounds["{a}"].limit_mass == 1.0
        assert bounds["{a}"].liminf == pytest.approx(1.0, abs=1e-9)
        assert bounds["{a}"].limsup == pytest.approx(1.0, abs=1e-9)

        assert bounds["{b}"].limit_mass == 0.0
        assert bounds["{b}"].liminf == pytest.approx(0.0, abs=1e-9)
        assert bounds["{b}"].limsup == pytest.approx(0.0, abs=1e-9)

        assert bounds["{a, b}"].limit_mass == 1.0
        assert bounds["{a, b}"].liminf == pytest.approx(1.0)
        assert bounds["∅"].limit_mass == 0.0

    def test_unrelated_families_consistent(self, dirac_to_zero, real_line):
        """Замкнутое семейство не дополняет открытое: liminf и limsup расходятся,
        но каждый вывод совпадает со своей прямой проверкой."""
        report = verify_portmanteau(
            dirac_to_zero,
            DiracMeasure(at=1.0),
            real_line,
            open_sets=[open_interval(0.5, 2.0)],
            closed_sets=[point(5.0)],
            continuity_sets=[open_interval(0.5, 2.0)],
        )
        assert not report.complementary_families
        assert not report.liminf_open.holds
        assert not report.liminf_from_limsup.holds
        assert report.limsup_closed.holds
        assert report.limsup_from_liminf.holds
        assert not report.pointwise.holds
        assert not report.pointwise_from_liminf.holds
        assert not report.pointwise_from_limsup.holds
        assert not report.converges_weakly
        assert report.consistent

    def test_complementary_families_detected(self, dirac_to_zero, real_line):
        opens = [open_interval(-1.0, 1.0), ray_above(0.0)]
        report = verify_portmanteau(
            dirac_to_zero,
            DiracMeasure(at=0.0),
            real_line,
            open_sets=opens,
            closed_sets=[s.complement() for s in opens],
            continuity_sets=[open_interval(-1.0, 1.0)],
        )
        assert report.complementary_families
        assert report.converges_weakly
        assert report.consistent

    def test_alternating_does_not_converge(self, two_points):
        seq = MeasureSequence(
            lambda n: DiracMeasure(at="a" if n % 2 == 0 else "b"), two_points.whole, label="alt"
        )
        report = verify_portmanteau(seq, DiracMeasure(at="a"), two_points)
        assert not report.converges_weakly
        assert not report.liminf_open.holds
        assert not report.limsup_closed.holds
        assert not report.limsup_from_liminf.holds
        assert not report.liminf_from_limsup.holds
        assert not report.pointwise_from_liminf.holds
        assert report.consistent
