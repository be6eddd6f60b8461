"""
Domain collaborators: sets, topologies, and measures.

Contains the concrete spaces (real line, finite spaces), the measures the
criteria evaluate, and the measure sequence type.
"""

from src.core.domain.finite_space import FiniteSet, FiniteTopology
from src.core.domain.interval_sets import (
    EMPTY,
    REAL_LINE,
    Interval,
    IntervalSet,
    closed_interval,
    half_open_interval,
    open_interval,
    point,
    ray_above,
    ray_below,
)
from src.core.domain.measure_sequence import MeasureSequence
from src.core.domain.measures import (
    DiracMeasure,
    DiscreteMeasure,
    FiniteAtomicMeasure,
    FiniteMeasure,
    MixtureMeasure,
    ProbabilityMeasure,
    UniformMeasure,
)
from src.core.domain.topology import RealLineTopology, TopologicalSet, Topology

__all__ = [
    # Interval sets
    "EMPTY",
    "REAL_LINE",
    "Interval",
    "IntervalSet",
    "closed_interval",
    "half_open_interval",
    "open_interval",
    "point",
    "ray_above",
    "ray_below",
    # Finite spaces
    "FiniteSet",
    "FiniteTopology",
    # Topology
    "Topology",
    "TopologicalSet",
    "RealLineTopology",
    # Measures
    "FiniteMeasure",
    "ProbabilityMeasure",
    "FiniteAtomicMeasure",
    "DiracMeasure",
    "DiscreteMeasure",
    "UniformMeasure",
    "MixtureMeasure",
    # Sequences
    "MeasureSequence",
]
