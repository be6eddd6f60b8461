"""Portmanteau — критерии слабой сходимости вероятностных мер и выводы между ними.

- continuity: continuity sets и squeeze-леммы
- criteria: liminf на открытых, limsup на замкнутых, поточечная сходимость
- equivalence: Liminf ⇔ Limsup, односторонние критерии ⇒ поточечная сходимость
"""

from .continuity import (
    analyze_continuity,
    is_continuity_set,
    measure_equals_closure,
    measure_equals_interior,
    measure_interior_equals_closure,
)
from .criteria import (
    ConvergenceCriterion,
    CriterionConfig,
    LiminfCriterion,
    LimsupCriterion,
    PointwiseConvergence,
)
from .equivalence import (
    DerivedLiminfCriterion,
    DerivedLimsupCriterion,
    DerivedPointwiseConvergence,
    liminf_from_limsup,
    limsup_from_liminf,
    pointwise_from_liminf,
    pointwise_from_limsup,
    verify_portmanteau,
)
from .witness import (
    ContinuityWitness,
    ConvergenceWitness,
    CriterionKind,
    PortmanteauReport,
    SetBound,
)

__all__ = [
    "analyze_continuity",
    "is_continuity_set",
    "measure_equals_closure",
    "measure_equals_interior",
    "measure_interior_equals_closure",
    "ConvergenceCriterion",
    "CriterionConfig",
    "LiminfCriterion",
    "LimsupCriterion",
    "PointwiseConvergence",
    "DerivedLiminfCriterion",
    "DerivedLimsupCriterion",
    "DerivedPointwiseConvergence",
    "liminf_from_limsup",
    "limsup_from_liminf",
    "pointwise_from_liminf",
    "pointwise_from_limsup",
    "verify_portmanteau",
    "ContinuityWitness",
    "ConvergenceWitness",
    "CriterionKind",
    "PortmanteauReport",
    "SetBound",
]
