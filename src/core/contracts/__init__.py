"""
Contract Violations Module

Ошибки контракта вызывающей стороны для всех операций библиотеки.
"""

from .violations import (
    ContractViolation,
    ExtendedTopViolation,
    MissingBoundednessWitness,
    NotAContinuitySet,
    NotAProbabilityMeasure,
    NotClosedSet,
    NotOpenSet,
    TopologyInvariantViolation,
    UnitIntervalViolation,
)

__all__ = [
    "ContractViolation",
    "UnitIntervalViolation",
    "ExtendedTopViolation",
    "MissingBoundednessWitness",
    "NotAContinuitySet",
    "NotOpenSet",
    "NotClosedSet",
    "NotAProbabilityMeasure",
    "TopologyInvariantViolation",
]
