"""
Core math modules

Арифметика масс на [0, 1] и liminf/limsup ограниченных последовательностей.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_MASS,
    EPS_MASS_COMPARE_ABS,
    EPS_MASS_COMPARE_REL,
    # Checks
    is_extended_nonnegative,
    is_valid_float,
    # Epsilon comparisons
    is_close,
    is_le,
    is_zero,
    # Utilities
    clamp,
    # Validation
    validate_in_range,
    validate_non_negative,
)

# Bounded Arithmetic
from src.core.math.bounded_arithmetic import (
    EXTENDED_TOP,
    UNIT_LOWER,
    UNIT_UPPER,
    add_extended,
    complement_value,
    is_finite_bound,
    is_involutive,
    le_of_truncated_sub_le,
    rebound,
    require_finite_bound,
    subtract_truncated,
    validate_extended_value,
    validate_unit_value,
)

# Sequence Limits
from src.core.math.sequence_limits import (
    DEFAULT_BLOCK_LENGTH,
    DEFAULT_TAIL_SCALES,
    DEFAULT_TAIL_WINDOW,
    BoundednessWitness,
    DualityCheck,
    LimitPair,
    MonotoneTransport,
    TailWindow,
    ValueSequence,
    check_duality,
    constant_sequence,
    converges_to,
    establish_bounds,
    eventually,
    eventually_periodic,
    liminf,
    liminf_le_limsup,
    liminf_of_complement,
    limsup,
    limsup_of_complement,
    transport_liminf,
    transport_limsup,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_MASS",
    "EPS_MASS_COMPARE_ABS",
    "EPS_MASS_COMPARE_REL",
    # Numerical Safeguards — Checks
    "is_extended_nonnegative",
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "is_le",
    "is_zero",
    # Numerical Safeguards — Utilities
    "clamp",
    # Numerical Safeguards — Validation
    "validate_in_range",
    "validate_non_negative",
    # Bounded Arithmetic — Constants
    "EXTENDED_TOP",
    "UNIT_LOWER",
    "UNIT_UPPER",
    # Bounded Arithmetic — Functions
    "add_extended",
    "complement_value",
    "is_finite_bound",
    "is_involutive",
    "le_of_truncated_sub_le",
    "rebound",
    "require_finite_bound",
    "subtract_truncated",
    "validate_extended_value",
    "validate_unit_value",
    # Sequence Limits — Constants
    "DEFAULT_BLOCK_LENGTH",
    "DEFAULT_TAIL_SCALES",
    "DEFAULT_TAIL_WINDOW",
    # Sequence Limits — Types
    "BoundednessWitness",
    "DualityCheck",
    "LimitPair",
    "MonotoneTransport",
    "TailWindow",
    "ValueSequence",
    # Sequence Limits — Functions
    "check_duality",
    "constant_sequence",
    "converges_to",
    "establish_bounds",
    "eventually",
    "eventually_periodic",
    "liminf",
    "liminf_le_limsup",
    "liminf_of_complement",
    "limsup",
    "limsup_of_complement",
    "transport_liminf",
    "transport_limsup",
]
