"""
Sequence Limits — liminf / limsup ограниченных последовательностей

Последовательность — тотальная функция n ↦ f(n) со значениями в [0, ∞].
Бесконечные хвосты не итерируются: eventual-поведение наблюдается на
конечном наборе probe-индексов TailWindow.

ОПРЕДЕЛЕНИЯ (tail / cofinite filter над ℕ):
    eventually P  ⇔  ∃ n0 ∀ n ≥ n0: P(n)
    liminf f = sup{ b : eventually f(n) ≥ b } = sup_n0 inf_{n ≥ n0} f(n)
    limsup f = inf{ b : eventually f(n) ≤ b } = inf_n0 sup_{n ≥ n0} f(n)

TailWindow задаёт пороги-кандидаты n0 (scales) и для каждого порога блок
подряд идущих индексов длины block_length. "∀ n ≥ n0" проверяется на всех
блоках с порогом ≥ n0.

ЗАКОНЫ:
1. liminf f ≤ limsup f — всегда, без свидетеля ограниченности
2. Двойственность (требует BoundednessWitness):
       liminf(1 - f) = 1 - limsup f
       limsup(1 - f) = 1 - liminf f
3. Монотонный перенос: g ≤ f eventually ⇒ liminf g ≤ liminf f,
   limsup g ≤ limsup f (требует свидетеля ограниченности f)

ОГРАНИЧЕНИЯ:
- Периодическая компонента хвоста видна полностью, только если её
  период ≤ block_length
- Значение math.inf в хвосте даёт sentinel limsup = ∞
"""

from dataclasses import dataclass
from typing import Callable, Final, NamedTuple, Optional, Sequence

from src.core.contracts.violations import ContractViolation, MissingBoundednessWitness
from src.core.math.bounded_arithmetic import (
    UNIT_LOWER,
    UNIT_UPPER,
    complement_value,
    rebound,
    require_finite_bound,
    subtract_truncated,
    validate_extended_value,
)
from src.core.math.numerical_safeguards import EPS_MASS_COMPARE_ABS, is_close, is_le

# =============================================================================
# КОНФИГУРАЦИЯ ХВОСТА
# =============================================================================

# Пороги-кандидаты n0 (по возрастанию)
DEFAULT_TAIL_SCALES: Final[tuple[int, ...]] = (10**3, 10**6, 10**9, 10**12)

# Длина блока подряд идущих индексов после каждого порога
DEFAULT_BLOCK_LENGTH: Final[int] = 64


@dataclass(frozen=True)
class TailWindow:
    """Конфигурация probe-индексов хвоста.

    Для каждого порога n0 из scales проверяются индексы
    n0, n0 + 1, ..., n0 + block_length - 1.
    """

    scales: tuple[int, ...] = DEFAULT_TAIL_SCALES
    block_length: int = DEFAULT_BLOCK_LENGTH

    def __post_init__(self) -> None:
        if not self.scales:
            raise ValueError("scales must not be empty")
        if any(s < 0 for s in self.scales):
            raise ValueError(f"scales must be non-negative, got {self.scales}")
        if any(b <= a for a, b in zip(self.scales, self.scales[1:])):
            raise ValueError(f"scales must be strictly increasing, got {self.scales}")
        if self.block_length < 1:
            raise ValueError(f"block_length must be >= 1, got {self.block_length}")

    def thresholds(self) -> tuple[int, ...]:
        """Пороги-кандидаты n0."""
        return self.scales

    def block(self, n0: int) -> range:
        """Блок индексов после порога n0."""
        return range(n0, n0 + self.block_length)

    def probe_indices(self, n0: int) -> list[int]:
        """Все probe-индексы n ≥ n0 (блоки порогов ≥ n0)."""
        return [n for scale in self.scales if scale >= n0 for n in self.block(scale)]


DEFAULT_TAIL_WINDOW: Final[TailWindow] = TailWindow()


# =============================================================================
# ПОСЛЕДОВАТЕЛЬНОСТИ
# =============================================================================


@dataclass(frozen=True, eq=False)
class ValueSequence:
    """
    Последовательность n ↦ f(n) ∈ [0, ∞].

    Каждый член валидируется при вычислении: отрицательное значение или NaN —
    нарушение контракта.
    """

    term: Callable[[int], float]
    label: str = "f"

    def __call__(self, n: int) -> float:
        if n < 0:
            raise ContractViolation(f"sequence index must be a natural number, got {n}")
        return validate_extended_value(self.term(n), f"{self.label}({n})")

    def complement(self) -> "ValueSequence":
        """Последовательность n ↦ 1 ⊖ f(n); члены обязаны лежать в [0, 1]."""
        return ValueSequence(lambda n: complement_value(self(n)), label=f"1 - {self.label}")


def constant_sequence(value: float, label: Optional[str] = None) -> ValueSequence:
    """Постоянная последовательность n ↦ value."""
    return ValueSequence(lambda n: value, label=label or f"const({value})")


def eventually_periodic(
    prefix: Sequence[float],
    cycle: Sequence[float],
    label: str = "periodic",
    window: TailWindow = DEFAULT_TAIL_WINDOW,
) -> ValueSequence:
    """
    Последовательность prefix[0], ..., prefix[k-1], cycle[0], cycle[1], ...

    Блок window содержит block_length подряд идущих индексов, поэтому цикл
    виден полностью, только если len(cycle) <= window.block_length.

    Raises:
        ValueError: Если cycle пуст
        ContractViolation: Если цикл длиннее блока window

    Examples:
        >>> f = eventually_periodic([], [0.0, 1.0])
        >>> [f(n) for n in range(4)]
        [0.0, 1.0, 0.0, 1.0]
    """
    if not cycle:
        raise ValueError("cycle must not be empty")
    if len(cycle) > window.block_length:
        raise ContractViolation(
            f"cycle of length {len(cycle)} is not observable with block_length={window.block_length}"
        )
    prefix = tuple(prefix)
    cycle = tuple(cycle)

    def term(n: int) -> float:
        if n < len(prefix):
            return prefix[n]
        return cycle[(n - len(prefix)) % len(cycle)]

    return ValueSequence(term, label=label)


# =============================================================================
# EVENTUALLY
# =============================================================================


def eventually(
    predicate: Callable[[int], bool],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
) -> Optional[int]:
    """
    ∃ n0 ∀ n ≥ n0: predicate(n) — на probe-индексах хвоста.

    Returns:
        Наименьший порог n0 из window, начиная с которого predicate
        выполнен на всех probe-индексах; None если такого порога нет.
    """
    # Блоки порогов ≥ n0 — суффикс списка блоков: идём с конца
    threshold: Optional[int] = None
    for n0 in reversed(window.thresholds()):
        if not all(predicate(n) for n in window.block(n0)):
            break
        threshold = n0
    return threshold


def _block_values(f: ValueSequence, window: TailWindow) -> list[list[float]]:
    return [[f(n) for n in window.block(n0)] for n0 in window.thresholds()]


def liminf(f: ValueSequence, window: TailWindow = DEFAULT_TAIL_WINDOW) -> float:
    """
    liminf f = sup_n0 inf_{n ≥ n0} f(n).

    Examples:
        >>> liminf(eventually_periodic([], [0.0, 1.0]))
        0.0
    """
    blocks = _block_values(f, window)
    return max(min(v for block in blocks[k:] for v in block) for k in range(len(blocks)))


def limsup(f: ValueSequence, window: TailWindow = DEFAULT_TAIL_WINDOW) -> float:
    """
    limsup f = inf_n0 sup_{n ≥ n0} f(n).

    Значение math.inf на хвосте даёт sentinel ∞.

    Examples:
        >>> limsup(eventually_periodic([], [0.0, 1.0]))
        1.0
    """
    blocks = _block_values(f, window)
    return min(max(v for block in blocks[k:] for v in block) for k in range(len(blocks)))


class LimitPair(NamedTuple):
    """Пара (liminf, limsup) одной последовательности."""

    liminf: float
    limsup: float

    def converges(self, tol: float = EPS_MASS_COMPARE_ABS) -> bool:
        """liminf = limsup ⇔ последовательность сходится."""
        return is_close(self.liminf, self.limsup, abs_tol=tol)


def liminf_le_limsup(f: ValueSequence, window: TailWindow = DEFAULT_TAIL_WINDOW) -> LimitPair:
    """
    liminf f ≤ limsup f — выполнено для любой последовательности.

    Свидетель ограниченности не требуется.
    """
    return LimitPair(liminf=liminf(f, window), limsup=limsup(f, window))


def converges_to(
    f: ValueSequence,
    limit: float,
    window: TailWindow = DEFAULT_TAIL_WINDOW,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> bool:
    """
    Обычная сходимость: eventually |f(n) - limit| ≤ tol.
    """
    return eventually(lambda n: is_close(f(n), limit, rel_tol=0.0, abs_tol=tol), window) is not None


# =============================================================================
# СВИДЕТЕЛЬ ОГРАНИЧЕННОСТИ
# =============================================================================


@dataclass(frozen=True)
class BoundednessWitness:
    """Свидетель: lower ≤ f(n) ≤ upper для всех n ≥ threshold."""

    sequence: ValueSequence
    lower: float
    upper: float
    threshold: int


def establish_bounds(
    f: ValueSequence,
    lower: float = UNIT_LOWER,
    upper: float = UNIT_UPPER,
    window: TailWindow = DEFAULT_TAIL_WINDOW,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> BoundednessWitness:
    """
    Построение свидетеля eventual-ограниченности f в [lower, upper].

    Raises:
        ExtendedTopViolation: Если upper — top sentinel
        MissingBoundednessWitness: Если хвост выходит за границы
    """
    upper = require_finite_bound(upper, "upper")
    threshold = eventually(lambda n: is_le(lower, f(n), tol) and is_le(f(n), upper, tol), window)
    if threshold is None:
        raise MissingBoundednessWitness(
            f"{f.label} is not eventually bounded in [{lower}, {upper}]"
        )
    return BoundednessWitness(sequence=f, lower=lower, upper=upper, threshold=threshold)


def _require_unit_witness(
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    tol: float = EPS_MASS_COMPARE_ABS,
) -> BoundednessWitness:
    if witness is None:
        raise MissingBoundednessWitness(f"no boundedness witness supplied for {f.label}")
    if witness.sequence is not f:
        raise MissingBoundednessWitness(
            f"witness was established for {witness.sequence.label}, not for {f.label}"
        )
    if not is_le(UNIT_LOWER, witness.lower, tol) or not is_le(witness.upper, UNIT_UPPER, tol):
        raise MissingBoundednessWitness(
            f"witness bounds [{witness.lower}, {witness.upper}] are not within [0, 1]"
        )
    return witness


# =============================================================================
# ДВОЙСТВЕННОСТЬ
# =============================================================================


def liminf_of_complement(
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
) -> float:
    """
    liminf(1 - f) = 1 - limsup f.

    Raises:
        MissingBoundednessWitness: Если свидетель не предоставлен или чужой
    """
    _require_unit_witness(f, witness)
    return rebound(subtract_truncated(UNIT_UPPER, limsup(f, window)), f"1 - limsup {f.label}")


def limsup_of_complement(
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
) -> float:
    """
    limsup(1 - f) = 1 - liminf f.

    Raises:
        MissingBoundednessWitness: Если свидетель не предоставлен или чужой
    """
    _require_unit_witness(f, witness)
    return rebound(subtract_truncated(UNIT_UPPER, liminf(f, window)), f"1 - liminf {f.label}")


@dataclass(frozen=True)
class DualityCheck:
    """Результат численной проверки закона двойственности."""

    liminf_complement: float
    one_minus_limsup: float
    limsup_complement: float
    one_minus_liminf: float
    holds: bool


def check_duality(
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> DualityCheck:
    """
    Проверка обеих форм двойственности прямым вычислением liminf/limsup
    последовательности 1 - f.
    """
    one_minus_limsup = liminf_of_complement(f, witness, window)
    one_minus_liminf = limsup_of_complement(f, witness, window)
    complement = f.complement()
    liminf_complement = liminf(complement, window)
    limsup_complement = limsup(complement, window)
    return DualityCheck(
        liminf_complement=liminf_complement,
        one_minus_limsup=one_minus_limsup,
        limsup_complement=limsup_complement,
        one_minus_liminf=one_minus_liminf,
        holds=(
            is_close(liminf_complement, one_minus_limsup, abs_tol=tol)
            and is_close(limsup_complement, one_minus_liminf, abs_tol=tol)
        ),
    )


# =============================================================================
# МОНОТОННЫЙ ПЕРЕНОС
# =============================================================================


@dataclass(frozen=True)
class MonotoneTransport:
    """Результат переноса g ≤ f eventually через liminf или limsup."""

    operator: str
    lower_label: str
    upper_label: str
    threshold: int
    lower_limit: float
    upper_limit: float


def _eventually_le(
    g: ValueSequence,
    f: ValueSequence,
    window: TailWindow,
    tol: float,
) -> int:
    threshold = eventually(lambda n: is_le(g(n), f(n), tol), window)
    if threshold is None:
        raise ContractViolation(f"{g.label} <= {f.label} does not hold eventually")
    return threshold


def transport_liminf(
    g: ValueSequence,
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> MonotoneTransport:
    """
    g ≤ f eventually ⇒ liminf g ≤ liminf f.

    Raises:
        MissingBoundednessWitness: Если нет свидетеля ограниченности f
        ContractViolation: Если g ≤ f не выполняется eventually
    """
    _require_unit_witness(f, witness)
    threshold = _eventually_le(g, f, window, tol)
    return MonotoneTransport(
        operator="liminf",
        lower_label=g.label,
        upper_label=f.label,
        threshold=threshold,
        lower_limit=liminf(g, window),
        upper_limit=liminf(f, window),
    )


def transport_limsup(
    g: ValueSequence,
    f: ValueSequence,
    witness: Optional[BoundednessWitness],
    window: TailWindow = DEFAULT_TAIL_WINDOW,
    tol: float = EPS_MASS_COMPARE_ABS,
) -> MonotoneTransport:
    """
    g ≤ f eventually ⇒ limsup g ≤ limsup f.

    Raises:
        MissingBoundednessWitness: Если нет свидетеля ограниченности f
        ContractViolation: Если g ≤ f не выполняется eventually
    """
    _require_unit_witness(f, witness)
    threshold = _eventually_le(g, f, window, tol)
    return MonotoneTransport(
        operator="limsup",
        lower_label=g.label,
        upper_label=f.label,
        threshold=threshold,
        lower_limit=limsup(g, window),
        upper_limit=limsup(f, window),
    )

