"""
IntervalSet — конечные объединения интервалов вещественной прямой

Immutable представление подмножеств ℝ вида I_1 ∪ ... ∪ I_k, где каждый
интервал может быть открытым, замкнутым, полуоткрытым, вырожденным ([a, a])
или неограниченным (лучи, вся прямая).

КАНОНИЧЕСКАЯ ФОРМА:
- Интервалы отсортированы и попарно не пересекаются
- Касающиеся интервалы склеены, если точка касания принадлежит хотя бы
  одному из них ([0, 1) ∪ [1, 2] → [0, 2]); (0, 1) ∪ (1, 2) не склеиваются
- Бесконечные концы всегда открыты

Благодаря канонической форме равенство множеств — структурное.
"""

import math
from dataclasses import dataclass
from typing import Iterable

# =============================================================================
# INTERVAL
# =============================================================================


@dataclass(frozen=True)
class Interval:
    """Интервал с концами lo ≤ hi и флагами включения концов."""

    lo: float
    hi: float
    left_closed: bool = False
    right_closed: bool = False

    def __post_init__(self) -> None:
        if math.isnan(self.lo) or math.isnan(self.hi):
            raise ValueError(f"interval endpoints must not be NaN, got ({self.lo}, {self.hi})")
        if self.lo > self.hi:
            raise ValueError(f"interval lo must be <= hi, got lo={self.lo}, hi={self.hi}")
        if math.isinf(self.lo) and self.left_closed:
            raise ValueError("infinite left endpoint cannot be closed")
        if math.isinf(self.hi) and self.right_closed:
            raise ValueError("infinite right endpoint cannot be closed")

    @property
    def is_empty(self) -> bool:
        if self.lo < self.hi:
            return False
        return not (self.left_closed and self.right_closed)

    @property
    def length(self) -> float:
        return self.hi - self.lo

    def contains(self, x: float) -> bool:
        if x < self.lo or x > self.hi:
            return False
        if x == self.lo and not self.left_closed:
            return False
        if x == self.hi and not self.right_closed:
            return False
        return True

    def intersect(self, other: "Interval") -> "Interval | None":
        if self.lo > other.lo:
            lo, left_closed = self.lo, self.left_closed
        elif self.lo < other.lo:
            lo, left_closed = other.lo, other.left_closed
        else:
            lo, left_closed = self.lo, self.left_closed and other.left_closed

        if self.hi < other.hi:
            hi, right_closed = self.hi, self.right_closed
        elif self.hi > other.hi:
            hi, right_closed = other.hi, other.right_closed
        else:
            hi, right_closed = self.hi, self.right_closed and other.right_closed

        if lo > hi:
            return None
        candidate = Interval(lo, hi, left_closed, right_closed)
        return None if candidate.is_empty else candidate

    def __str__(self) -> str:
        left = "[" if self.left_closed else "("
        right = "]" if self.right_closed else ")"
        if self.lo == self.hi:
            return f"{{{self.lo:g}}}"
        return f"{left}{self.lo:g}, {self.hi:g}{right}"


def _normalize(intervals: Iterable[Interval]) -> tuple[Interval, ...]:
    """Сортировка, удаление пустых и склейка пересекающихся/касающихся интервалов."""
    items = sorted(
        (i for i in intervals if not i.is_empty),
        key=lambda i: (i.lo, not i.left_closed),
    )
    merged: list[Interval] = []
    for current in items:
        if not merged:
            merged.append(current)
            continue
        last = merged[-1]
        touches = last.hi == current.lo and (last.right_closed or current.left_closed)
        if last.hi > current.lo or touches:
            if current.hi > last.hi:
                hi, right_closed = current.hi, current.right_closed
            elif current.hi < last.hi:
                hi, right_closed = last.hi, last.right_closed
            else:
                hi, right_closed = last.hi, last.right_closed or current.right_closed
            left_closed = last.left_closed or (last.lo == current.lo and current.left_closed)
            merged[-1] = Interval(last.lo, hi, left_closed, right_closed)
        else:
            merged.append(current)
    return tuple(merged)


# =============================================================================
# INTERVAL SET
# =============================================================================


@dataclass(frozen=True)
class IntervalSet:
    """
    Подмножество ℝ — конечное объединение интервалов в канонической форме.

    Создавать через фабрики (open_interval, closed_interval, point, ...) или
    IntervalSet.of(...); прямой конструктор принимает только уже
    нормализованные интервалы.
    """

    intervals: tuple[Interval, ...] = ()

    @classmethod
    def of(cls, *intervals: Interval) -> "IntervalSet":
        return cls(_normalize(intervals))

    # --- Теоретико-множественные операции -----------------------------------

    def contains(self, x: float) -> bool:
        return any(i.contains(x) for i in self.intervals)

    def is_empty(self) -> bool:
        return not self.intervals

    def union(self, other: "IntervalSet") -> "IntervalSet":
        return IntervalSet.of(*self.intervals, *other.intervals)

    def intersection(self, other: "IntervalSet") -> "IntervalSet":
        pieces = []
        for a in self.intervals:
            for b in other.intervals:
                piece = a.intersect(b)
                if piece is not None:
                    pieces.append(piece)
        return IntervalSet.of(*pieces)

    def complement(self) -> "IntervalSet":
        gaps: list[Interval] = []
        lo, left_closed = -math.inf, False
        for i in self.intervals:
            if math.isfinite(i.lo):
                gap = Interval(lo, i.lo, left_closed, not i.left_closed)
                if not gap.is_empty:
                    gaps.append(gap)
            lo, left_closed = i.hi, not i.right_closed
        if lo < math.inf:
            gaps.append(Interval(lo, math.inf, left_closed, False))
        return IntervalSet.of(*gaps)

    def difference(self, other: "IntervalSet") -> "IntervalSet":
        return self.intersection(other.complement())

    def is_subset(self, other: "IntervalSet") -> bool:
        return self.difference(other).is_empty()

    # --- Метрические величины ----------------------------------------------

    def length_within(self, lo: float, hi: float) -> float:
        """Лебегова длина пересечения множества с [lo, hi]."""
        window = Interval(lo, hi, True, True)
        total = 0.0
        for i in self.intervals:
            piece = i.intersect(window)
            if piece is not None:
                total += piece.length
        return total

    def __str__(self) -> str:
        if not self.intervals:
            return "∅"
        return " ∪ ".join(str(i) for i in self.intervals)


# =============================================================================
# ФАБРИКИ
# =============================================================================

EMPTY: IntervalSet = IntervalSet()
REAL_LINE: IntervalSet = IntervalSet((Interval(-math.inf, math.inf),))


def open_interval(lo: float, hi: float) -> IntervalSet:
    return IntervalSet.of(Interval(lo, hi, False, False))


def closed_interval(lo: float, hi: float) -> IntervalSet:
    return IntervalSet.of(Interval(lo, hi, True, True))


def half_open_interval(lo: float, hi: float) -> IntervalSet:
    """[lo, hi)"""
    return IntervalSet.of(Interval(lo, hi, True, False))


def point(x: float) -> IntervalSet:
    return closed_interval(x, x)


def ray_above(x: float, closed: bool = False) -> IntervalSet:
    """(x, +∞) или [x, +∞)"""
    return IntervalSet.of(Interval(x, math.inf, closed, False))


def ray_below(x: float, closed: bool = False) -> IntervalSet:
    """(-∞, x) или (-∞, x]"""
    return IntervalSet.of(Interval(-math.inf, x, False, closed))
