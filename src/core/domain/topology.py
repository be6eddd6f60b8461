"""
Topology — интерфейс топологического коллаборатора

Ядро не определяет, как вычисляются interior/closure/frontier: оно только
вызывает операции коллаборатора и полагается на структурные факты:

    interior(S) ⊆ S ⊆ closure(S)
    closure(S) = interior(S) ∪ frontier(S),  interior(S) ∩ frontier(S) = ∅
    is_open(Sᶜ) ⇔ is_closed(S)

Реализации:
- RealLineTopology — обычная топология ℝ на IntervalSet
- FiniteTopology (finite_space) — явное семейство открытых множеств
"""

import math
from typing import Any, Protocol, runtime_checkable

from src.core.domain.interval_sets import IntervalSet, Interval


@runtime_checkable
class TopologicalSet(Protocol):
    """Множество, с которым работают коллабораторы."""

    def contains(self, x: Any) -> bool: ...

    def is_empty(self) -> bool: ...

    def union(self, other: Any) -> Any: ...

    def intersection(self, other: Any) -> Any: ...

    def difference(self, other: Any) -> Any: ...

    def complement(self) -> Any: ...

    def is_subset(self, other: Any) -> bool: ...


@runtime_checkable
class Topology(Protocol):
    """Операции топологического коллаборатора."""

    def is_open(self, s: Any) -> bool: ...

    def is_closed(self, s: Any) -> bool: ...

    def interior(self, s: Any) -> Any: ...

    def closure(self, s: Any) -> Any: ...

    def frontier(self, s: Any) -> Any: ...


class RealLineTopology:
    """
    Обычная (евклидова) топология ℝ на конечных объединениях интервалов.

    - interior: все конечные концы открываются, вырожденные точки исчезают
    - closure: все конечные концы замыкаются, касающиеся интервалы склеиваются
    - frontier = closure \\ interior
    """

    def interior(self, s: IntervalSet) -> IntervalSet:
        return IntervalSet.of(
            *(Interval(i.lo, i.hi, False, False) for i in s.intervals if i.lo < i.hi)
        )

    def closure(self, s: IntervalSet) -> IntervalSet:
        return IntervalSet.of(
            *(Interval(i.lo, i.hi, math.isfinite(i.lo), math.isfinite(i.hi)) for i in s.intervals)
        )

    def frontier(self, s: IntervalSet) -> IntervalSet:
        return self.closure(s).difference(self.interior(s))

    def is_open(self, s: IntervalSet) -> bool:
        return self.interior(s) == s

    def is_closed(self, s: IntervalSet) -> bool:
        return self.closure(s) == s
