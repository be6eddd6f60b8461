"""
Finite Space — конечное топологическое пространство

FiniteSet — подмножество конечного универсума (точки — любые hashable).
FiniteTopology — явное семейство открытых множеств.

В конечном пространстве семейства открытых и замкнутых множеств конечны,
поэтому критерии "для всякого открытого S" проверяются исчерпывающе.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Hashable, Iterable, Iterator

from src.core.contracts.violations import TopologyInvariantViolation


@dataclass(frozen=True)
class FiniteSet:
    """Подмножество points ⊆ universe."""

    points: frozenset
    universe: frozenset

    def __post_init__(self) -> None:
        if not self.points <= self.universe:
            extra = sorted(map(repr, self.points - self.universe))
            raise ValueError(f"points {extra} are not in the universe")

    def contains(self, x: Hashable) -> bool:
        return x in self.points

    def is_empty(self) -> bool:
        return not self.points

    def _check_universe(self, other: "FiniteSet") -> None:
        if self.universe != other.universe:
            raise ValueError("finite sets belong to different universes")

    def union(self, other: "FiniteSet") -> "FiniteSet":
        self._check_universe(other)
        return FiniteSet(self.points | other.points, self.universe)

    def intersection(self, other: "FiniteSet") -> "FiniteSet":
        self._check_universe(other)
        return FiniteSet(self.points & other.points, self.universe)

    def difference(self, other: "FiniteSet") -> "FiniteSet":
        self._check_universe(other)
        return FiniteSet(self.points - other.points, self.universe)

    def complement(self) -> "FiniteSet":
        return FiniteSet(self.universe - self.points, self.universe)

    def is_subset(self, other: "FiniteSet") -> bool:
        self._check_universe(other)
        return self.points <= other.points

    def __str__(self) -> str:
        if not self.points:
            return "∅"
        return "{" + ", ".join(sorted(map(str, self.points))) + "}"


class FiniteTopology:
    """
    Топология на конечном универсуме, заданная семейством открытых множеств.

    Валидация при создании:
    - ∅ и универсум открыты
    - семейство замкнуто относительно попарных объединений и пересечений
      (в конечном случае этого достаточно)
    """

    def __init__(self, universe: Iterable[Hashable], open_sets: Iterable[Iterable[Hashable]]):
        """
        Args:
            universe: точки пространства
            open_sets: семейство открытых множеств (наборы точек)

        Raises:
            TopologyInvariantViolation: если семейство не является топологией
        """
        self.universe = frozenset(universe)
        opens = {frozenset(s) for s in open_sets}
        opens.add(frozenset())
        opens.add(self.universe)

        for s in opens:
            if not s <= self.universe:
                raise TopologyInvariantViolation(f"open set {sorted(map(str, s))} is not in the universe")
        for a, b in combinations(opens, 2):
            if a | b not in opens:
                raise TopologyInvariantViolation("open sets are not closed under union")
            if a & b not in opens:
                raise TopologyInvariantViolation("open sets are not closed under intersection")

        self._opens = frozenset(opens)

    @classmethod
    def discrete(cls, universe: Iterable[Hashable]) -> "FiniteTopology":
        """Дискретная топология: все подмножества открыты."""
        points = list(universe)
        subsets = (c for r in range(len(points) + 1) for c in combinations(points, r))
        return cls(points, subsets)

    def subset(self, points: Iterable[Hashable]) -> FiniteSet:
        return FiniteSet(frozenset(points), self.universe)

    @property
    def empty(self) -> FiniteSet:
        return self.subset(())

    @property
    def whole(self) -> FiniteSet:
        return self.subset(self.universe)

    # --- Операции топологического коллаборатора -----------------------------

    def is_open(self, s: FiniteSet) -> bool:
        return s.points in self._opens

    def is_closed(self, s: FiniteSet) -> bool:
        return self.is_open(s.complement())

    def interior(self, s: FiniteSet) -> FiniteSet:
        # Наибольшее открытое подмножество: объединение открытых внутри s
        inside = frozenset().union(*(o for o in self._opens if o <= s.points))
        return FiniteSet(inside, self.universe)

    def closure(self, s: FiniteSet) -> FiniteSet:
        return self.interior(s.complement()).complement()

    def frontier(self, s: FiniteSet) -> FiniteSet:
        return self.closure(s).difference(self.interior(s))

    # --- Перечисление -------------------------------------------------------

    def open_sets(self) -> Iterator[FiniteSet]:
        for o in sorted(self._opens, key=lambda o: (len(o), sorted(map(str, o)))):
            yield FiniteSet(o, self.universe)

    def closed_sets(self) -> Iterator[FiniteSet]:
        for o in self.open_sets():
            yield o.complement()
