"""
MeasureSequence — последовательность вероятностных мер n ↦ μₙ

Ограничение "каждый член — вероятностная мера" проверяется явно:
- при создании — на начальном блоке и всех probe-индексах хвоста
- при каждом обращении seq[n]

Скалярная последовательность масс n ↦ μₙ(S) строится mass_sequence(S).
"""

from typing import Any, Callable

from src.core.contracts.violations import NotAProbabilityMeasure
from src.core.domain.measures import ProbabilityMeasure
from src.core.math.numerical_safeguards import is_close
from src.core.math.sequence_limits import DEFAULT_TAIL_WINDOW, TailWindow, ValueSequence


class MeasureSequence:
    """Индексированное семейство вероятностных мер на общем универсуме."""

    def __init__(
        self,
        term: Callable[[int], ProbabilityMeasure],
        whole: Any,
        label: str = "μ",
        window: TailWindow = DEFAULT_TAIL_WINDOW,
    ):
        """
        Args:
            term: n ↦ μₙ
            whole: универсум (множество полной массы)
            label: имя последовательности для диагностики
            window: probe-индексы, на которых члены проверяются при создании

        Raises:
            NotAProbabilityMeasure: если какой-либо проверенный член не
                является вероятностной мерой
        """
        self._term = term
        self.whole = whole
        self.label = label
        self.window = window

        for n in range(window.block_length):
            self[n]
        for n in window.probe_indices(window.thresholds()[0]):
            self[n]

    @classmethod
    def constant(cls, measure: ProbabilityMeasure, whole: Any, **kwargs: Any) -> "MeasureSequence":
        """Постоянная последовательность μₙ = measure."""
        return cls(lambda n: measure, whole, **kwargs)

    def __getitem__(self, n: int) -> ProbabilityMeasure:
        measure = self._term(n)
        if not isinstance(measure, ProbabilityMeasure):
            raise NotAProbabilityMeasure(
                f"{self.label}[{n}] is {type(measure).__name__}, not a ProbabilityMeasure"
            )
        total = measure.total_mass(self.whole)
        if not is_close(total, 1.0):
            raise NotAProbabilityMeasure(f"{self.label}[{n}] has total mass {total}, expected 1")
        return measure

    def mass_sequence(self, s: Any) -> ValueSequence:
        """Скалярная последовательность n ↦ μₙ(s)."""
        return ValueSequence(lambda n: self[n].mass(s), label=f"{self.label}ₙ({s})")
