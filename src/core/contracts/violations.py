"""
Contract Violations — таксономия ошибок контракта вызывающей стороны

Все операции библиотеки тотальны на корректных входах. Единственный вид
"сбоя" — нарушение предусловия (незамкнутое множество передано в критерий
для замкнутых множеств, множество не является continuity set, значение вне
[0, 1] и т.д.). Такие ошибки не восстанавливаются и не ретраятся.

Иерархия:
    ContractViolation (ValueError)
    ├── UnitIntervalViolation        — значение вне [0, 1]
    ├── ExtendedTopViolation         — top sentinel (∞) там, где нужна конечная граница
    ├── MissingBoundednessWitness    — нет свидетеля eventual-ограниченности
    ├── NotAContinuitySet            — μ(frontier S) ≠ 0
    ├── NotOpenSet / NotClosedSet    — нарушение топологического предусловия
    ├── NotAProbabilityMeasure       — полная масса ≠ 1
    └── TopologyInvariantViolation   — коллаборатор нарушил interior ⊆ S ⊆ closure
"""


class ContractViolation(ValueError):
    """Базовое нарушение контракта вызывающей стороной."""


class UnitIntervalViolation(ContractViolation):
    """Значение массы вне отрезка [0, 1]."""


class ExtendedTopViolation(ContractViolation):
    """
    Top sentinel (math.inf) использован в роли конечной границы.

    Законы сокращения для усечённого вычитания верны только для конечной
    границы: ∞ ⊖ a = ∞ для любого конечного a, и из ∞ ⊖ a ≤ ∞ ⊖ b
    ничего не следует.
    """


class MissingBoundednessWitness(ContractViolation):
    """
    Свидетель eventual-ограниченности не предоставлен или не подтверждён.

    Без него liminf/limsup вырождаются в sentinel-значения 0/∞ и закон
    двойственности liminf(1 - f) = 1 - limsup(f) молча нарушается.
    """


class NotAContinuitySet(ContractViolation):
    """Граница множества имеет ненулевую массу."""


class NotOpenSet(ContractViolation):
    """Критерий для открытых множеств вызван на неоткрытом множестве."""


class NotClosedSet(ContractViolation):
    """Критерий для замкнутых множеств вызван на незамкнутом множестве."""


class NotAProbabilityMeasure(ContractViolation):
    """Мера не нормирована на 1."""


class TopologyInvariantViolation(ContractViolation):
    """Топологический коллаборатор нарушил структурный инвариант."""
