"""Witness — результаты проверок и выводов (immutable Pydantic модели)

Свидетель — "boolean с обоснованием": числа, которые сравнивались,
итог сравнения и упорядоченные шаги вывода.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class CriterionKind(str, Enum):
    """Критерий слабой сходимости."""

    POINTWISE = "pointwise"
    LIMINF_OPEN = "liminf_open"
    LIMSUP_CLOSED = "limsup_closed"


# =============================================================================
# MODELS
# =============================================================================


class ContinuityWitness(BaseModel):
    """Массы interior / S / closure / frontier для одного множества и меры.

    Для continuity set (frontier_mass = 0) все три первые массы совпадают.
    """

    set_label: str = Field(..., description="Множество S")
    interior_mass: float = Field(..., ge=0.0, description="μ(interior S)")
    set_mass: float = Field(..., ge=0.0, description="μ(S)")
    closure_mass: float = Field(..., ge=0.0, description="μ(closure S)")
    frontier_mass: float = Field(..., ge=0.0, description="μ(frontier S)")
    is_continuity_set: bool = Field(..., description="μ(frontier S) = 0")
    steps: tuple[str, ...] = Field(default=(), description="Шаги вывода")

    model_config = {"frozen": True}


class SetBound(BaseModel):
    """Проверка критерия на одном множестве."""

    set_label: str = Field(..., description="Множество S")
    limit_mass: float = Field(..., ge=0.0, le=1.0, description="μ(S)")
    liminf: float = Field(..., ge=0.0, le=1.0, description="liminf μₙ(S)")
    limsup: float = Field(..., ge=0.0, le=1.0, description="limsup μₙ(S)")
    holds: bool = Field(..., description="Критерий выполнен на S")
    details: str = Field(default="", description="Обоснование")

    model_config = {"frozen": True}


class ConvergenceWitness(BaseModel):
    """Итог проверки (или вывода) критерия на семействе множеств."""

    criterion: CriterionKind = Field(..., description="Проверяемый критерий")
    derived_from: Optional[CriterionKind] = Field(
        default=None, description="Критерий-источник, если результат выведен"
    )
    holds: bool = Field(..., description="Критерий выполнен на всех множествах семейства")
    bounds: tuple[SetBound, ...] = Field(default=(), description="Проверки по множествам")
    steps: tuple[str, ...] = Field(default=(), description="Шаги вывода")

    model_config = {"frozen": True}

    @property
    def failures(self) -> tuple[SetBound, ...]:
        """Множества, на которых критерий нарушен."""
        return tuple(b for b in self.bounds if not b.holds)


class PortmanteauReport(BaseModel):
    """Сводка: три критерия напрямую и их выводы друг из друга."""

    liminf_open: ConvergenceWitness
    limsup_closed: ConvergenceWitness
    pointwise: ConvergenceWitness
    limsup_from_liminf: ConvergenceWitness
    liminf_from_limsup: ConvergenceWitness
    pointwise_from_liminf: ConvergenceWitness
    pointwise_from_limsup: ConvergenceWitness
    complementary_families: bool = Field(
        default=False, description="Замкнутое семейство — дополнения открытого"
    )

    model_config = {"frozen": True}

    @property
    def consistent(self) -> bool:
        """
        Прямые проверки согласуются с выводами на тех же семействах.

        - liminf на открытых ⇔ liminf, выведенный из limsup
        - limsup на замкнутых ⇔ limsup, выведенный из liminf
        - оба вывода pointwise совпадают и влекут прямую проверку
        - liminf ⇔ limsup только для взаимно дополнительных семейств
        """
        derived_pointwise = self.pointwise_from_liminf.holds
        agree = (
            self.liminf_open.holds == self.liminf_from_limsup.holds
            and self.limsup_closed.holds == self.limsup_from_liminf.holds
            and derived_pointwise == self.pointwise_from_limsup.holds
            and (not derived_pointwise or self.pointwise.holds)
        )
        if self.complementary_families:
            agree = agree and self.liminf_open.holds == self.limsup_closed.holds
        return agree

    @property
    def converges_weakly(self) -> bool:
        return self.liminf_open.holds and self.limsup_closed.holds and self.pointwise.holds
