"""Cálculo de avance

Solo cuentan las etapas marcadas `counted` en el registro; la etapa comodín
(acta_comparecencia) no afecta al porcentaje aunque esté completada.
percentage = round(completed / total * 100), redondeo half-up; total 0 → 0.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from expropia.models.progress import CompletionRecord, ProgressResult
from expropia.services.progress.stages import STAGES, Stage, counted_stages


def round_percentage(completed: int, total: int) -> int:
    """Porcentaje entero con redondeo half-up (12.5 → 13)"""
    if total <= 0:
        return 0
    ratio = Decimal(completed * 100) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class ProgressCalculator:
    """CompletionRecord → ProgressResult"""

    def __init__(self, stages: tuple[Stage, ...] = STAGES) -> None:
        self._counted = counted_stages(stages)

    @property
    def total_count(self) -> int:
        return len(self._counted)

    def calculate(self, record: CompletionRecord) -> ProgressResult:
        completed = sum(1 for stage in self._counted if record.is_completed(stage.key))
        total = self.total_count
        return ProgressResult(
            completed_count=completed,
            total_count=total,
            percentage=round_percentage(completed, total),
        )

    def empty(self) -> ProgressResult:
        """Avance sin ninguna etapa completada (fincas con cálculo fallido)"""
        return ProgressResult(
            completed_count=0,
            total_count=self.total_count,
            percentage=0,
        )
