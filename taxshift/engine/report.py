from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from .models import OptimizationResult, Tax


def format_tax(tax: Tax) -> str:
    # no rounding: floats print with Python's default repr
    return f"{tax.total} (tax for salary: {tax.salary_tax}, tax for year bonus: {tax.bonus_tax})"


def render_report(result: OptimizationResult) -> List[str]:
    return [
        f"Before: {format_tax(result.baseline)}",
        f"After: {format_tax(result.best)}",
        f"Movement: {result.movement}",
    ]


def tax_to_dict(tax: Tax) -> Dict[str, float]:
    return {
        "salary_tax": tax.salary_tax,
        "bonus_tax": tax.bonus_tax,
        "total": tax.total,
    }


def result_to_dict(result: OptimizationResult) -> Dict[str, Any]:
    return {
        "before": tax_to_dict(result.baseline),
        "after": tax_to_dict(result.best),
        "movement": result.movement,
        "saved": result.saved,
        "steps": result.steps,
    }
