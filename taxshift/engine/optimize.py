import logging
from typing import Iterator, Tuple

from .calculator import TaxConfig
from .errors import InvalidBudgetError
from .models import DEFAULT_STEP, IncomeRecord, OptimizationResult, Tax

logger = logging.getLogger(__name__)


def validate_optimization_inputs(record: IncomeRecord, step: float):
    if not step > 0:
        raise InvalidBudgetError(f"Step must be positive, got {step}")
    if record.monthly_salary < 0:
        raise ValueError("Monthly salary must be non-negative")
    if record.monthly_tax_deduction < 0:
        raise ValueError("Monthly tax deduction must be non-negative")
    if record.year_bonus < 0:
        raise ValueError("Year bonus must be non-negative")
    if record.movement < 0:
        raise ValueError("Movement must be non-negative")


def sweep_movements(
    record: IncomeRecord,
    config: TaxConfig,
    step: float = DEFAULT_STEP,
) -> Iterator[Tuple[float, Tax]]:
    """
    Move bonus into salary `step` at a time (the last step may be smaller)
    and yield (movement, tax) after each move. Works on a copy; `record`
    is never mutated. Stops once the bonus is exhausted.
    """
    current = record.copy()
    while current.year_bonus > 0:
        if not current.adjust(step):
            break
        yield current.movement, config.calculate(current)


def optimize_movement(
    record: IncomeRecord,
    config: TaxConfig,
    step: float = DEFAULT_STEP,
) -> OptimizationResult:
    """
    Linear sweep over bonus -> salary reallocations.

    Keeps the first movement whose total tax is strictly lower than every
    total seen before it; on equal totals the earlier (smaller) movement wins.
    Returns the baseline unchanged when no reallocation helps.
    """
    validate_optimization_inputs(record, step)

    baseline = config.calculate(record)
    best, best_movement = baseline, record.movement
    logger.info(
        "Optimizing movement: year_bonus=%s movable=%s step=%s baseline_total=%s",
        record.year_bonus, record.total_income, step, baseline.total,
    )

    steps = 0
    for movement, tax in sweep_movements(record, config, step):
        steps += 1
        if tax.total < best.total:
            logger.debug("Improvement at movement=%s: total %s -> %s", movement, best.total, tax.total)
            best, best_movement = tax, movement

    logger.info("Evaluated %d steps; best movement=%s total=%s", steps, best_movement, best.total)
    return OptimizationResult(baseline=baseline, best=best, movement=best_movement, steps=steps)
