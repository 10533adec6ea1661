from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from .errors import InvalidBudgetError
from .report import format_tax

DEFAULT_STEP = 10.0

# Configuration document

class BracketRule(BaseModel):
    bound: StrictInt
    ratio: Union[StrictFloat, StrictInt]

class BracketSection(BaseModel):
    rule: List[BracketRule] = Field(min_length=1)

class TaxConfigDocument(BaseModel):
    salary: BracketSection
    year_bonus: BracketSection


@dataclass
class IncomeRecord:
    monthly_salary: float
    monthly_tax_deduction: float
    year_bonus: float
    movement: float = 0.0

    @property
    def total_income(self) -> float:
        """Bonus still available plus bonus already moved into salary."""
        return self.movement + self.year_bonus

    def copy(self) -> IncomeRecord:
        return replace(self)

    def adjust(self, budget: float) -> bool:
        """
        Move up to `budget` from year_bonus into movement.
        Returns False (record untouched) when there is nothing left to move.
        """
        amount = min(self.year_bonus, budget)
        if not amount > 0:
            return False
        self.year_bonus -= amount
        self.movement += amount
        return True

    def transfer(self, budget: float) -> float:
        """Like adjust(), but raises InvalidBudgetError instead of returning False."""
        amount = min(self.year_bonus, budget)
        if not self.adjust(budget):
            raise InvalidBudgetError(f"Budget is invalid: cannot move {amount} from year bonus")
        return amount


@dataclass(frozen=True)
class Tax:
    salary_tax: float
    bonus_tax: float

    @property
    def total(self) -> float:
        return self.salary_tax + self.bonus_tax

    def __str__(self) -> str:
        return format_tax(self)


@dataclass(frozen=True)
class OptimizationResult:
    baseline: Tax
    best: Tax
    movement: float
    steps: int = 0

    @property
    def saved(self) -> float:
        return self.baseline.total - self.best.total

    @property
    def improved(self) -> bool:
        return self.best.total < self.baseline.total
