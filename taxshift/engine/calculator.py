from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .brackets import BracketTable
from .bonus import bonus_bracket_info, bonus_tax
from .models import IncomeRecord, Tax, TaxConfigDocument
from .salary import annual_salary_base, salary_bracket_info, salary_tax


@dataclass(frozen=True)
class TaxConfig:
    salary: BracketTable
    year_bonus: BracketTable

    @classmethod
    def from_document(cls, doc: TaxConfigDocument) -> TaxConfig:
        return cls(
            salary=BracketTable((r.bound, r.ratio) for r in doc.salary.rule),
            year_bonus=BracketTable((r.bound, r.ratio) for r in doc.year_bonus.rule),
        )

    def calculate(self, record: IncomeRecord) -> Tax:
        """Tax for salary (progressive) and for the year bonus (single bracket lookup)."""
        return Tax(
            salary_tax=salary_tax(annual_salary_base(record), self.salary),
            bonus_tax=bonus_tax(record.year_bonus, self.year_bonus),
        )

    def explain(self, record: IncomeRecord) -> Dict[str, Any]:
        """Bracket context for a record, used by the CLI detail views."""
        base = annual_salary_base(record)
        return {
            "salary_base": base,
            "salary_bracket": salary_bracket_info(base, self.salary),
            "year_bonus_bracket": bonus_bracket_info(record.year_bonus, self.year_bonus),
        }
