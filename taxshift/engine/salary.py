from __future__ import annotations
from typing import Any, Dict

from .brackets import BracketTable
from .models import IncomeRecord


def annual_salary_base(record: IncomeRecord) -> float:
    # negative monthly net income floors to zero; movement is not reduced by the deduction
    monthly_net = max(0.0, record.monthly_salary - record.monthly_tax_deduction)
    return record.movement + monthly_net * 12


def salary_tax(total_salary: float, table: BracketTable) -> float:
    """
    Cumulative marginal tax: each bracket taxes the band between the previous
    threshold and its own. Income above the top threshold is not taxed.
    """
    tax = 0.0
    last = 0.0
    for threshold, ratio in table:
        portion = min(threshold, total_salary) - last
        tax += portion * ratio
        if threshold >= total_salary:
            break
        last = threshold
    return tax


def salary_bracket_info(total_salary: float, table: BracketTable) -> Dict[str, Any]:
    info = table.bracket_info(total_salary)
    info["untaxed_excess"] = max(0.0, total_salary - table.top[0])
    return info
