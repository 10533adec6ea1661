from math import ceil
from typing import Any, Dict

from .brackets import BracketTable
from .errors import BracketLookupError


def monthly_equivalent(year_bonus: float) -> int:
    return ceil(year_bonus / 12)


def bonus_ratio(year_bonus: float, table: BracketTable) -> float:
    m = monthly_equivalent(year_bonus)
    bracket = table.successor(m)
    if bracket is None:
        raise BracketLookupError(
            f"No year bonus bracket covers monthly equivalent {m} "
            f"(top bound is {table.top[0]})"
        )
    return bracket[1]


def bonus_tax(year_bonus: float, table: BracketTable) -> float:
    """Flat rate on the whole bonus, picked by the bracket of ceil(year_bonus / 12)."""
    return bonus_ratio(year_bonus, table) * year_bonus


def bonus_bracket_info(year_bonus: float, table: BracketTable) -> Dict[str, Any]:
    m = monthly_equivalent(year_bonus)
    info = table.bracket_info(m)
    info["monthly_equivalent"] = m
    return info
