from math import isfinite

from ..engine.errors import ParseError
from ..engine.models import IncomeRecord

RECORD_FIELDS = ("monthly_salary", "monthly_tax_deduction", "year_bonus")


def parse_record(text: str) -> IncomeRecord:
    """Parse 'monthly_salary,monthly_tax_deduction,year_bonus' into a fresh record."""
    tokens = text.split(",")
    if len(tokens) != len(RECORD_FIELDS):
        raise ParseError(
            f"Expected {len(RECORD_FIELDS)} comma separated values "
            f"({','.join(RECORD_FIELDS)}), got {len(tokens)}"
        )

    values = []
    for name, token in zip(RECORD_FIELDS, tokens):
        try:
            value = float(token.strip())
        except ValueError:
            raise ParseError(f"{name}: '{token.strip()}' is not a number") from None
        if not isfinite(value):
            raise ParseError(f"{name}: must be a finite number")
        if value < 0:
            raise ParseError(f"{name}: must be non-negative")
        values.append(value)

    return IncomeRecord(*values)
