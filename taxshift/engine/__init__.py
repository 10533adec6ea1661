from .brackets import BracketTable
from .calculator import TaxConfig
from .salary import salary_tax, annual_salary_base, salary_bracket_info
from .bonus import bonus_tax, monthly_equivalent, bonus_bracket_info
from .optimize import optimize_movement, sweep_movements, validate_optimization_inputs
from .report import format_tax, render_report, result_to_dict
from .errors import (
    TaxShiftError, ConfigError, ParseError, BracketLookupError, InvalidBudgetError
)
from .models import (
    BracketRule, BracketSection, TaxConfigDocument,
    IncomeRecord, Tax, OptimizationResult, DEFAULT_STEP
)
