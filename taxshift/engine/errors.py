"""Error types raised by the taxshift engine and loaders.

ConfigError, ParseError and InvalidBudgetError derive from ValueError so the
CLI reports them as invalid input; BracketLookupError derives from LookupError.
"""


class TaxShiftError(Exception):
    """Base class for all taxshift errors."""


class ConfigError(TaxShiftError, ValueError):
    """Configuration document is missing sections or fields, or is malformed."""


class ParseError(TaxShiftError, ValueError):
    """Command-line income record could not be parsed."""


class BracketLookupError(TaxShiftError, LookupError):
    """No bracket threshold covers the requested amount."""


class InvalidBudgetError(TaxShiftError, ValueError):
    """Reallocation budget is not strictly positive."""
