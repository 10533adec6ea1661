"""Tests for parsing the command-line income record."""

import pytest

from taxshift.engine.errors import ParseError
from taxshift.engine.models import IncomeRecord
from taxshift.io.record import parse_record


class TestParseRecord:
    """Test the 'monthly_salary,monthly_tax_deduction,year_bonus' format."""

    def test_valid_record(self):
        record = parse_record("20000,5000,60000")
        assert record == IncomeRecord(
            monthly_salary=20000.0, monthly_tax_deduction=5000.0, year_bonus=60000.0, movement=0.0
        )

    def test_floats_and_whitespace(self):
        record = parse_record(" 2000.5, 500 ,6000.25")
        assert record.monthly_salary == 2000.5
        assert record.monthly_tax_deduction == 500
        assert record.year_bonus == 6000.25

    def test_movement_starts_at_zero(self):
        assert parse_record("1,2,3").movement == 0

    @pytest.mark.parametrize("text", ["20000,5000", "20000", "1,2,3,4", ""])
    def test_wrong_token_count(self, text):
        with pytest.raises(ParseError, match="Expected 3 comma separated values"):
            parse_record(text)

    @pytest.mark.parametrize("text,field", [
        ("abc,5000,60000", "monthly_salary"),
        ("20000,,60000", "monthly_tax_deduction"),
        ("20000,5000,6e", "year_bonus"),
    ])
    def test_non_numeric_token(self, text, field):
        with pytest.raises(ParseError, match=field):
            parse_record(text)

    def test_non_finite_rejected(self):
        with pytest.raises(ParseError, match="finite"):
            parse_record("inf,0,0")

    def test_negative_rejected(self):
        with pytest.raises(ParseError, match="year_bonus: must be non-negative"):
            parse_record("1000,0,-1")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_record("x,y,z")
