"""Tests for bracket table construction and lookup."""

import pytest

from taxshift.engine.brackets import BracketTable
from taxshift.engine.errors import ConfigError


class TestConstruction:
    """Test building tables from (threshold, ratio) pairs."""

    def test_iterates_in_ascending_order(self):
        table = BracketTable([(5000, 0.2), (1000, 0.1), (20000, 0.3)])
        assert list(table) == [(1000, 0.1), (5000, 0.2), (20000, 0.3)]
        assert table.thresholds == (1000, 5000, 20000)

    def test_duplicate_threshold_overwrites(self):
        """Later pairs with the same threshold replace the earlier ratio."""
        table = BracketTable([(1000, 0.1), (1000, 0.15)])
        assert list(table) == [(1000, 0.15)]
        assert len(table) == 1

    def test_integer_ratio_is_stored_as_float(self):
        table = BracketTable([(1000, 0)])
        ((_, ratio),) = list(table)
        assert isinstance(ratio, float)

    def test_empty_table_rejected(self):
        with pytest.raises(ConfigError, match="at least one bracket"):
            BracketTable([])

    @pytest.mark.parametrize("threshold", [None, "1000", 1000.0, True])
    def test_non_integer_threshold_rejected(self, threshold):
        with pytest.raises(ConfigError, match="threshold must be an integer"):
            BracketTable([(threshold, 0.1)])

    @pytest.mark.parametrize("ratio", [None, "0.1", False])
    def test_non_numeric_ratio_rejected(self, ratio):
        with pytest.raises(ConfigError, match="ratio must be a number"):
            BracketTable([(1000, ratio)])

    def test_malformed_pair_rejected(self):
        with pytest.raises(ConfigError, match="expected a \\(threshold, ratio\\) pair"):
            BracketTable([(1000,)])

    def test_tables_compare_by_content(self):
        assert BracketTable([(2, 0.2), (1, 0.1)]) == BracketTable([(1, 0.1), (2, 0.2)])
        assert BracketTable([(1, 0.1)]) != BracketTable([(1, 0.2)])


class TestSuccessor:
    """Test the smallest-threshold->=target lookup."""

    @pytest.fixture
    def table(self):
        return BracketTable([(1000, 0.05), (5000, 0.1), (10000, 0.2)])

    def test_exact_threshold_is_its_own_successor(self, table):
        assert table.successor(5000) == (5000, 0.1)

    def test_between_thresholds(self, table):
        assert table.successor(1001) == (5000, 0.1)
        assert table.successor(9999) == (10000, 0.2)

    def test_below_first_threshold(self, table):
        assert table.successor(0) == (1000, 0.05)
        assert table.successor(-50) == (1000, 0.05)

    def test_above_top_threshold(self, table):
        assert table.successor(10001) is None

    def test_large_table(self):
        """Lookup works the same regardless of table size."""
        table = BracketTable((t, t / 10**6) for t in range(0, 100000, 7))
        assert table.successor(50000) == (50001, 50001 / 10**6)
        assert table.successor(99995) == (99995, 99995 / 10**6)
        assert table.successor(99996) is None

    def test_top(self, table):
        assert table.top == (10000, 0.2)


class TestBracketInfo:
    """Test the bracket inspector used for explanations."""

    def test_first_bracket(self):
        table = BracketTable([(1000, 0.05), (5000, 0.1)])
        assert table.bracket_info(500) == {"lower": 0, "upper": 1000, "ratio": 0.05, "above_top": False}

    def test_middle_bracket(self):
        table = BracketTable([(1000, 0.05), (5000, 0.1)])
        info = table.bracket_info(3000)
        assert (info["lower"], info["upper"], info["ratio"]) == (1000, 5000, 0.1)

    def test_above_top_reports_top_bracket(self):
        table = BracketTable([(1000, 0.05), (5000, 0.1)])
        info = table.bracket_info(8000)
        assert info["upper"] == 5000
        assert info["above_top"] is True

    def test_to_rules(self):
        table = BracketTable([(5000, 0.1), (1000, 0.05)])
        assert table.to_rules() == [{"bound": 1000, "ratio": 0.05}, {"bound": 5000, "ratio": 0.1}]
