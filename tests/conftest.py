"""Common test fixtures and configuration for taxshift tests."""

import pytest
from pathlib import Path

from taxshift.engine.brackets import BracketTable
from taxshift.engine.calculator import TaxConfig
from taxshift.engine.models import IncomeRecord
from taxshift.io.loader import load_tax_config

# Sample config shipped at the repository root
ROOT_CONFIG = Path(__file__).resolve().parents[1] / "config.toml"

SCENARIO_TOML = """
[salary]
rule = [
    { bound = 3000, ratio = 0.05 },
    { bound = 10000, ratio = 0.1 },
]

[year_bonus]
rule = [
    { bound = 1000, ratio = 0.05 },
    { bound = 999999, ratio = 0.1 },
]
"""


@pytest.fixture
def root_config_path():
    """Path to the sample config.toml."""
    return ROOT_CONFIG


@pytest.fixture
def root_config(root_config_path):
    """Sample configuration loaded from config.toml."""
    return load_tax_config(root_config_path)


@pytest.fixture
def scenario_config_path(tmp_path):
    """Small two-bracket config written to a temporary TOML file."""
    path = tmp_path / "config.toml"
    path.write_text(SCENARIO_TOML, encoding="utf-8")
    return path


@pytest.fixture
def scenario_config():
    """Same brackets as scenario_config_path, built in memory."""
    return TaxConfig(
        salary=BracketTable([(3000, 0.05), (10000, 0.1)]),
        year_bonus=BracketTable([(1000, 0.05), (999999, 0.1)]),
    )


@pytest.fixture
def scenario_record():
    """Record 2000,500,6000: annual salary base 18000, bonus monthly equivalent 500."""
    return IncomeRecord(monthly_salary=2000, monthly_tax_deduction=500, year_bonus=6000)


@pytest.fixture
def jump_config():
    """
    Config where the bonus ratio drops sharply once ceil(bonus / 12) <= 1000.
    Total tax over movement is not unimodal: local minimum at 5000,
    global minimum at 12000.
    """
    return TaxConfig(
        salary=BracketTable([(5000, 0.05), (10**6, 0.4)]),
        year_bonus=BracketTable([(1000, 0.1), (10**6, 0.3)]),
    )


@pytest.fixture
def jump_record():
    """No taxable salary, 24000 bonus."""
    return IncomeRecord(monthly_salary=3000, monthly_tax_deduction=3000, year_bonus=24000)
