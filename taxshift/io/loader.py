import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from ..engine.calculator import TaxConfig
from ..engine.errors import ConfigError
from ..engine.models import BracketSection, TaxConfigDocument

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("./config.toml")
YAML_SUFFIXES = {".yaml", ".yml"}


def load_toml(path: Path) -> Dict[str, Any]:
    """Load TOML file."""
    with path.open("rb") as f:
        return tomllib.load(f)


def load_yaml(path: Path):
    """Load YAML file safely."""
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_document(path: Path) -> TaxConfigDocument:
    """Read a configuration file and validate its shape."""
    if not path.exists():
        raise FileNotFoundError(f"Tax config not found: {path}")

    logger.info("Loading tax config from %s", path)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = load_yaml(path)
        else:
            data = load_toml(path)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    return parse_document(data, source=str(path))


def parse_document(data: Any, source: str = "<config>") -> TaxConfigDocument:
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a table with 'salary' and 'year_bonus' sections")
    try:
        doc = TaxConfigDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source}: {_describe_validation_error(e)}") from e
    _validate_section(doc.salary, "salary")
    _validate_section(doc.year_bonus, "year_bonus")
    return doc


def load_tax_config(path: Path = DEFAULT_CONFIG_PATH) -> TaxConfig:
    """Load, validate and build the tax configuration."""
    return TaxConfig.from_document(load_document(path))


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _validate_section(section: BracketSection, name: str):
    """Validate one bracket section."""
    seen = set()
    for idx, rule in enumerate(section.rule):
        if rule.bound < 0:
            raise ConfigError(f"{name} rule {idx}: bound must be >= 0")
        if not 0 <= rule.ratio <= 1:
            raise ConfigError(f"{name} rule {idx}: ratio must be within [0, 1], got {rule.ratio}")
        if rule.bound in seen:
            logger.warning("%s rule %d: duplicate bound %d overrides the earlier ratio", name, idx, rule.bound)
        seen.add(rule.bound)
