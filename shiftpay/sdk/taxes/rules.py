"""Tax rules loading from rules/YYYY.yaml."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .schemas import TaxRules

logger = logging.getLogger(__name__)


def _get_tax_rules_dir() -> Path:
    """Get the directory holding the packaged rules files."""
    return Path(__file__).parent / "rules"


def available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    years = [int(p.stem) for p in _get_tax_rules_dir().glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _load_tax_rules(year: int) -> TaxRules:
    config_file = _get_tax_rules_dir() / f"{year}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")

    with open(config_file, "r") as f:
        data = yaml.safe_load(f)

    try:
        rules = TaxRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid tax rules in {config_file}: {e}") from e

    logger.debug(f"loaded tax rules for {year} from {config_file.name}")
    return rules


def load_tax_rules(year: Optional[int] = None) -> TaxRules:
    """Load validated tax rules for a year.

    Args:
        year: Tax year (int or digit string). Defaults to the newest year
            shipped with the package.

    Raises:
        FileNotFoundError: If no rules file exists for the year.
    """
    if year is None:
        years = available_years()
        if not years:
            raise FileNotFoundError(f"No tax rules found in {_get_tax_rules_dir()}")
        year = years[0]
    return _load_tax_rules(int(year))
