"""
Invoice Import Settings

Tunable parser and deduplication parameters, loaded from
config/invoice_import.yaml.
"""

import logging
import os
from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "INVOICE_IMPORT_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "invoice_import.yaml"


class ParserSettings(BaseModel):
    """Settings for the default (fallback) parser."""

    lookahead_lines: int = Field(8, ge=1)
    metadata_header_lines: int = Field(30, ge=0)
    metadata_footer_lines: int = Field(20, ge=0)


class DeduplicationSettings(BaseModel):
    """Weights and tolerances for duplicate scoring."""

    threshold: int = Field(80, ge=0, le=100)
    amount_tolerance: Decimal = Field(Decimal("0.05"), ge=0)
    date_tolerance_days: int = Field(2, ge=0)
    amount_points: int = Field(40, ge=0)
    exact_date_points: int = Field(30, ge=0)
    near_date_points: int = Field(20, ge=0)
    description_points: int = Field(30, ge=0)

    @model_validator(mode="after")
    def check_points(self) -> "DeduplicationSettings":
        total = self.amount_points + self.exact_date_points + self.description_points
        if total != 100:
            raise ValueError(f"Score weights must add up to 100, got {total}")
        if self.near_date_points > self.exact_date_points:
            raise ValueError("near_date_points cannot exceed exact_date_points")
        return self


class ImportSettings(BaseModel):
    """All invoice import settings."""

    parser: ParserSettings = Field(default_factory=ParserSettings)
    deduplication: DeduplicationSettings = Field(default_factory=DeduplicationSettings)


def load_settings(config_path: Path | str | None = None) -> ImportSettings:
    """Load settings from YAML.

    Args:
        config_path: Path to the YAML file. Falls back to the
            INVOICE_IMPORT_CONFIG environment variable, then to
            config/invoice_import.yaml.

    Returns:
        ImportSettings; defaults when the file does not exist

    Raises:
        pydantic.ValidationError: If the file contains invalid values
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}")
        return ImportSettings()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    settings = ImportSettings.model_validate(data)
    logger.info(f"Loaded invoice import settings from {config_path}")
    return settings
