# -*- coding: utf-8 -*-
"""
CarbonScope Configuration

Centralized configuration covering:
- Logging level
- Custom emission factor table and scenario file locations
- Offset planning and baseline defaults
- Display precision

All settings can be overridden via environment variables with the ``CS_``
prefix (e.g. ``CS_FACTOR_TABLE_PATH``).

Example:
    >>> from carbonscope.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.log_level, cfg.default_offset_percentage)
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from carbonscope.calculation.factors import (
    DEFAULT_EMISSION_FACTORS,
    EmissionFactorTable,
    load_factor_table,
)
from carbonscope.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_ENV_PREFIX = "CS_"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CarbonScopeConfig:
    """Complete configuration for CarbonScope.

    Attributes:
        log_level: Logging level for the ``carbonscope`` logger hierarchy.
        factor_table_path: Optional YAML/JSON file with a custom emission
            factor table. When unset the built-in table is used.
        scenarios_path: Optional YAML file with scenarios to compare. When
            unset the bundled sample scenarios are used.
        default_offset_percentage: Share of emissions offset when no
            percentage is given (0-100).
        baseline_scenario_id: Scenario id used as comparison baseline.
        display_decimals: Decimals shown for tonnes and costs.
    """

    log_level: str = "WARNING"
    factor_table_path: Optional[str] = None
    scenarios_path: Optional[str] = None
    default_offset_percentage: float = 100.0
    baseline_scenario_id: str = "baseline"
    display_decimals: int = 2

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> CarbonScopeConfig:
        """Build a CarbonScopeConfig from environment variables.

        Every field can be overridden via ``CS_<FIELD_UPPER>``. Invalid
        numbers fall back to the default with a warning.

        Returns:
            Populated CarbonScopeConfig instance.
        """
        prefix = _ENV_PREFIX

        def _env(name: str) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}")

        def _int(name: str, default: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                return int(val)
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%s, using default %d",
                    prefix, name, val, default,
                )
                return default

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                logger.warning(
                    "Invalid float for %s%s=%s, using default %f",
                    prefix, name, val, default,
                )
                return default

        def _str(name: str, default: Optional[str]) -> Optional[str]:
            val = _env(name)
            if val is None or val == "":
                return default
            return val

        config = cls(
            log_level=_str("LOG_LEVEL", cls.log_level).upper(),
            factor_table_path=_str("FACTOR_TABLE_PATH", cls.factor_table_path),
            scenarios_path=_str("SCENARIOS_PATH", cls.scenarios_path),
            default_offset_percentage=_float(
                "DEFAULT_OFFSET_PERCENTAGE", cls.default_offset_percentage,
            ),
            baseline_scenario_id=_str("BASELINE_SCENARIO_ID", cls.baseline_scenario_id),
            display_decimals=_int("DISPLAY_DECIMALS", cls.display_decimals),
        )

        logger.debug(
            "CarbonScopeConfig loaded: level=%s, factors=%s, scenarios=%s, "
            "offset=%.1f%%, baseline=%s, decimals=%d",
            config.log_level,
            config.factor_table_path or "<default>",
            config.scenarios_path or "<sample>",
            config.default_offset_percentage,
            config.baseline_scenario_id,
            config.display_decimals,
        )
        return config

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def __post_init__(self) -> None:
        """Validate all configuration constraints after initialization.

        Raises:
            ConfigurationError: If any constraint is violated.
        """
        errors: list[str] = []

        if self.log_level.upper() not in _VALID_LEVELS:
            errors.append(
                f"log_level must be one of {_VALID_LEVELS}, got '{self.log_level}'"
            )
        if not 0.0 <= self.default_offset_percentage <= 100.0:
            errors.append("default_offset_percentage must be within [0, 100]")
        if not self.baseline_scenario_id:
            errors.append("baseline_scenario_id must not be empty")
        if self.display_decimals < 0:
            errors.append("display_decimals must be >= 0")

        if errors:
            msg = "; ".join(errors)
            logger.error("CarbonScopeConfig validation failed: %s", msg)
            raise ConfigurationError(
                message=f"CarbonScopeConfig validation failed: {msg}",
                context={"errors": errors},
            )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "factor_table_path": self.factor_table_path,
            "scenarios_path": self.scenarios_path,
            "default_offset_percentage": self.default_offset_percentage,
            "baseline_scenario_id": self.baseline_scenario_id,
            "display_decimals": self.display_decimals,
        }


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[CarbonScopeConfig] = None
_config_lock = threading.Lock()


def get_config() -> CarbonScopeConfig:
    """Return the singleton CarbonScopeConfig, creating from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = CarbonScopeConfig.from_env()
    return _config_instance


def set_config(config: CarbonScopeConfig) -> None:
    """Replace the singleton (used by the CLI and tests)."""
    global _config_instance
    with _config_lock:
        _config_instance = config


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None


def configure_logging(level: Optional[str] = None) -> None:
    """Apply a logging level to the ``carbonscope`` logger hierarchy.

    Falls back to the configured ``log_level``. A root handler is installed
    only when the application has not configured logging itself.
    """
    level = (level or get_config().log_level).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("carbonscope").setLevel(level)


def resolve_factor_table(config: Optional[CarbonScopeConfig] = None) -> EmissionFactorTable:
    """Factor table named by the configuration, or the built-in default."""
    config = config or get_config()
    if not config.factor_table_path:
        return DEFAULT_EMISSION_FACTORS
    return load_factor_table(Path(config.factor_table_path))
