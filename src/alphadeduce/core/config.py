# src/alphadeduce/core/config.py
"""
Configuration schema and loading for alphadeduce.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from alphadeduce.core.graph import DEFAULT_MAX_SYMBOLS


class LoggingSettings(BaseModel):
    """Logging output configuration.

    Example YAML:
        logging:
          level: DEBUG
          json_output: true
    """

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class DeducerSettings(BaseModel):
    """Top-level deduction settings.

    Example YAML:
        case_policy: sensitive
        max_symbols: 128
        reduction: canonical
        export_dir: ./graphs
    """

    model_config = {"frozen": True}

    case_policy: Literal["sensitive", "insensitive"] = Field(
        default="insensitive",
        description="How characters are folded before they become symbols",
    )
    max_symbols: int | None = Field(
        default=DEFAULT_MAX_SYMBOLS,
        gt=0,
        description="Maximum number of distinct symbols (null = unbounded)",
    )
    reduction: Literal["progressive", "canonical"] = Field(
        default="progressive",
        description="Transitive reduction strategy",
    )
    export_dir: Path | None = Field(
        default=None,
        description="Directory receiving DOT files of the graph before and after reduction",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


def load_settings(config_path: Path) -> DeducerSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (ALPHADEDUCE_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: ALPHADEDUCE_LOGGING__LEVEL for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated DeducerSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="ALPHADEDUCE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # and filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    if isinstance(raw_config.get("logging"), dict):
        raw_config["logging"] = {k.lower(): v for k, v in raw_config["logging"].items()}

    return DeducerSettings(**raw_config)
