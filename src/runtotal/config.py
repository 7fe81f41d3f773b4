"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from runtotal.errors import ConfigError, ConfigNotFoundError

__all__ = [
    "TotalConfig",
    "ConfigOverride",
    "get_defaults",
    "set_defaults",
    "reset_defaults",
    "load_defaults",
]

logger = logging.getLogger(__name__)


def _find_section(data: dict[str, Any], section: str) -> Any:
    """Return the value at dot-path ``section`` in ``data``, or None if any part is missing."""
    current: Any = data
    for part in section.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


class TotalConfig(BaseModel):
    """Formatting options shared by every node of a total.

    Attributes:
        number_format: Decimal places for thousands-grouped output, or False.
        round: Decimal places to round to when number_format is off, or False.
        prefix: Text placed before every formatted number.
        suffix: Text placed after every formatted number.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    number_format: Union[int, Literal[False]] = 2
    round: Union[int, Literal[False]] = False
    prefix: str | None = None
    suffix: str | None = None

    @field_validator("number_format", "round", mode="plain")
    @classmethod
    def check_places(cls, value: Any) -> int | Literal[False]:
        if value is None or value is False:
            return False
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected a non-negative integer or false, got {value!r}")
        if value < 0:
            raise ValueError(f"decimal places must be non-negative, got {value}")
        return value

    @field_validator("prefix", "suffix", mode="plain")
    @classmethod
    def check_affix(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        raise ValueError(f"expected a string or null, got {type(value).__name__}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TotalConfig:
        """Build a config from a partial mapping, filling gaps with built-in defaults.

        Raises:
            ConfigError: If a key is unknown or a value is invalid.
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            raise ConfigError(_describe(e), cause=e) from e

    @classmethod
    def load(cls, yaml_path: str, section: str | None = None) -> TotalConfig:
        """Load a config from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.
            section: Optional dot-path of the mapping that holds the options,
                e.g. ``"reporting.total"``. The whole document is used when omitted.

        Returns:
            A new TotalConfig; keys missing from the file keep their built-in defaults.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or has structural errors.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}", cause=e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Total config must be a mapping, got {type(data).__name__}")

        if section is not None:
            data = _find_section(data, section)
            if data is None:
                logger.warning("Section '%s' not found in %s, using defaults", section, yaml_path)
                data = {}
            elif not isinstance(data, dict):
                raise ConfigError(
                    f"Section '{section}' in {yaml_path} must be a mapping, got {type(data).__name__}"
                )

        return cls.from_mapping(data)

    def merged(self, overrides: ConfigOverride = None) -> TotalConfig:
        """Return a new config with ``overrides`` applied on top of this one.

        Only keys present in a mapping, or explicitly set on a TotalConfig,
        take precedence.
        """
        if overrides is None:
            return self
        if isinstance(overrides, TotalConfig):
            changes = overrides.model_dump(include=overrides.model_fields_set)
        else:
            changes = dict(overrides)
        if not changes:
            return self
        return TotalConfig.from_mapping({**self.model_dump(), **changes})


ConfigOverride = Union[TotalConfig, Mapping[str, Any], None]


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(segment) for segment in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', '')}")
    return "Invalid total config: " + "; ".join(parts)


_BUILTIN_DEFAULTS = TotalConfig()
_defaults: TotalConfig = _BUILTIN_DEFAULTS


def get_defaults() -> TotalConfig:
    """Return the process-wide default config used by new totals."""
    return _defaults


def set_defaults(config: ConfigOverride) -> TotalConfig:
    """Install process-wide defaults, merged over the built-in ones."""
    global _defaults
    _defaults = _BUILTIN_DEFAULTS.merged(config)
    logger.debug("Total defaults set: %s", _defaults.model_dump())
    return _defaults


def reset_defaults() -> None:
    """Restore the built-in defaults."""
    global _defaults
    _defaults = _BUILTIN_DEFAULTS


def load_defaults(yaml_path: str, section: str | None = None) -> TotalConfig:
    """Load process-wide defaults from a YAML file. See TotalConfig.load()."""
    return set_defaults(TotalConfig.load(yaml_path, section=section))
