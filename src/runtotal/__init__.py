"""runtotal - Nested running totals addressed by dotted keys."""

from __future__ import annotations

# Core
from runtotal.accumulator import Total
from runtotal.node import TotalNode

# Config
from runtotal.config import (
    TotalConfig,
    get_defaults,
    load_defaults,
    reset_defaults,
    set_defaults,
)

# Formatting
from runtotal.formatting import format_value, number_format, round_half_up

# Errors
from runtotal.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidKeyError,
    InvalidValueError,
    StructuralConflictError,
    TotalError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Total",
    "TotalNode",
    # Config
    "TotalConfig",
    "get_defaults",
    "set_defaults",
    "reset_defaults",
    "load_defaults",
    # Formatting
    "format_value",
    "number_format",
    "round_half_up",
    # Errors
    "ErrorCodes",
    "TotalError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidKeyError",
    "InvalidValueError",
    "StructuralConflictError",
]
