"""Entrypoint."""

import os

from configargparse import ArgumentTypeError
from typing import Any, Mapping

from .logging import LoggingConfigurator


def common_config(settings: Mapping[str, Any]):
    """Perform common app configuration."""
    # Set up logging
    log_config = settings.get("log.config")
    log_level = settings.get("log.level") or os.getenv("LOG_LEVEL")
    log_file = settings.get("log.file")
    LoggingConfigurator.configure(log_config, log_level, log_file)


class BoundedInt:
    """Argument value parser for a bounded integer."""

    def __init__(self, min: int = None, max: int = None):
        """Initialize the BoundedInt parser."""
        self.min_val = min
        self.max_val = max

    def __call__(self, arg: str) -> int:
        """Interpret the argument value."""
        if not arg:
            raise ArgumentTypeError("Expected integer value")
        try:
            val = int(arg)
        except ValueError:
            raise ArgumentTypeError(f"Invalid integer value: '{arg}'")
        if self.min_val is not None and val < self.min_val:
            raise ArgumentTypeError(
                f"Value must be greater than or equal to {self.min_val}"
            )
        if self.max_val is not None and val > self.max_val:
            raise ArgumentTypeError(
                f"Value must be less than or equal to {self.max_val}"
            )
        return val

    def __repr__(self):
        """Format for in error reporting."""
        return "integer"
