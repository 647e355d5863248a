# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while loading a releasemeta config file.

Both carry the offending path so the CLI can report it as a structured log
field. Validation errors also keep one line per schema problem.
"""

from pathlib import Path


class ConfigError(Exception):
    """Base for all configuration errors."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ConfigLoadError(ConfigError):
    """The file is missing, unreadable, not YAML, or not a YAML mapping."""


class ConfigValidationError(ConfigError):
    """The YAML parsed but does not match the config schema."""

    def __init__(self, message: str, path: Path, problems: tuple[str, ...] = ()) -> None:
        super().__init__(message, path)
        self.problems = problems
