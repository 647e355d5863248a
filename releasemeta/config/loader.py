# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reads a releasemeta YAML config and validates it into a ReleaseMetaConfig.

A config file is optional for every subcommand. When one is given it has to
be entirely valid: a broken file is a ConfigError, never a partial config.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from releasemeta.config.exceptions import ConfigLoadError, ConfigValidationError
from releasemeta.config.schema import ReleaseMetaConfig


def _read_mapping(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        reason = "not a file" if config_path.exists() else "not found"
        raise ConfigLoadError(f"Config file {reason}: {config_path}", config_path)

    try:
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}", config_path) from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}", config_path) from err

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must hold a YAML mapping with a 'global' section, "
            f"got {type(parsed).__name__}",
            config_path,
        )
    return parsed


def _problems(err: ValidationError) -> tuple[str, ...]:
    """`verify.max_workers: Input should be less than or equal to 32` style lines."""
    return tuple(
        f"{'.'.join(str(part) for part in detail['loc']) or '<root>'}: {detail['msg']}"
        for detail in err.errors()
    )


def load_config(config_path: Path) -> ReleaseMetaConfig:
    """
    Load and validate a config file.

    Args:
        config_path: Path to a YAML config file.

    Returns:
        A validated, frozen ReleaseMetaConfig.

    Raises:
        ConfigLoadError: The file can't be read or isn't a YAML mapping.
        ConfigValidationError: The mapping doesn't match the schema. `problems`
            lists each offending key.
    """
    raw_data = _read_mapping(config_path)

    try:
        return ReleaseMetaConfig.model_validate(raw_data)
    except ValidationError as err:
        problems = _problems(err)
        raise ConfigValidationError(
            f"Config validation failed for {config_path}: {'; '.join(problems)}",
            config_path,
            problems=problems,
        ) from err
