# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for releasemeta.

Each config section is a frozen pydantic model:
  - frozen=True: no mutation after load
  - extra="forbid": a typo in a key fails loudly instead of being ignored
  - validate_default=True: defaults are type-checked too

Only `global` is required. `environment` describes the host a release is
checked against and is usually supplied on the command line instead.
`verify` tunes the integrity check.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from releasemeta.utils.hashing import DEFAULT_HASH_ALGORITHM, resolve_algorithm

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return upper


class EnvironmentConfig(BaseModel):
    """The running host a release is checked against."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    version: str = Field(description="Host version identifier, e.g. '1.12.2'")
    loader: str = Field(description="Active loader / distribution channel, e.g. 'Forge'")


class VerifyConfig(BaseModel):
    """Integrity check settings."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="hashlib algorithm used by the payload producer",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Files hashed concurrently; 1 checks them one after another",
    )
    resource_root: str = Field(
        default=".",
        description="Directory anchors and resource paths are resolved against",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        return resolve_algorithm(value)


class ReleaseMetaConfig(BaseModel):
    """
    Top-level config container.

    A YAML file needs at least a `global:` section. Sections that are left
    out keep their defaults (`verify`) or stay None (`environment`).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    environment: Optional[EnvironmentConfig] = Field(default=None)
    verify: VerifyConfig = Field(default_factory=VerifyConfig)
