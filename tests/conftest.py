# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for releasemeta tests.

Kept small: config files for the loader and CLI tests, and a factory for
raw release records shaped like a release host's API response.
"""

import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (config_version missing)."""
    config_content = textwrap.dedent("""\
        global:
          log_level: "INFO"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def make_record() -> Callable[..., dict[str, Any]]:
    """Build a raw release record; keyword arguments override fields."""

    def _make(body: str = "Changelog text.", **overrides: Any) -> dict[str, Any]:
        record: dict[str, Any] = {
            "url": "https://github.com/Pokechu22/WorldDownloader/releases/tag/v4.0.0",
            "tag": "v4.0.0",
            "title": "World Downloader 4.0.0",
            "publishedAt": "2017-08-05T21:04:11Z",
            "prerelease": False,
            "body": body,
        }
        record.update(overrides)
        return record

    return _make
