# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for FileSystemResourceReader.

Paths come from downloaded payloads, so besides the lookup rules we check
that nothing outside the resource root can be read.
"""

from pathlib import Path

import pytest

from releasemeta.verification.resources import FileSystemResourceReader, ResourceNotFound


@pytest.fixture()
def install_root(tmp_path: Path) -> Path:
    root = tmp_path / "install"
    (root / "wdl" / "gui").mkdir(parents=True)
    (root / "assets").mkdir()
    (root / "wdl" / "WDL.class").write_bytes(b"wdl main class")
    (root / "wdl" / "gui" / "GuiWDL.class").write_bytes(b"gui class")
    (root / "assets" / "lang.json").write_bytes(b"{}")
    (root / "Top.class").write_bytes(b"top level")
    return root


class TestResolution:
    def test_relative_path_uses_anchor_package(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("wdl.WDL", "WDL.class") == b"wdl main class"

    def test_nested_anchor_package(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("wdl.gui.GuiWDL", "GuiWDL.class") == b"gui class"

    def test_slash_separated_anchor(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("wdl/gui/GuiWDL", "GuiWDL.class") == b"gui class"

    def test_relative_path_with_subdirectory(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("wdl.WDL", "gui/GuiWDL.class") == b"gui class"

    def test_leading_slash_is_root_relative(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("wdl.WDL", "/assets/lang.json") == b"{}"

    def test_bare_anchor_lives_at_root(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        assert reader.read("Top", "Top.class") == b"top level"


class TestFailures:
    def test_missing_file_raises(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        with pytest.raises(ResourceNotFound) as exc_info:
            reader.read("wdl.WDL", "Missing.class")
        assert exc_info.value.anchor == "wdl.WDL"
        assert exc_info.value.path == "Missing.class"

    def test_directory_is_not_a_resource(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        with pytest.raises(ResourceNotFound):
            reader.read("Top", "wdl")

    def test_escape_from_root_is_refused(self, install_root: Path) -> None:
        (install_root.parent / "secret.txt").write_text("no", encoding="utf-8")
        reader = FileSystemResourceReader(install_root)
        with pytest.raises(ResourceNotFound, match="outside"):
            reader.read("Top", "../secret.txt")

    def test_empty_root_path_is_refused(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        with pytest.raises(ResourceNotFound, match="empty"):
            reader.read("Top", "/")

    def test_not_found_is_a_lookup_error(self, install_root: Path) -> None:
        reader = FileSystemResourceReader(install_root)
        with pytest.raises(LookupError):
            reader.read("wdl.WDL", "Nope.class")
