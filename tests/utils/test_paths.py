# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for join_within_root."""

from pathlib import Path

import pytest

from releasemeta.utils.paths import join_within_root


class TestJoinWithinRoot:
    def test_segments_are_joined_and_resolved(self, tmp_path: Path) -> None:
        result = join_within_root(tmp_path, ("wdl", "gui", "..", "WDL.class"))
        assert result == (tmp_path / "wdl" / "WDL.class").resolve()
        assert result.is_absolute()

    def test_empty_segments_are_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="empty"):
            join_within_root(tmp_path, ())

    def test_parent_traversal_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="outside"):
            join_within_root(tmp_path, ("..", "etc", "passwd"))

    def test_traversal_back_inside_is_allowed(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        root.mkdir()
        result = join_within_root(root, ("..", "root", "a.class"))
        assert result == (root / "a.class").resolve()

    def test_symlink_out_of_root_is_rejected(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside.txt"
        outside.write_text("secret", encoding="utf-8")
        link = root / "link.txt"
        try:
            link.symlink_to(outside)
        except OSError:
            pytest.skip("symlinks not supported here")

        with pytest.raises(ValueError):
            join_within_root(root, ("link.txt",))
