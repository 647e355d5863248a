# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Joining untrusted resource paths onto a local directory.

Anchors and resource paths come from release payloads, i.e. from whoever
published the release. They are joined onto an install root and the result
must stay inside that root after `..` segments and symlinks are resolved.
"""

from collections.abc import Sequence
from pathlib import Path


def join_within_root(root: Path, parts: Sequence[str]) -> Path:
    """
    Join path segments onto `root` and resolve the result.

    Args:
        root: Directory the result must stay inside.
        parts: Relative path segments, outermost first. Must not be empty.

    Returns:
        The resolved absolute path.

    Raises:
        ValueError: `parts` is empty or the joined path resolves outside `root`.
    """
    if not parts:
        raise ValueError("empty resource path")

    resolved_root = root.resolve()
    resolved = resolved_root.joinpath(*parts).resolve()

    if not resolved.is_relative_to(resolved_root):
        raise ValueError(f"'{'/'.join(parts)}' resolves outside the resource root '{resolved_root}'")

    return resolved
