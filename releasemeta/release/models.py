# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Value types produced by the release decoder.

All of them are frozen dataclasses created once per decoded record. A
descriptor owns its file checks and a release owns its descriptor; none of
them point back at their parent.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional


@dataclass(frozen=True, eq=False)
class FileCheck:
    """
    One file whose content hash must match a published value.

    `anchor` names the class/module the resource is resolved relative to and
    `path` is the resource itself. `acceptable_hashes` holds every uppercase
    hex digest that counts as valid; a release can ship in several builds of
    the same file (debug and non-debug, for instance), each with its own hash.

    Equality contract: two checks are equal when `anchor` and `path` match.
    `acceptable_hashes` takes no part in `==` or `hash()`, so "which file" is
    kept separate from "which values are currently valid". Use
    `same_hashes()` to compare the hash sets.
    """

    anchor: str
    path: str
    acceptable_hashes: frozenset[str]

    def __post_init__(self) -> None:
        if isinstance(self.acceptable_hashes, str):
            raise TypeError("acceptable_hashes must be a collection of strings, not a string")
        if not isinstance(self.acceptable_hashes, frozenset):
            object.__setattr__(self, "acceptable_hashes", frozenset(self.acceptable_hashes))
        if not self.acceptable_hashes:
            raise ValueError(f"FileCheck for {self.anchor}:{self.path} has no acceptable hashes")

    @property
    def identity(self) -> tuple[str, str]:
        """The (anchor, path) pair equality and hashing are based on."""
        return (self.anchor, self.path)

    def accepts(self, digest: str) -> bool:
        """Exact, case-sensitive membership test."""
        return digest in self.acceptable_hashes

    def same_hashes(self, other: "FileCheck") -> bool:
        return self.acceptable_hashes == other.acceptable_hashes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileCheck):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


@dataclass(frozen=True)
class CompatibilityDescriptor:
    """
    Decoded hidden metadata of one release.

    `compatible_versions` may repeat values or include `primary_version`;
    both are tolerated. `announcement_post` is None when the payload has no
    announcement link, which is different from an empty string.
    """

    primary_version: str
    compatible_versions: tuple[str, ...]
    loader: str
    file_checks: tuple[FileCheck, ...] = ()
    announcement_post: Optional[str] = None

    def __post_init__(self) -> None:
        # Lists handed in by callers are frozen into tuples.
        object.__setattr__(self, "compatible_versions", tuple(self.compatible_versions))
        object.__setattr__(self, "file_checks", tuple(self.file_checks))

    def supports_version(self, version: str) -> bool:
        return version == self.primary_version or version in self.compatible_versions


def _freeze_mapping(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(raw))


@dataclass(frozen=True)
class Release:
    """A single published release with its visible changelog and hidden metadata."""

    url: str
    tag: str
    title: str
    published_at: str
    prerelease: bool
    body: str
    compatibility: Optional[CompatibilityDescriptor] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", _freeze_mapping(self.raw))

    @property
    def has_compatibility(self) -> bool:
        return self.compatibility is not None


def file_check_signature(checks: Iterable[FileCheck]) -> list[tuple[str, str, frozenset[str]]]:
    """
    Full content of a sequence of checks, hashes included.

    `FileCheck.__eq__` ignores hash sets; this is what to compare when the
    hash values matter as well, e.g. after an encode/decode round trip.
    """
    return [(check.anchor, check.path, check.acceptable_hashes) for check in checks]
