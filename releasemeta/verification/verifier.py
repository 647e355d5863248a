# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Integrity verification: checks an install against a release descriptor.

Two questions get answered in one pass:
  1. Is the running host (version + loader) one this release supports?
  2. Does every declared file hash to one of its acceptable values?

Each file ends up in exactly one of three states:
  MATCHED     read fine, digest is in the acceptable set
  MISMATCHED  read fine, digest is not in the set (modified or wrong build)
  UNREADABLE  missing or unreadable (broken or different installation)

Every declared file is checked even after a failure, so the caller always
gets the complete picture. Nothing is retried.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from releasemeta.logging.logger import get_logger
from releasemeta.release.models import CompatibilityDescriptor, FileCheck
from releasemeta.utils.hashing import DEFAULT_HASH_ALGORITHM, compute_digest, resolve_algorithm
from releasemeta.verification.environment import EnvironmentInfo, check_compatibility
from releasemeta.verification.resources import ResourceNotFound, ResourceReader

_logger: logging.Logger = get_logger(__name__)


class FileStatus(str, Enum):
    """Outcome of checking a single file."""

    MATCHED = "matched"
    MISMATCHED = "mismatched"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class FileOutcome:
    """Result for one declared FileCheck."""

    anchor: str
    path: str
    outcome: FileStatus
    actual_hash: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class VerificationResult:
    """Compatibility verdict plus one outcome per declared file, in declaration order."""

    compatible: bool
    version_ok: bool
    loader_ok: bool
    files: tuple[FileOutcome, ...] = ()

    @property
    def all_files_matched(self) -> bool:
        return all(f.outcome is FileStatus.MATCHED for f in self.files)

    @property
    def is_valid(self) -> bool:
        return self.compatible and self.all_files_matched

    @property
    def mismatched(self) -> list[FileOutcome]:
        return [f for f in self.files if f.outcome is FileStatus.MISMATCHED]

    @property
    def unreadable(self) -> list[FileOutcome]:
        return [f for f in self.files if f.outcome is FileStatus.UNREADABLE]


def _check_file(check: FileCheck, resources: ResourceReader, algorithm: str) -> FileOutcome:
    try:
        data = resources.read(check.anchor, check.path)
    except (ResourceNotFound, OSError) as err:
        _logger.error(
            "Resource unreadable",
            extra={"anchor": check.anchor, "file": check.path, "error": str(err)},
        )
        return FileOutcome(
            anchor=check.anchor,
            path=check.path,
            outcome=FileStatus.UNREADABLE,
            error=str(err),
        )

    digest = compute_digest(data, algorithm)
    if check.accepts(digest):
        _logger.debug(
            "File hash matched",
            extra={"anchor": check.anchor, "file": check.path},
        )
        return FileOutcome(
            anchor=check.anchor,
            path=check.path,
            outcome=FileStatus.MATCHED,
            actual_hash=digest,
        )

    _logger.error(
        "File hash mismatch",
        extra={
            "anchor": check.anchor,
            "file": check.path,
            "actual": digest,
            "acceptable": sorted(check.acceptable_hashes),
        },
    )
    return FileOutcome(
        anchor=check.anchor,
        path=check.path,
        outcome=FileStatus.MISMATCHED,
        actual_hash=digest,
    )


def verify(
    descriptor: CompatibilityDescriptor,
    env: EnvironmentInfo,
    resources: ResourceReader,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    max_workers: int = 1,
) -> VerificationResult:
    """
    Verify the host and the installed files against a descriptor.

    Args:
        descriptor: Decoded compatibility metadata of the release.
        env: Version and loader of the running host.
        resources: Where the declared files are read from.
        algorithm: hashlib algorithm that produced the acceptable hashes.
        max_workers: Files checked concurrently. With 1 they are checked in order
            on the calling thread.

    Returns:
        VerificationResult with one FileOutcome per declared FileCheck.

    Raises:
        ValueError: Unknown hash algorithm or max_workers < 1.
    """
    algorithm = resolve_algorithm(algorithm)
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    compatibility = check_compatibility(descriptor, env)
    checks = descriptor.file_checks

    if max_workers == 1 or len(checks) <= 1:
        files = tuple(_check_file(check, resources, algorithm) for check in checks)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            files = tuple(pool.map(lambda check: _check_file(check, resources, algorithm), checks))

    result = VerificationResult(
        compatible=compatibility.compatible,
        version_ok=compatibility.version_ok,
        loader_ok=compatibility.loader_ok,
        files=files,
    )

    summary = {
        "version": env.version,
        "loader": env.loader,
        "version_ok": result.version_ok,
        "loader_ok": result.loader_ok,
        "checked": len(files),
        "mismatched": len(result.mismatched),
        "unreadable": len(result.unreadable),
    }
    if result.is_valid:
        _logger.info("Verification passed", extra=summary)
    else:
        _logger.error("Verification FAILED", extra=summary)

    return result
