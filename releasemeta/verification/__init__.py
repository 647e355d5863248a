# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Integrity verification of an install against a decoded release.
"""

from releasemeta.verification.environment import (
    CompatibilityCheck,
    EnvironmentInfo,
    check_compatibility,
)
from releasemeta.verification.resources import (
    FileSystemResourceReader,
    ResourceNotFound,
    ResourceReader,
)
from releasemeta.verification.verifier import (
    FileOutcome,
    FileStatus,
    VerificationResult,
    verify,
)

__all__ = [
    "CompatibilityCheck",
    "EnvironmentInfo",
    "FileOutcome",
    "FileStatus",
    "FileSystemResourceReader",
    "ResourceNotFound",
    "ResourceReader",
    "VerificationResult",
    "check_compatibility",
    "verify",
]
