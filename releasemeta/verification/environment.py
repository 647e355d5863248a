# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Compatibility of a release with the running host.

Version and loader are judged separately so a caller can tell the user
which one is wrong. Both comparisons are exact string equality.
"""

from dataclasses import dataclass

from releasemeta.release.models import CompatibilityDescriptor


@dataclass(frozen=True)
class EnvironmentInfo:
    """The host a release is checked against."""

    version: str
    loader: str


@dataclass(frozen=True)
class CompatibilityCheck:
    version_ok: bool
    loader_ok: bool

    @property
    def compatible(self) -> bool:
        return self.version_ok and self.loader_ok


def check_compatibility(
    descriptor: CompatibilityDescriptor,
    env: EnvironmentInfo,
) -> CompatibilityCheck:
    """
    Compare the host against a descriptor.

    The version is fine when it equals `primary_version` or appears in
    `compatible_versions`; the loader must equal `loader`.
    """
    return CompatibilityCheck(
        version_ok=descriptor.supports_version(env.version),
        loader_ok=env.loader == descriptor.loader,
    )
