# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Access to the installed files a release declares hashes for.

The verifier never touches the filesystem itself; it asks a ResourceReader
for `(anchor, path)` and gets bytes back or a ResourceNotFound.

FileSystemResourceReader resolves pairs the way a JVM class loader resolves
`SomeClass.getResourceAsStream(path)` against an unpacked install:
  - a relative path is looked up in the package directory of the anchor
    (`wdl.WDL` and `wdl/WDL` both mean `<root>/wdl/`)
  - a path starting with `/` is looked up from the root itself
"""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from releasemeta.utils.paths import join_within_root


class ResourceNotFound(LookupError):
    """The requested resource does not exist or is outside the readable area."""

    def __init__(self, anchor: str, path: str, reason: str = "not found") -> None:
        super().__init__(f"Resource {path!r} relative to {anchor!r}: {reason}")
        self.anchor = anchor
        self.path = path


class ResourceReader(ABC):
    """Interface for reading a named resource's bytes."""

    @abstractmethod
    def read(self, anchor: str, path: str) -> bytes:
        """
        Return the resource's bytes.

        Raises:
            ResourceNotFound: The resource doesn't exist.
            OSError: The resource exists but could not be read.
        """


def _anchor_package_parts(anchor: str) -> tuple[str, ...]:
    """`wdl.gui.GuiWDL` -> ("wdl", "gui"); a bare name lives at the root."""
    qualified = anchor.replace("\\", "/").replace("/", ".").strip(".")
    parts = tuple(part for part in qualified.split(".") if part)
    return parts[:-1]


class FileSystemResourceReader(ResourceReader):
    """Reads resources from an unpacked install directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self, anchor: str, path: str) -> Path:
        """
        Map `(anchor, path)` to a file under the root.

        Raises:
            ResourceNotFound: The path is empty or escapes the root.
        """
        resource = PurePosixPath(path.replace("\\", "/"))
        if path.startswith("/"):
            relative_parts = resource.parts[1:]
        else:
            relative_parts = _anchor_package_parts(anchor) + resource.parts

        try:
            return join_within_root(self.root, relative_parts)
        except ValueError as err:
            raise ResourceNotFound(anchor, path, reason=str(err)) from err

    def read(self, anchor: str, path: str) -> bytes:
        target = self.resolve(anchor, path)
        if not target.is_file():
            raise ResourceNotFound(anchor, path, reason=f"no file at {target}")
        return target.read_bytes()
