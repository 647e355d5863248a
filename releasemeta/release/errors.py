# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while decoding a release record.

RecordMalformed is fatal for the record: no Release is produced.
PayloadMalformed only concerns the hidden metadata; the decoder still builds
the Release, without a descriptor, and hands the error back as a warning.
"""

from typing import Optional


class ReleaseError(Exception):
    """Base for all release decoding errors."""


class RecordMalformed(ReleaseError):
    """A required visible field of the raw release record is missing or has the wrong type."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class PayloadMalformed(ReleaseError):
    """The hidden payload was found but its contents are not a valid descriptor."""

    def __init__(self, message: str, payload: Optional[str] = None) -> None:
        super().__init__(message)
        self.payload = payload
