# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release decoding.

Turns a raw release record into a Release, pulling the hidden compatibility
payload out of the changelog body on the way.
"""

from releasemeta.release.decoder import DecodedRelease, decode_release
from releasemeta.release.errors import PayloadMalformed, RecordMalformed, ReleaseError
from releasemeta.release.models import CompatibilityDescriptor, FileCheck, Release
from releasemeta.release.payload import (
    PayloadMatch,
    embed_payload,
    encode_payload,
    locate_payload,
    parse_payload,
)

__all__ = [
    "CompatibilityDescriptor",
    "DecodedRelease",
    "FileCheck",
    "PayloadMalformed",
    "PayloadMatch",
    "RecordMalformed",
    "Release",
    "ReleaseError",
    "decode_release",
    "embed_payload",
    "encode_payload",
    "locate_payload",
    "parse_payload",
]
