# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hidden payload wire format.

Release notes carry their metadata as a zero-length markdown link whose
title holds a JSON object:

    [](# '{"Minecraft":"1.12","MinecraftCompatible":["1.12"],...}')Changelog text

A renderer shows only "Changelog text" because the link has no label; the
quoted part would be a tooltip. The marker is only recognised at offset 0
of the body. Anywhere else it is ordinary visible text.

Wire keys (bit-exact with existing producers):
  Minecraft            str            -> primary_version
  MinecraftCompatible  [str]          -> compatible_versions
  Loader               str            -> loader
  Post                 str | null     -> announcement_post (key required)
  Hashes               [{RelativeTo: str, File: str, Hash: [str, ...]}]
                                      -> file_checks

Locating the marker is a literal prefix check followed by a scan for the
first `')` that stays on the first line of the payload, equivalent to the
anchored pattern `^\\[\\]\\(# '(.+?)'\\)`.
"""

import json
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from releasemeta.release.errors import PayloadMalformed
from releasemeta.release.models import CompatibilityDescriptor, FileCheck

MARKER_PREFIX = "[](# '"
MARKER_SUFFIX = "')"

# `.` in the anchored pattern never crosses these.
_LINE_TERMINATOR_RE = re.compile("[\n\r\u0085\u2028\u2029]")


@dataclass(frozen=True)
class PayloadMatch:
    """Where the hidden payload sits in a body, and the body without it."""

    payload: str
    start: int
    end: int
    visible_body: str


def locate_payload(body: str) -> Optional[PayloadMatch]:
    """
    Find the hidden payload at the start of a release body.

    Returns None when the body does not begin with a complete marker. The
    captured payload is at least one character long and never spans a line
    break.
    """
    if not body.startswith(MARKER_PREFIX):
        return None

    payload_start = len(MARKER_PREFIX)
    terminator = _LINE_TERMINATOR_RE.search(body, payload_start)
    scan_limit = terminator.start() if terminator else len(body)

    close = body.find(MARKER_SUFFIX, payload_start + 1, scan_limit)
    if close == -1:
        return None

    start = 0
    end = close + len(MARKER_SUFFIX)
    return PayloadMatch(
        payload=body[payload_start:close],
        start=start,
        end=end,
        visible_body=body[:start] + body[end:],
    )


class _WireFileCheck(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True, populate_by_name=True)

    relative_to: str = Field(alias="RelativeTo")
    file: str = Field(alias="File")
    hashes: list[str] = Field(alias="Hash", min_length=1)


class _WirePayload(BaseModel):
    """Strict schema of the JSON object inside the marker. Field order is wire order."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True, populate_by_name=True)

    main_version: str = Field(alias="Minecraft")
    compatible_versions: list[str] = Field(alias="MinecraftCompatible")
    loader: str = Field(alias="Loader")
    post: Optional[str] = Field(alias="Post")
    hashes: list[_WireFileCheck] = Field(alias="Hashes")


def _summarize(err: ValidationError) -> str:
    problems = []
    for detail in err.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)


def parse_payload(text: str) -> CompatibilityDescriptor:
    """
    Decode the JSON text captured from a marker.

    Args:
        text: The payload between the quotes of the marker.

    Returns:
        The decoded CompatibilityDescriptor.

    Raises:
        PayloadMalformed: The text is not JSON, not an object, lacks a required
            key, has a wrongly typed value, or declares a file with no hashes.
    """
    try:
        wire = _WirePayload.model_validate_json(text)
    except ValidationError as err:
        raise PayloadMalformed(
            f"Hidden payload is malformed: {_summarize(err)}", payload=text
        ) from err

    try:
        checks = tuple(
            FileCheck(
                anchor=entry.relative_to,
                path=entry.file,
                acceptable_hashes=frozenset(entry.hashes),
            )
            for entry in wire.hashes
        )
    except ValueError as err:
        raise PayloadMalformed(f"Hidden payload is malformed: {err}", payload=text) from err

    return CompatibilityDescriptor(
        primary_version=wire.main_version,
        compatible_versions=tuple(wire.compatible_versions),
        loader=wire.loader,
        file_checks=checks,
        announcement_post=wire.post,
    )


def encode_payload(descriptor: CompatibilityDescriptor) -> str:
    """
    Render a descriptor as wire JSON, safe to place inside a marker.

    The output is compact ASCII: newlines and non-ASCII characters come out
    as JSON escapes and single quotes as \\u0027, so the text can neither
    break the line nor close the marker early. Hash lists are sorted.
    """
    wire = _WirePayload(
        main_version=descriptor.primary_version,
        compatible_versions=list(descriptor.compatible_versions),
        loader=descriptor.loader,
        post=descriptor.announcement_post,
        hashes=[
            _WireFileCheck(
                relative_to=check.anchor,
                file=check.path,
                hashes=sorted(check.acceptable_hashes),
            )
            for check in descriptor.file_checks
        ],
    )
    text = json.dumps(wire.model_dump(by_alias=True), separators=(",", ":"), ensure_ascii=True)
    # Quotes only occur inside JSON strings, where \u0027 decodes to the same character.
    return text.replace("'", "\\u0027")


def embed_payload(descriptor: CompatibilityDescriptor, body: str) -> str:
    """Prefix a visible changelog with the hidden marker for `descriptor`."""
    return f"{MARKER_PREFIX}{encode_payload(descriptor)}{MARKER_SUFFIX}{body}"
