# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release decoder. Turns one raw release record into a Release.

The record is the JSON object a release host returns for a single release.
Both the short field names (url, tag, title, publishedAt) and GitHub's
release API names (html_url, tag_name, name, published_at) are accepted.

Failure policy:
  - A missing or wrongly typed visible field raises RecordMalformed. No
    Release is produced.
  - A broken hidden payload does not stop decoding. The Release comes back
    with compatibility=None, the marker is still stripped from the body, and
    the PayloadMalformed is returned next to it and logged as a warning.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from releasemeta.logging.logger import get_logger
from releasemeta.release.errors import PayloadMalformed, RecordMalformed
from releasemeta.release.models import CompatibilityDescriptor, Release
from releasemeta.release.payload import locate_payload, parse_payload

_logger: logging.Logger = get_logger(__name__)


class _RawReleaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    url: str = Field(validation_alias=AliasChoices("url", "html_url"))
    tag: str = Field(validation_alias=AliasChoices("tag", "tag_name"))
    title: str = Field(validation_alias=AliasChoices("title", "name"))
    published_at: str = Field(validation_alias=AliasChoices("publishedAt", "published_at"))
    prerelease: bool
    body: str


@dataclass(frozen=True)
class DecodedRelease:
    """A decoded release plus the payload problem, if there was one."""

    release: Release
    payload_error: Optional[PayloadMalformed] = None

    @property
    def has_warnings(self) -> bool:
        return self.payload_error is not None


def _validate_record(raw: Mapping[str, Any]) -> _RawReleaseRecord:
    if not isinstance(raw, Mapping):
        raise RecordMalformed(
            f"Release record must be a mapping, got {type(raw).__name__}"
        )

    try:
        return _RawReleaseRecord.model_validate(dict(raw))
    except ValidationError as err:
        fields = tuple(
            str(detail["loc"][0]) for detail in err.errors() if detail["loc"]
        )
        raise RecordMalformed(
            f"Release record is missing or has invalid fields: {', '.join(fields)}",
            fields=fields,
        ) from err


def decode_release(raw: Mapping[str, Any]) -> DecodedRelease:
    """
    Decode one raw release record.

    Args:
        raw: The release record mapping.

    Returns:
        DecodedRelease holding the Release and, when the hidden payload was
        present but unusable, the PayloadMalformed describing why.

    Raises:
        RecordMalformed: A required visible field is missing or wrongly typed.
    """
    record = _validate_record(raw)

    body = record.body
    compatibility: Optional[CompatibilityDescriptor] = None
    payload_error: Optional[PayloadMalformed] = None

    match = locate_payload(record.body)
    if match is not None:
        body = match.visible_body
        try:
            compatibility = parse_payload(match.payload)
        except PayloadMalformed as err:
            payload_error = err
            _logger.warning(
                "Embedded payload is malformed",
                extra={"tag": record.tag, "error": str(err)},
            )

    release = Release(
        url=record.url,
        tag=record.tag,
        title=record.title,
        published_at=record.published_at,
        prerelease=record.prerelease,
        body=body,
        compatibility=compatibility,
        raw=raw,
    )

    _logger.debug(
        "Release decoded",
        extra={
            "tag": release.tag,
            "marker_found": match is not None,
            "has_compatibility": compatibility is not None,
            "file_checks": len(compatibility.file_checks) if compatibility else 0,
        },
    )

    return DecodedRelease(release=release, payload_error=payload_error)
