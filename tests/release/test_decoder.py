# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for decode_release.

A broken visible field is fatal for the record. A broken hidden payload is
not: the Release still comes back, without a descriptor, and the marker is
still removed from the body.
"""

from typing import Any, Callable

import pytest

from releasemeta.release.decoder import decode_release
from releasemeta.release.errors import PayloadMalformed, RecordMalformed

MakeRecord = Callable[..., dict[str, Any]]

SCENARIO_PAYLOAD = (
    '{"Minecraft":"1.12","MinecraftCompatible":["1.12","1.12.1"],'
    '"Loader":"Forge","Post":null,"Hashes":[]}'
)
EMPTY_HASH_PAYLOAD = (
    '{"Minecraft":"1.12","MinecraftCompatible":["1.12","1.12.1"],'
    '"Loader":"Forge","Post":null,'
    '"Hashes":[{"RelativeTo":"x","File":"y.class","Hash":[]}]}'
)


class TestMarkerHandling:
    def test_scenario_marker_is_decoded_and_stripped(self, make_record: MakeRecord) -> None:
        decoded = decode_release(make_record(body=f"[](# '{SCENARIO_PAYLOAD}')Changelog text."))
        release = decoded.release

        assert release.body == "Changelog text."
        assert release.compatibility is not None
        assert release.compatibility.primary_version == "1.12"
        assert release.compatibility.announcement_post is None
        assert release.compatibility.file_checks == ()
        assert decoded.payload_error is None
        assert not decoded.has_warnings

    def test_empty_hash_list_is_reported_not_fatal(self, make_record: MakeRecord) -> None:
        decoded = decode_release(make_record(body=f"[](# '{EMPTY_HASH_PAYLOAD}')Changelog text."))

        assert isinstance(decoded.payload_error, PayloadMalformed)
        assert decoded.has_warnings
        assert decoded.release.compatibility is None
        assert decoded.release.body == "Changelog text."

    def test_payload_without_post_key_is_reported(self, make_record: MakeRecord) -> None:
        payload = '{"Minecraft":"1.12","MinecraftCompatible":["1.12"],"Loader":"Forge","Hashes":[]}'
        decoded = decode_release(make_record(body=f"[](# '{payload}')Changelog text."))

        assert isinstance(decoded.payload_error, PayloadMalformed)
        assert decoded.release.compatibility is None
        assert decoded.release.body == "Changelog text."

    def test_body_without_marker_is_unchanged(self, make_record: MakeRecord) -> None:
        body = "## Changes\n\n* Fixed a crash when saving chests.\n"
        decoded = decode_release(make_record(body=body))
        assert decoded.release.body == body
        assert decoded.release.compatibility is None
        assert decoded.payload_error is None

    def test_marker_later_in_body_is_visible_text(self, make_record: MakeRecord) -> None:
        body = f"Intro.\n[](# '{SCENARIO_PAYLOAD}')"
        decoded = decode_release(make_record(body=body))
        assert decoded.release.body == body
        assert decoded.release.compatibility is None

    def test_body_is_exact_concatenation_around_marker(self, make_record: MakeRecord) -> None:
        tail = "\r\n  Trailing whitespace kept.  \n"
        decoded = decode_release(make_record(body=f"[](# '{SCENARIO_PAYLOAD}')" + tail))
        assert decoded.release.body == tail

    def test_empty_body(self, make_record: MakeRecord) -> None:
        decoded = decode_release(make_record(body=""))
        assert decoded.release.body == ""
        assert decoded.release.compatibility is None


class TestVisibleFields:
    def test_fields_are_copied(self, make_record: MakeRecord) -> None:
        raw = make_record(prerelease=True)
        release = decode_release(raw).release
        assert release.url == raw["url"]
        assert release.tag == "v4.0.0"
        assert release.title == "World Downloader 4.0.0"
        assert release.published_at == "2017-08-05T21:04:11Z"
        assert release.prerelease is True

    def test_github_api_names_are_accepted(self) -> None:
        raw = {
            "html_url": "https://github.com/o/r/releases/tag/v1",
            "tag_name": "v1",
            "name": "First",
            "published_at": "2018-01-01T00:00:00Z",
            "prerelease": False,
            "body": "Notes",
            "draft": False,
        }
        release = decode_release(raw).release
        assert release.url == raw["html_url"]
        assert release.tag == "v1"
        assert release.title == "First"

    def test_raw_record_is_preserved(self, make_record: MakeRecord) -> None:
        raw = make_record(assets=[{"name": "wdl.jar"}])
        release = decode_release(raw).release
        assert release.raw["assets"] == [{"name": "wdl.jar"}]


class TestMalformedRecord:
    @pytest.mark.parametrize("field", ["prerelease", "body"])
    def test_missing_field_raises(self, make_record: MakeRecord, field: str) -> None:
        raw = make_record()
        del raw[field]
        with pytest.raises(RecordMalformed) as exc_info:
            decode_release(raw)
        assert field in exc_info.value.fields

    def test_missing_aliased_field_raises(self, make_record: MakeRecord) -> None:
        raw = make_record()
        del raw["tag"]
        with pytest.raises(RecordMalformed):
            decode_release(raw)

    def test_wrong_type_raises(self, make_record: MakeRecord) -> None:
        with pytest.raises(RecordMalformed) as exc_info:
            decode_release(make_record(prerelease="false"))
        assert "prerelease" in exc_info.value.fields

    def test_null_body_raises(self, make_record: MakeRecord) -> None:
        with pytest.raises(RecordMalformed):
            decode_release(make_record(body=None))

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(RecordMalformed, match="mapping"):
            decode_release(["not", "a", "record"])  # type: ignore[arg-type]
