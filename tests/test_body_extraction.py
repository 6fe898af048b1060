"""Tests for text/plain discovery in Gmail part trees."""

from inboxwatch.domain.entities.gmail_message import BodyPart
from inboxwatch.infrastructure.email.body import decode_web_safe, extract_plain_text, iter_parts
from inboxwatch.infrastructure.gmail.mapper import to_body_part

from conftest import b64url


def test_finds_plain_text_at_depth_four():
    tree = to_body_part({
        "mimeType": "multipart/mixed",
        "parts": [{
            "mimeType": "multipart/related",
            "parts": [{
                "mimeType": "multipart/alternative",
                "parts": [
                    {"mimeType": "text/html", "body": {"data": b64url("<b>x</b>")}},
                    {"mimeType": "text/plain", "body": {"data": b64url("deep text")}},
                ],
            }],
        }],
    })
    assert extract_plain_text(tree) == "deep text"


def test_first_match_in_pre_order_wins():
    tree = BodyPart(
        mime_type="multipart/mixed",
        parts=(
            BodyPart(
                mime_type="multipart/alternative",
                parts=(BodyPart(mime_type="text/plain", data=b64url("first")),),
            ),
            BodyPart(mime_type="text/plain", data=b64url("second")),
        ),
    )
    assert extract_plain_text(tree) == "first"


def test_root_plain_text_payload():
    assert extract_plain_text(BodyPart(mime_type="text/plain", data=b64url("single part"))) == "single part"


def test_plain_part_without_data_is_skipped():
    tree = BodyPart(
        mime_type="multipart/mixed",
        parts=(
            BodyPart(mime_type="text/plain", data=None),
            BodyPart(mime_type="text/plain", data=b64url("has data")),
        ),
    )
    assert extract_plain_text(tree) == "has data"


def test_no_plain_text_returns_none():
    tree = BodyPart(mime_type="multipart/alternative", parts=(BodyPart(mime_type="text/html", data=b64url("<p/>")),))
    assert extract_plain_text(tree) is None
    assert extract_plain_text(None) is None


def test_decode_web_safe_handles_missing_padding_and_url_alphabet():
    text = "subjects?>>> ünïcode"
    assert decode_web_safe(b64url(text)) == text


def test_iter_parts_is_pre_order():
    tree = BodyPart(
        mime_type="a",
        parts=(BodyPart(mime_type="b", parts=(BodyPart(mime_type="c"),)), BodyPart(mime_type="d")),
    )
    assert [p.mime_type for p in iter_parts(tree)] == ["a", "b", "c", "d"]


def test_undecodable_first_plain_part_stops_the_search():
    tree = BodyPart(
        mime_type="multipart/mixed",
        parts=(
            BodyPart(mime_type="text/plain", data="abcde"),
            BodyPart(mime_type="text/plain", data=b64url("later part")),
        ),
    )
    assert extract_plain_text(tree) is None
