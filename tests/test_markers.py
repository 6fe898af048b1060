"""Tests for marker token extraction."""

from inboxwatch.application.markers import extract_marker

from conftest import MARKER_UUID


def test_valid_marker_is_extracted():
    match = extract_marker(f"...spam-test-{MARKER_UUID} more text", label_ids=["INBOX", "SPAM"])
    assert match is not None
    assert match.token == MARKER_UUID
    assert match.marker == f"spam-test-{MARKER_UUID}"
    assert match.label_ids == ("INBOX", "SPAM")


def test_malformed_token_is_not_a_match():
    assert extract_marker("...spam-test-not-a-uuid") is None


def test_missing_prefix_is_not_a_match():
    assert extract_marker(f"nothing to see {MARKER_UUID}") is None


def test_token_ends_at_comma_or_period():
    assert extract_marker(f"id spam-test-{MARKER_UUID}, thanks").token == MARKER_UUID
    assert extract_marker(f"id spam-test-{MARKER_UUID}.").token == MARKER_UUID
    assert extract_marker(f"id spam-test-{MARKER_UUID}\nnext line").token == MARKER_UUID


def test_uppercase_hex_accepted():
    upper = MARKER_UUID.upper()
    assert extract_marker(f"spam-test-{upper}").token == upper


def test_only_first_prefix_occurrence_is_considered():
    text = f"spam-test-bogus then spam-test-{MARKER_UUID}"
    assert extract_marker(text) is None


def test_prefix_is_case_sensitive():
    assert extract_marker(f"SPAM-TEST-{MARKER_UUID}") is None


def test_custom_prefix_and_message_id():
    match = extract_marker(f"ref-{MARKER_UUID}", prefix="ref-", message_id="m1")
    assert match.marker == f"ref-{MARKER_UUID}"
    assert match.to_dict()["message_id"] == "m1"
