from checkin_client.api.schemas.checkin import CheckinRecord, LocationSample
from checkin_client.api.schemas.child import ChildProfile
from checkin_client.core.formatting import (
    build_card,
    format_accuracy,
    format_capture_line,
    format_location_ready,
    format_timestamp,
    markdown_link,
)


def test_accuracy_rounds_half_up_and_defaults_to_zero():
    assert format_accuracy(12) == "±12m"
    assert format_accuracy(12.5) == "±13m"
    assert format_accuracy(None) == "±0m"


def test_location_lines_use_five_decimals():
    sample = LocationSample(lat=37.774929, lng=-122.419416, accuracy=11.6)

    assert format_location_ready(sample) == "Location ready: 37.77493, -122.41942"
    assert format_capture_line(sample) == "Ready: lat 37.77493, lng -122.41942 ±12m"


def test_card_omits_missing_note_and_link(sample_checkin_doc):
    record = CheckinRecord.model_validate(dict(sample_checkin_doc, note=None, link=""))

    card = build_card(record)

    assert card.note_line is None
    assert card.link is None
    assert card.coords_line == "37.77493, -122.41942 ±12m"


def test_card_shows_note_link_and_child_name(sample_checkin_doc):
    record = CheckinRecord.model_validate(dict(sample_checkin_doc, link="https://youtu.be/x"))

    card = build_card(record, [ChildProfile(id="c1", name="Ava")])

    assert card.child == "Ava"
    assert card.note_line == "Note: At the park"
    assert card.link == "https://youtu.be/x"
    assert card.created_at != ""


def test_unknown_child_falls_back_to_id(sample_checkin_doc):
    record = CheckinRecord.model_validate(sample_checkin_doc)

    assert build_card(record, [ChildProfile(id="c9", name="Leo")]).child == "c1"


def test_unreadable_timestamp_renders_blank(sample_checkin_doc):
    record = CheckinRecord.model_validate(dict(sample_checkin_doc, created_at="yesterday"))

    assert record.created_at is None
    assert format_timestamp(record.created_at) == ""


def test_card_is_a_pydantic_model(sample_checkin_doc):
    card = build_card(CheckinRecord.model_validate(sample_checkin_doc))

    assert card.model_dump()["coords_line"] == "37.77493, -122.41942 ±12m"


def test_markdown_link_keeps_parentheses_and_escapes_spaces():
    assert markdown_link("Link", "https://en.wikipedia.org/wiki/Park_(disambiguation)") == (
        "[Link](<https://en.wikipedia.org/wiki/Park_(disambiguation)>)"
    )
    assert markdown_link("Link", " https://example.com/a b<c> ") == "[Link](<https://example.com/a%20b%3Cc%3E>)"
