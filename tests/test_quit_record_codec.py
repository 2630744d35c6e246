import json

from app.models.quit_record_model import (
    QuitRecord,
    decode_custom_entries,
    decode_history,
    encode_custom_entries,
    encode_history,
)


def test_encode_uses_stored_field_names():
    raw = encode_custom_entries([QuitRecord(id="a1", title="Coffee", quit_date="2025-01-01T00:00:00Z")])
    assert json.loads(raw) == [{"v": 1, "id": "a1", "title": "Coffee", "quitDate": "2025-01-01T00:00:00Z"}]


def test_decode_accepts_entries_without_version_or_date():
    records = decode_custom_entries(json.dumps([{"id": "a1", "title": "Coffee"}]))
    assert records == [QuitRecord(id="a1", title="Coffee", quit_date=None, built_in=False)]


def test_decode_unparseable_quit_date_becomes_unset():
    raw = json.dumps([{"v": 1, "id": "a1", "title": "Coffee", "quitDate": "not-a-date"}])
    assert decode_custom_entries(raw)[0].quit_date is None


def test_decode_skips_bad_elements():
    raw = json.dumps([
        {"v": 1, "id": "ok", "title": "Fine"},
        {"v": 2, "id": "future", "title": "Newer schema"},
        {"v": 1, "title": "No id"},
        "just a string",
        {"v": 1, "id": "x", "title": "Bad date type", "quitDate": 5},
    ])
    assert [r.id for r in decode_custom_entries(raw)] == ["ok"]


def test_decode_garbage_is_empty():
    assert decode_custom_entries(None) == []
    assert decode_custom_entries("") == []
    assert decode_custom_entries("{not json") == []
    assert decode_custom_entries('{"id": "a1"}') == []


def test_history_decoding_drops_junk():
    assert decode_history(encode_history([3, 41])) == [3, 41]
    assert decode_history('[5, "7", true, -1, 0, 9]') == [5, 9]
    assert decode_history("oops") == []
    assert decode_history(None) == []


def test_decode_out_of_range_quit_date_becomes_unset():
    raw = json.dumps([{"v": 1, "id": "a1", "title": "Coffee", "quitDate": "0001-01-01T00:00:00+05:00"}])
    assert decode_custom_entries(raw)[0].quit_date is None
