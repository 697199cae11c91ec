from visitorlog.headers import HeaderResolver
from visitorlog.rules import HEADER_ORDER


def _row(headers, values):
    return dict(zip(headers, values))


def test_english_and_hindi_aliases_resolve_same_field():
    resolver = HeaderResolver()
    assert resolver.resolve({"Name": "Asha"}, "name") == "Asha"

    resolver = HeaderResolver()
    assert resolver.resolve({"आपका नाम क्या है?": "Asha"}, "name") == "Asha"


def test_quoted_and_mangled_headers():
    resolver = HeaderResolver()
    assert resolver.resolve({'"Entry Number"': "E-1"}, "entry_number") == "E-1"

    resolver = HeaderResolver()
    assert resolver.resolve({"?????? ?????": "9876543210"}, "mobile") == "9876543210"


def test_literal_field_name_is_tried_after_aliases():
    resolver = HeaderResolver(aliases={})
    assert resolver.resolve({"purpose": "darshan"}, "purpose") == "darshan"


def test_positional_fallback_uses_canonical_order():
    good_headers = ["Entry Number", "Manual Entry Number", "Timestamp", "Arrival Time", "Name", "Male"]
    corrupt_headers = ["Ã©ntry", "mÃ¤nual", "tÃ¯mestamp", "Ã¤rrival", "nÃ¤me", "mÃ¤le"]
    values = ["E-7", "M-7", "01/02/2024", "10:00", "Ravi", "2"]

    first = HeaderResolver()
    second = HeaderResolver()
    assert first.resolve(_row(good_headers, values), "name") == "Ravi"
    assert second.resolve(_row(corrupt_headers, values), "name") == "Ravi"
    assert second.resolve(_row(corrupt_headers, values), "male") == "2"
    assert second.columns == corrupt_headers


def test_positional_cache_is_captured_once_per_load():
    resolver = HeaderResolver()
    resolver.resolve({"a": 1, "b": 2}, "entry_number")
    resolver.resolve({"x": 1, "y": 2}, "entry_number")
    assert resolver.columns == ["a", "b"]

    resolver.reset()
    resolver.resolve({"x": 1, "y": 2}, "entry_number")
    assert resolver.columns == ["x", "y"]


def test_unresolved_field_is_empty_string():
    resolver = HeaderResolver()
    assert resolver.resolve({"Name": "Asha"}, "email") == ""
    assert resolver.resolve(None, "name") == ""
    assert resolver.resolve({}, "name") == ""


def test_resolved_headers_reports_every_field():
    resolver = HeaderResolver()
    mapping = resolver.resolved_headers({"Name": "Asha", "Room Number": "12"})
    assert set(mapping) == set(HEADER_ORDER)
    assert mapping["name"] == "Name"
    assert mapping["room_number"] == "Room Number"
