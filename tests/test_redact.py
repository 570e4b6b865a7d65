from __future__ import annotations

from pytournee._redact import redact_for_log


def test_redact_for_log_masks_contact_details() -> None:
    payload = {
        "id": 1,
        "clientName": "Marie Curie",
        "phone": "06 12 34 56 78",
        "confirmation_code": "4821",
        "nested": [{"client_name": "Jean Moulin", "phone": None}],
    }

    redacted = redact_for_log(payload)

    assert redacted["id"] == 1
    assert redacted["clientName"] == "<redacted>"
    assert redacted["phone"] == "<redacted:…78>"
    assert redacted["confirmation_code"] == "<redacted>"
    assert redacted["nested"][0]["client_name"] == "<redacted>"
    assert redacted["nested"][0]["phone"] is None


def test_redact_for_log_summarises_inline_photos() -> None:
    redacted = redact_for_log({"photo": "data:image/jpeg;base64," + "A" * 1000, "uri": "file:///door.jpg"})

    assert redacted["photo"].startswith("<data-uri:")
    assert redacted["uri"] == "file:///door.jpg"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
