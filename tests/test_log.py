import json
import logging

from vertexcheck.utils.log import JsonLineFormatter, sanitize


def test_sanitize_hides_memory_addresses():
    raw = "<HTTPSConnection(host='x') at 0x7f3a2c1b9d90>: failed"
    assert sanitize(raw) == "<HTTPSConnection(host='x') at <ptr>>: failed"


def test_formatter_emits_event_and_fields_as_json():
    record = logging.LogRecord("vertexcheck", logging.ERROR, __file__, 1, "vertex.connect.failed", None, None)
    record.fields = {"project": "p", "error": ValueError("boom at 0xdeadbeef")}

    entry = json.loads(JsonLineFormatter().format(record))

    assert entry["level"] == "ERROR"
    assert entry["message"] == "vertex.connect.failed"
    assert entry["project"] == "p"
    assert entry["error"] == "boom at <ptr>"
