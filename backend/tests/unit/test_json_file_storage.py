"""Unit tests for the JSON-file key-value storage."""

import json

from app.infrastructure.storage.json_file_storage import JsonFileStorage


def test_missing_file_reads_as_empty(tmp_path):
    storage = JsonFileStorage(tmp_path / "missing.json")
    assert storage.get("fontSize") is None


def test_set_then_get_persists_to_disk(tmp_path):
    path = tmp_path / "nested" / "local_storage.json"
    storage = JsonFileStorage(path)

    storage.set("fontSize", "48")
    storage.set("darkMode", "true")

    assert storage.get("fontSize") == "48"
    assert json.loads(path.read_text("utf-8")) == {"fontSize": "48", "darkMode": "true"}
    assert JsonFileStorage(path).get("darkMode") == "true"


def test_remove_deletes_key(tmp_path):
    storage = JsonFileStorage(tmp_path / "s.json")
    storage.set("binId", "abc")

    storage.remove("binId")
    storage.remove("never-set")

    assert storage.get("binId") is None


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{broken", encoding="utf-8")

    assert JsonFileStorage(path).get("fontFamily") is None


def test_non_string_values_are_returned_as_json(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"quotes": [{"id": "1"}]}), encoding="utf-8")

    assert json.loads(JsonFileStorage(path).get("quotes")) == [{"id": "1"}]
