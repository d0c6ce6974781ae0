"""Tests for the host collaborators: key/value stores and clipboard sources."""

import json
import threading

import pyperclip
import pytest

from host import ClipboardError, JsonFileStore, MemoryClipboard, MemoryStore, StorageError, SystemClipboard


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class TestMemoryStore:
    def test_get_set(self):
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"


class TestJsonFileStore:
    def test_missing_file_reads_none(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "store.json"))
        assert store.get("saved_wpm") is None

    def test_set_then_get(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileStore(str(path))
        store.set("saved_wpm", "500")
        store.set("deleted_texts", '["a"]')
        assert store.get("saved_wpm") == "500"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "saved_wpm": "500",
            "deleted_texts": '["a"]',
        }

    def test_survives_new_instance(self, tmp_path):
        path = str(tmp_path / "store.json")
        JsonFileStore(path).set("saved_wpm", "300")
        assert JsonFileStore(path).get("saved_wpm") == "300"

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(str(path))
        assert store.get("saved_wpm") is None
        store.set("saved_wpm", "400")
        assert store.get("saved_wpm") == "400"

    def test_non_string_values_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text('{"saved_wpm": 400, "x": "y"}', encoding="utf-8")
        store = JsonFileStore(str(path))
        assert store.get("saved_wpm") is None
        assert store.get("x") == "y"

    def test_unwritable_location_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileStore(str(blocker / "store.json"))
        with pytest.raises(StorageError):
            store.set("k", "v")


# ---------------------------------------------------------------------------
# Clipboards
# ---------------------------------------------------------------------------


class TestMemoryClipboard:
    def test_read_limited(self):
        clip = MemoryClipboard(["a", "b", "c"])
        assert clip.read_entries(2) == ["a", "b"]

    def test_write_becomes_most_recent(self):
        clip = MemoryClipboard(["a"])
        clip.write_text("b")
        assert clip.read_entries(5) == ["b", "a"]


class TestSystemClipboard:
    def test_collects_history_most_recent_first(self, monkeypatch):
        contents = iter(["first", "first", "second"])
        monkeypatch.setattr(pyperclip, "paste", lambda: next(contents))
        clip = SystemClipboard()
        clip.observe()
        clip.observe()
        assert clip.read_entries(6) == ["second", "first"]

    def test_write_copies_and_records(self, monkeypatch):
        copied = []
        monkeypatch.setattr(pyperclip, "copy", copied.append)
        monkeypatch.setattr(pyperclip, "paste", lambda: "text")
        clip = SystemClipboard()
        clip.write_text("text")
        assert copied == ["text"]
        assert clip.read_entries(6) == ["text"]

    def test_paste_failure_raises_clipboard_error(self, monkeypatch):
        def boom():
            raise pyperclip.PyperclipException("no mechanism")

        monkeypatch.setattr(pyperclip, "paste", boom)
        with pytest.raises(ClipboardError):
            SystemClipboard().read_entries(6)

    def test_monitoring_collects_entries(self, monkeypatch):
        contents = ["one", "two", "three"]
        seen_all = threading.Event()

        def paste():
            if len(contents) == 1:
                seen_all.set()
                return contents[0]
            return contents.pop(0)

        monkeypatch.setattr(pyperclip, "paste", paste)
        clip = SystemClipboard(update_interval=0.01)
        clip.start_monitoring()
        assert clip.monitoring
        assert seen_all.wait(timeout=5)
        clip.stop_monitoring()
        assert not clip.monitoring
        assert clip.read_entries(6) == ["three", "two", "one"]

    def test_monitoring_stops_when_clipboard_unavailable(self, monkeypatch):
        def boom():
            raise pyperclip.PyperclipException("no mechanism")

        monkeypatch.setattr(pyperclip, "paste", boom)
        clip = SystemClipboard(update_interval=0.01)
        clip.start_monitoring()
        clip._monitor.join(timeout=5)
        assert not clip.monitoring
