"""Tests for the Flask web host."""

import pytest

from engine import ReaderSession
from host import MemoryClipboard, MemoryStore
from main import create_app

from conftest import ALPHA, FOX, LOREM


@pytest.fixture
def reader_session():
    return ReaderSession(clipboard=MemoryClipboard([FOX, LOREM, ALPHA]), store=MemoryStore())


@pytest.fixture
def client(reader_session):
    app = create_app(reader_session)
    app.config["TESTING"] = True
    return app.test_client()


def _post(client, url, data=None):
    res = client.post(url, json=data or {})
    return res.status_code, res.get_json()


def _post_raw(client, url, raw):
    res = client.post(url, data=raw, content_type="application/json")
    return res.status_code, res.get_json()


class TestIndex:
    def test_starts_session_and_renders_page(self, client, reader_session):
        assert reader_session.started
        res = client.get("/")
        assert res.status_code == 200
        page = res.get_data(as_text=True)
        assert "RSVP Reader" in page
        assert "The quick brown fox" in page
        assert "data:image/svg+xml;utf8," in page
        assert "400 WPM" in page

    def test_empty_clipboard_shows_empty_view(self):
        app = create_app(ReaderSession(clipboard=MemoryClipboard([]), store=MemoryStore()))
        page = app.test_client().get("/").get_data(as_text=True)
        assert "Nothing to Parse." in page
        assert "No Text Found" in page

    def test_state(self, client):
        data = client.get("/api/state").get_json()
        assert data["state"]["status"] == "playing"
        assert data["word"] == "The"
        assert data["markdown"].startswith("![The](data:image/svg+xml;utf8,")
        assert data["tick"]["delay_ms"] == 150


class TestPlaybackRoutes:
    def test_tick_advances(self, client):
        token = client.get("/api/state").get_json()["tick"]["token"]
        status, data = _post(client, "/api/tick", {"token": token})
        assert status == 200
        assert data["state"]["index"] == 1
        assert data["word"] == "quick"

    def test_stale_tick_is_ignored(self, client):
        token = client.get("/api/state").get_json()["tick"]["token"]
        _post(client, "/api/toggle")
        _, data = _post(client, "/api/tick", {"token": token})
        assert data["state"]["index"] == 0
        assert data["state"]["status"] == "paused"
        assert data["tick"] is None

    def test_toggle_round_trip(self, client):
        _, paused = _post(client, "/api/toggle")
        _, playing = _post(client, "/api/toggle")
        assert paused["state"]["status"] == "paused"
        assert playing["state"]["status"] == "playing"
        assert playing["tick"] is not None

    def test_jump_and_restart(self, client):
        _, data = _post(client, "/api/jump", {"index": 8})
        assert data["word"] == "dog."
        assert data["tick"]["delay_ms"] == 300
        _, data = _post(client, "/api/restart")
        assert data["state"]["index"] == 0

    def test_finished_schedules_no_tick(self, client):
        _, data = _post(client, "/api/jump", {"index": 9})
        _, data = _post(client, "/api/tick", {"token": data["tick"]["token"]})
        assert data["state"]["status"] == "finished"
        assert data["tick"] is None
        assert client.get("/api/state").get_json()["tick"] is None

    def test_bad_token(self, client):
        status, data = _post(client, "/api/tick", {"token": "x"})
        assert status == 400
        assert "error" in data


class TestDocumentRoutes:
    def test_select(self, client, reader_session):
        second = reader_session.documents.ids()[1]
        _, data = _post(client, "/api/select", {"id": second})
        assert data["state"]["document_id"] == second
        assert data["word"] == "Lorem"

    def test_select_unknown(self, client):
        status, _ = _post(client, "/api/select", {"id": "nope"})
        assert status == 400

    def test_delete_selected(self, client, reader_session):
        first, second = reader_session.documents.ids()[:2]
        _, data = _post(client, "/api/delete", {"id": first})
        assert data["state"]["document_id"] == second
        assert "Deleted" in [n["title"] for n in data["notifications"]]
        assert first not in data["documents"]

    def test_copy(self, client, reader_session):
        _, data = _post(client, "/api/copy", {"id": reader_session.documents.ids()[2]})
        assert data["copied"] is True
        assert reader_session.clipboard.entries[0] == ALPHA


class TestSpeedRoute:
    def test_change_speed_persists(self, client, reader_session):
        _, data = _post(client, "/api/speed", {"wpm": 600})
        assert data["state"]["wpm"] == 600
        assert data["tick"]["delay_ms"] == 100
        assert reader_session.store.get("saved_wpm") == "600"

    def test_rejects_off_menu_speed(self, client):
        status, data = _post(client, "/api/speed", {"wpm": 123})
        assert status == 400
        assert "error" in data


class TestMalformedRequests:
    @pytest.mark.parametrize("url", [
        "/api/select", "/api/tick", "/api/jump", "/api/speed", "/api/delete", "/api/copy",
    ])
    def test_non_object_body_is_rejected(self, client, url):
        status, data = _post_raw(client, url, "[1]")
        assert status == 400
        assert "error" in data

    def test_rejected_delete_keeps_document(self, client, reader_session):
        before = reader_session.documents.ids()
        _post_raw(client, "/api/delete", "[1]")
        assert reader_session.documents.ids() == before

    @pytest.mark.parametrize("url,field", [
        ("/api/jump", "index"), ("/api/tick", "token"), ("/api/speed", "wpm"),
    ])
    def test_infinite_number_is_rejected(self, client, url, field):
        status, data = _post_raw(client, url, '{"%s": 1e400}' % field)
        assert status == 400
        assert "error" in data


class TestReloadRoute:
    def test_rescans_clipboard(self, client, reader_session):
        reader_session.clipboard.write_text(ALPHA + " mu nu")
        status, data = _post(client, "/api/reload")
        assert status == 200
        assert data["word"] == "alpha"
        assert data["state"]["word_count"] == 13
        assert data["state"]["document_id"] == reader_session.documents.first().id
        assert "doc-list" in data["documents"]
