"""Tests for debounced auto-save."""

from __future__ import annotations

import subprocess
import sys
import threading

import pytest

from cloudhub.client import AutoSync, SyncSession


class FakeClient:
    def __init__(self) -> None:
        self.saved: list[tuple[str, str, list]] = []
        self.event = threading.Event()

    def save_collection(self, kind, email, items):
        self.saved.append((kind, email, list(items)))
        self.event.set()
        return {"success": True, "count": len(items)}


def test_only_latest_list_is_saved_after_quiet_period() -> None:
    saved: list[list] = []
    done = threading.Event()

    def save(items) -> None:
        saved.append(list(items))
        done.set()

    syncer = AutoSync(save, delay=0.05)
    syncer.schedule([{"title": "a"}])
    syncer.schedule([{"title": "a"}, {"title": "b"}])

    assert done.wait(2)
    assert saved == [[{"title": "a"}, {"title": "b"}]]
    assert syncer.has_pending is False
    assert syncer.save_count == 1


def test_flush_saves_immediately_and_once() -> None:
    saved: list[list] = []
    syncer = AutoSync(saved.append, delay=60)

    syncer.schedule([])

    assert syncer.flush() is True
    assert saved == [[]]
    assert syncer.flush() is False


def test_flush_waits_for_a_slow_timer_save() -> None:
    first = [{"title": "old"}]
    second = [{"title": "new"}]
    written: list[list] = []
    started = threading.Event()
    release = threading.Event()

    def save(items) -> None:
        if items == first:
            started.set()
            assert release.wait(5)
        written.append(list(items))

    syncer = AutoSync(save, delay=0.01)
    syncer.schedule(first)
    assert started.wait(2)

    syncer.delay = 60
    syncer.schedule(second)
    threading.Timer(0.1, release.set).start()

    assert syncer.flush() is True
    assert written == [first, second]
    assert syncer.save_count == 2
    assert syncer.has_pending is False


def test_cancel_drops_pending_list() -> None:
    saved: list[list] = []
    syncer = AutoSync(saved.append, delay=60)

    syncer.schedule([{"title": "x"}])
    syncer.cancel()

    assert syncer.flush() is False
    assert saved == []


def test_failure_is_kept_in_last_error() -> None:
    def save(items) -> None:
        raise RuntimeError("offline")

    syncer = AutoSync(save, delay=60)
    syncer.schedule([{"title": "x"}])

    assert syncer.flush() is False
    assert str(syncer.last_error) == "offline"

    syncer._save_fn = lambda items: None
    syncer.schedule([{"title": "x"}])
    assert syncer.flush() is True
    assert syncer.last_error is None


def test_default_delay_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLOUDHUB_AUTOSAVE_DELAY", "1.5")
    assert AutoSync(lambda items: None).delay == 1.5

    monkeypatch.setenv("CLOUDHUB_AUTOSAVE_DELAY", "soon")
    assert AutoSync(lambda items: None).delay == 0.5


def test_sync_session_routes_each_collection() -> None:
    client = FakeClient()
    session = SyncSession(client, "a@u.edu", delay=60)

    session.update("projects", [{"title": "P"}])
    session.update("notes", [])
    results = session.flush()

    assert results == {"projects": True, "certificates": False, "notes": True, "resumes": False}
    assert sorted(client.saved) == [
        ("notes", "a@u.edu", []),
        ("projects", "a@u.edu", [{"title": "P"}]),
    ]
    assert session.errors() == {}


def test_sync_session_timer_fires() -> None:
    client = FakeClient()
    session = SyncSession(client, "a@u.edu", delay=0.05)

    session.update("resumes", [{"title": "CV"}])

    assert client.event.wait(2)
    assert client.saved == [("resumes", "a@u.edu", [{"title": "CV"}])]
    session.cancel()


def test_client_import_does_not_load_the_database_layer() -> None:
    code = (
        "import sys, cloudhub.client; "
        "print('sqlalchemy' in sys.modules, 'cloudhub.services' in sys.modules)"
    )
    result = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True
    )

    assert result.stdout.split() == ["False", "False"]
