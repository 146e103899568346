from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tetrix.storage import (
    BEST_KEY,
    TUTORIAL_KEY,
    JsonScoreStore,
    LocalStorageStore,
    default_scores_path,
)


class FakeLocalStorage:
    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    def getItem(self, key: str):
        return self.items.get(key)

    def setItem(self, key: str, value: str) -> None:
        self.items[key] = value


def test_json_store_defaults_when_missing(tmp_path: Path) -> None:
    store = JsonScoreStore(tmp_path / "scores.json")
    assert store.load_best() == 0
    assert not store.tutorial_seen()


def test_json_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "scores.json"
    store = JsonScoreStore(path)
    store.save_best(4200)
    store.mark_tutorial_seen()
    reopened = JsonScoreStore(path)
    assert reopened.load_best() == 4200
    assert reopened.tutorial_seen()


def test_json_store_ignores_corrupt_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="tetrix.storage"):
        assert JsonScoreStore(path).load_best() == 0
    assert "unreadable" in caplog.text


def test_json_store_rejects_negative_best(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    path.write_text('{"%s": -5}' % BEST_KEY, encoding="utf-8")
    assert JsonScoreStore(path).load_best() == 0


def test_scores_path_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "custom.json"
    monkeypatch.setenv("TETRIX_SCORES_PATH", str(target))
    assert default_scores_path() == target
    assert JsonScoreStore().path == target


def test_local_storage_store() -> None:
    backend = FakeLocalStorage()
    store = LocalStorageStore(backend)
    assert store.load_best() == 0
    store.save_best(900)
    assert backend.items[BEST_KEY] == "900"
    assert store.load_best() == 900
    assert not store.tutorial_seen()
    store.mark_tutorial_seen()
    assert backend.items[TUTORIAL_KEY] == "1"
    assert store.tutorial_seen()


def test_local_storage_garbage_reads_as_zero() -> None:
    backend = FakeLocalStorage()
    backend.items[BEST_KEY] = "lots"
    assert LocalStorageStore(backend).load_best() == 0


class RefusingLocalStorage:
    def getItem(self, key: str):
        raise RuntimeError("SecurityError: storage disabled")

    def setItem(self, key: str, value: str) -> None:
        raise RuntimeError("QuotaExceededError")


def test_local_storage_errors_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    store = LocalStorageStore(RefusingLocalStorage())
    with caplog.at_level(logging.WARNING, logger="tetrix.storage"):
        assert store.load_best() == 0
        assert not store.tutorial_seen()
        store.save_best(500)
        store.mark_tutorial_seen()
    assert "Could not read tetrixapp_best" in caplog.text
    assert "Could not save tetrixapp_tutorial_seen" in caplog.text
    assert len(caplog.records) == 4
