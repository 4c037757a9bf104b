"""Shared pytest fixtures and test helpers for acylconf tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Generator

import pytest

from acylconf.infrastructure.secrets import StaticSecretFetcher

OPAQUE_SECRET = json.dumps({"data": {"k": "v"}, "type": "opaque"}).encode()


class FailingFetcher:
    """Fetcher whose every lookup raises *exc*."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls: list[str] = []

    def get(self, secret_id: str) -> bytes:
        self.calls.append(secret_id)
        raise self.exc


class RecordingFetcher(StaticSecretFetcher):
    """Static fetcher that records lookup order."""

    def __init__(self, secrets: dict[str, bytes]) -> None:
        super().__init__(secrets)
        self.calls: list[str] = []

    def get(self, secret_id: str) -> bytes:
        self.calls.append(secret_id)
        return super().get(secret_id)


@pytest.fixture
def fetcher() -> RecordingFetcher:
    """Fetcher holding an opaque secret under ``secret-id``."""
    return RecordingFetcher({"secret-id": OPAQUE_SECRET})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient ``ACYL_*`` variables out of settings tests."""
    for name in list(os.environ):
        if name.startswith("ACYL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and package logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("acylconf")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
