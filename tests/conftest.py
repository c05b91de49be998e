"""Shared fixtures for testing."""

from __future__ import annotations

import logging
import os

import pytest
import structlog

from powerprompt.core.environment import Identity, PromptFacts
from powerprompt.git.models import RepoStatus

_PROMPT_ENV_KEYS = ("DEFAULT_USER", "PS1_TWO_LINE")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Prevent the shell env from leaking prompt settings into tests."""
    for key in list(os.environ):
        if key.startswith("POWERPROMPT_") or key in _PROMPT_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo handler and structlog changes made by _configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def alice():
    return Identity(name="alice", uid=1000)


@pytest.fixture
def root_user():
    return Identity(name="root", uid=0)


@pytest.fixture
def make_facts(alice):
    def _make(**overrides) -> PromptFacts:
        values = {
            "exit_code": "0",
            "user": alice,
            "cwd": "/home/alice/proj",
            "home_dir": "/home/alice",
        }
        values.update(overrides)
        return PromptFacts(**values)

    return _make


@pytest.fixture
def clean_repo():
    return RepoStatus(head="main")
