"""Tests for process environment lookups."""

import os
from unittest.mock import patch

from powerprompt.core.environment import (
    Identity,
    current_cwd,
    current_hostname,
    current_identity,
    home_dir,
)


class TestCurrentIdentity:
    def test_matches_process_uid(self):
        identity = current_identity()
        assert identity.uid == os.getuid()
        assert identity.name

    def test_lookup_failure_gives_empty_identity(self):
        with patch("powerprompt.core.environment.pwd.getpwuid", side_effect=KeyError(1)):
            assert current_identity() == Identity()


class TestCurrentHostname:
    def test_strips_domain(self):
        with patch(
            "powerprompt.core.environment.socket.gethostname",
            return_value="box.example.com",
        ):
            assert current_hostname() == "box"

    def test_failure_returns_none(self):
        with patch(
            "powerprompt.core.environment.socket.gethostname",
            side_effect=OSError("boom"),
        ):
            assert current_hostname() is None


class TestCurrentCwd:
    def test_returns_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert current_cwd() == str(tmp_path)

    def test_removed_directory(self):
        with patch(
            "powerprompt.core.environment.os.getcwd",
            side_effect=FileNotFoundError(),
        ):
            assert current_cwd() is None


class TestHomeDir:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/alice")
        assert home_dir() == "/home/alice"

    def test_empty_is_none(self, monkeypatch):
        monkeypatch.setenv("HOME", "")
        assert home_dir() is None

    def test_unset_is_none(self, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        assert home_dir() is None
