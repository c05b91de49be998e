"""Tests for powerprompt.app — pipeline wiring and logging setup."""

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import structlog

from powerprompt.app import _configure_logging, build_prompt, gather_facts
from powerprompt.core.config import PromptConfig
from powerprompt.core.environment import Identity
from powerprompt.core.segments import (
    CHAR_FAILURE,
    CHAR_GIT_BRANCH,
    CHAR_GIT_DETACHED,
    CHAR_PLUS_MINUS,
    CHAR_RIGHT_ARROW,
    CHAR_SUCCESS,
    CHAR_UP_ARROW,
)
from powerprompt.git.models import RepoStatus
from powerprompt.git.service import GitService

ALICE = Identity(name="alice", uid=1000)


@pytest.fixture
def session(monkeypatch, tmp_path):
    """Pin cwd, HOME and the current user."""
    home = tmp_path / "alice"
    proj = home / "proj"
    proj.mkdir(parents=True)
    monkeypatch.chdir(proj)
    monkeypatch.setenv("HOME", str(home))
    with patch("powerprompt.app.current_identity", return_value=ALICE):
        yield proj


def _git(status: RepoStatus | None) -> GitService:
    git = MagicMock(spec=GitService)
    git.status = AsyncMock(return_value=status)
    return git


class TestGatherFacts:
    async def test_collects_everything(self, session):
        status = RepoStatus(head="main")
        git = _git(status)
        facts = await gather_facts("0", PromptConfig(), git)
        assert facts.exit_code == "0"
        assert facts.user == ALICE
        assert facts.cwd == str(session)
        assert facts.repo_status == status
        assert facts.hostname is None
        git.status.assert_awaited_once()

    async def test_hostname_only_when_enabled(self, session):
        with patch("powerprompt.app.current_hostname", return_value="box"):
            facts = await gather_facts(
                None, PromptConfig(append_hostname_to_user=True), _git(None)
            )
        assert facts.hostname == "box"

    async def test_no_git_query_without_cwd(self, session):
        git = _git(None)
        with patch("powerprompt.app.current_cwd", return_value=None):
            facts = await gather_facts(None, PromptConfig(), git)
        assert facts.cwd is None
        git.status.assert_not_awaited()


class TestBuildPrompt:
    async def test_success_outside_repo(self, session):
        config = PromptConfig(color=False, shell="none")
        out = await build_prompt("0", config, git=_git(None))
        assert f" {CHAR_SUCCESS} {CHAR_RIGHT_ARROW} alice " in out
        assert " ~/proj " in out
        assert CHAR_GIT_BRANCH not in out
        assert out.count(CHAR_RIGHT_ARROW) == 3

    async def test_failure_in_clean_repo(self, session):
        config = PromptConfig(color=False, shell="none")
        out = await build_prompt("1", config, git=_git(RepoStatus(head="main")))
        assert f" {CHAR_FAILURE} 1 " in out
        assert f" {CHAR_GIT_BRANCH} main {CHAR_RIGHT_ARROW}" in out

    async def test_clean_repo_background(self, session):
        out = await build_prompt("1", PromptConfig(), git=_git(RepoStatus(head="main")))
        assert f"\001\033[1;90;102m\002 {CHAR_GIT_BRANCH} main " in out

    async def test_dirty_detached_ahead(self, session):
        status = RepoStatus(
            head="abc123de", detached=True, dirty=True, ahead=2, behind=0
        )
        out = await build_prompt("0", PromptConfig(), git=_git(status))
        expected = f"{CHAR_GIT_DETACHED} abc123de{CHAR_PLUS_MINUS} {CHAR_UP_ARROW}2"
        assert f"\001\033[1;90;103m\002 {expected} " in out

    async def test_default_user_hidden(self, session):
        config = PromptConfig(default_user="alice", color=False, shell="none")
        out = await build_prompt("0", config, git=_git(None))
        assert "alice" not in out

    async def test_two_line_layout(self, session):
        config = PromptConfig(two_line="1", color=False, shell="none")
        out = await build_prompt("0", config, git=_git(None))
        first, second = out.strip("\n").split("\n")
        assert CHAR_SUCCESS not in first
        assert second.startswith(f" {CHAR_SUCCESS} {CHAR_RIGHT_ARROW}")

    async def test_builds_git_service_with_configured_timeout(self, session):
        config = PromptConfig(git_timeout_seconds=0.5)
        with patch("powerprompt.app.GitService") as service_cls:
            service_cls.return_value = _git(None)
            await build_prompt(None, config)
        service_cls.assert_called_once_with(timeout=0.5)


class TestConfigureLogging:
    def test_silent_by_default(self):
        _configure_logging(PromptConfig())
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_console_handler(self):
        _configure_logging(PromptConfig(log_console=True))
        handlers = logging.getLogger().handlers
        assert any(type(h) is logging.StreamHandler for h in handlers)

    def test_level_applied(self):
        _configure_logging(PromptConfig(log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    def test_file_handler_writes_json(self, tmp_path):
        log_dir = tmp_path / "logs"
        _configure_logging(PromptConfig(log_dir=log_dir, log_level="INFO"))
        structlog.get_logger().info("test_event", answer=42)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (log_dir / "powerprompt.log").read_text().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "test_event"
        assert record["answer"] == 42
        assert record["level"] == "info"
