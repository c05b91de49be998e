"""Async wrapper for the git status query."""

import asyncio
import contextlib
from pathlib import Path

import structlog

from powerprompt.git.models import RepoStatus
from powerprompt.git.parser import parse_status

logger = structlog.get_logger()

_DEFAULT_TIMEOUT = 2.0
STATUS_ARGS = ("status", "--porcelain=v2", "--ignore-submodules", "--branch")


class GitService:
    """Runs git in a working directory and turns its output into RepoStatus."""

    def __init__(self, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    async def status(self, cwd: Path) -> RepoStatus | None:
        """Return the parsed repository state, or None outside a worktree."""
        code, stdout, stderr = await self._run(*STATUS_ARGS, cwd=cwd)
        if code != 0:
            logger.debug(
                "git_status_unavailable",
                cwd=str(cwd),
                returncode=code,
                stderr=stderr.strip(),
            )
            return None
        return parse_status(stdout)

    async def _run(
        self, *args: str, cwd: Path, timeout: float | None = None
    ) -> tuple[int, str, str]:
        """Execute a git command. Returns (returncode, stdout, stderr)."""
        timeout = timeout if timeout is not None else self._timeout
        cmd = ("git", *args)
        logger.debug("git_exec", command=cmd, cwd=str(cwd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return 1, "", "git is not installed or not in PATH"
        except OSError as e:
            logger.error("git_exec_error", command=cmd, error=str(e))
            return 1, "", str(e)

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=timeout
            )
        except TimeoutError:
            logger.warning("git_exec_timeout", command=cmd, timeout=timeout)
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            return 1, "", f"Command timed out after {timeout}s"

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        return proc.returncode or 0, stdout, stderr
