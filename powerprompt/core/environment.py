"""Lookups of the process environment the prompt describes."""

import os
import pwd
import socket

import structlog
from pydantic import BaseModel, ConfigDict

from powerprompt.git.models import RepoStatus

logger = structlog.get_logger()


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    uid: int | None = None

    @property
    def is_root(self) -> bool:
        return self.uid == 0


class PromptFacts(BaseModel):
    """Everything gathered about the shell session before composing segments."""

    model_config = ConfigDict(frozen=True)

    exit_code: str | None = None
    user: Identity = Identity()
    hostname: str | None = None
    # None when the working directory could not be determined
    cwd: str | None = None
    home_dir: str | None = None
    repo_status: RepoStatus | None = None


def current_identity() -> Identity:
    """Return the effective user, or an empty identity if the lookup fails."""
    uid = os.getuid()
    try:
        entry = pwd.getpwuid(uid)
    except KeyError:
        logger.warning("user_lookup_failed", uid=uid)
        return Identity()
    return Identity(name=entry.pw_name, uid=uid)


def current_hostname() -> str | None:
    """Short hostname, without the domain part."""
    try:
        hostname = socket.gethostname()
    except OSError as e:
        logger.warning("hostname_lookup_failed", error=str(e))
        return None
    return hostname.split(".")[0] or None


def current_cwd() -> str | None:
    # Raises when the directory was removed out from under the shell
    try:
        return os.getcwd()
    except OSError as e:
        logger.warning("cwd_lookup_failed", error=str(e))
        return None


def home_dir() -> str | None:
    return os.environ.get("HOME") or None
