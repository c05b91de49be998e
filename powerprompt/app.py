"""Bootstrap: wires the prompt pipeline together."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import structlog

from powerprompt.core.composer import compose
from powerprompt.core.config import PromptConfig
from powerprompt.core.environment import (
    PromptFacts,
    current_cwd,
    current_hostname,
    current_identity,
    home_dir,
)
from powerprompt.core.renderer import Renderer
from powerprompt.git.service import GitService

logger = structlog.get_logger()


def _configure_logging(config: PromptConfig) -> None:
    """Set up structlog with optional stderr output and rotating JSON file handler.

    Nothing is written by default since stderr lands on the terminal next
    to the prompt.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.handlers.clear()

    if config.log_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=False),
            )
        )
        root_logger.addHandler(console_handler)

    if config.log_dir is not None:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.log_dir / "powerprompt.log",
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
        )
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
            )
        )
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def gather_facts(
    exit_code: str | None, config: PromptConfig, git: GitService
) -> PromptFacts:
    """Collect user, cwd and repository state for one prompt render."""
    cwd = current_cwd()
    repo_status = await git.status(Path(cwd)) if cwd is not None else None

    return PromptFacts(
        exit_code=exit_code,
        user=current_identity(),
        hostname=current_hostname() if config.append_hostname_to_user else None,
        cwd=cwd,
        home_dir=home_dir(),
        repo_status=repo_status,
    )


async def build_prompt(
    exit_code: str | None,
    config: PromptConfig,
    git: GitService | None = None,
) -> str:
    """Gather, compose and render the prompt for the current directory."""
    if git is None:
        git = GitService(timeout=config.git_timeout_seconds)

    facts = await gather_facts(exit_code, config, git)
    layout = compose(facts, config.composer_options())

    logger.debug(
        "prompt_composed",
        segments=len(layout.main) + len(layout.second_line),
        layout_mode=config.layout_mode.value,
        in_repo=facts.repo_status is not None,
    )
    return Renderer(config.style_options()).render_prompt(layout)
