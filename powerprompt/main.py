"""CLI entry point for powerprompt.

Usage from a shell prompt hook::

    PS1='$(powerprompt $?)'
"""

import asyncio
import sys

import structlog

from powerprompt.app import _configure_logging, build_prompt
from powerprompt.core.config import load_config, recover_config
from powerprompt.core.renderer import Renderer
from powerprompt.exceptions import ConfigError

logger = structlog.get_logger()


async def main(argv: list[str] | None = None) -> str:
    """Build the prompt text. Never raises; falls back to a bare prompt."""
    args = sys.argv[1:] if argv is None else argv
    exit_code = args[0] if args else None

    config_error: ConfigError | None = None
    try:
        config = load_config()
    except ConfigError as e:
        config_error = e
        config = recover_config(e)

    log_error: OSError | None = None
    try:
        _configure_logging(config)
    except OSError as e:
        log_error = e
        config = config.model_copy(update={"log_dir": None})
        _configure_logging(config)

    if config_error is not None:
        logger.warning(
            "config_invalid", fields=list(config_error.fields), error=str(config_error)
        )
    if log_error is not None:
        logger.warning("log_dir_unavailable", error=str(log_error))

    try:
        return await build_prompt(exit_code, config)
    except Exception:
        logger.exception("prompt_render_failed", exit_code=exit_code)
        return Renderer(config.style_options()).render_fallback()


def run() -> None:
    # Logging may not be set up here, so nothing is logged on this path
    try:
        output = asyncio.run(main())
    except Exception:
        output = Renderer().render_fallback()
    sys.stdout.write(output)
    sys.stdout.flush()
