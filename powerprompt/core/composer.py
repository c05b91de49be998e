"""Turn gathered session facts into the ordered prompt segments.

The composer is pure: every input is collected beforehand, and the result
is a PromptLayout that the renderer draws.
"""

from powerprompt.core.config import ComposerOptions, LayoutMode
from powerprompt.core.environment import Identity, PromptFacts
from powerprompt.core.segments import (
    CHAR_DOWN_ARROW,
    CHAR_FAILURE,
    CHAR_GIT_BRANCH,
    CHAR_GIT_DETACHED,
    CHAR_LIGHTNING,
    CHAR_PLUS_MINUS,
    CHAR_SUCCESS,
    CHAR_UP_ARROW,
    Color,
    PromptLayout,
    Segment,
)
from powerprompt.git.models import RepoStatus

CWD_ERROR = "!!ERR"
SUCCESS_CODE = "0"


def _block(foreground: Color, background: Color, text: str) -> Segment:
    return Segment(foreground=foreground, background=background, text=text)


def exit_code_segment(code: str) -> Segment:
    if code == SUCCESS_CODE:
        return _block("bright_black", "bright_green", CHAR_SUCCESS)
    return _block("bright_black", "bright_red", f"{CHAR_FAILURE} {code}")


def should_show_user(user: Identity, options: ComposerOptions) -> bool:
    if options.show_user_unconditionally or options.default_user is None:
        return True
    return user.name != options.default_user


def user_segment(
    user: Identity, hostname: str | None, options: ComposerOptions
) -> Segment | None:
    text = user.name
    if options.append_hostname_to_user and hostname and text:
        text = f"{text}@{hostname}"
    if user.is_root:
        text = f"{CHAR_LIGHTNING} {text}"
    if not text:
        return None
    return _block("bright_yellow", "black", text)


def abbreviate_home(cwd: str, home: str | None) -> str:
    """Replace a leading home directory with ``~``."""
    if not home:
        return cwd
    home = home.rstrip("/") or "/"
    if home == "/":
        return cwd
    if cwd == home:
        return "~"
    if cwd.startswith(home + "/"):
        return "~" + cwd[len(home) :]
    return cwd


def cwd_segment(cwd: str | None, home: str | None) -> Segment:
    text = CWD_ERROR if cwd is None else abbreviate_home(cwd, home)
    return _block("bright_black", "bright_blue", text or CWD_ERROR)


def divergence_text(status: RepoStatus) -> str:
    """Format ahead/behind counts, e.g. ``↑2 ↓1``; empty when in sync."""
    if not status.has_upstream:
        return ""
    parts: list[str] = []
    if status.ahead:
        parts.append(f"{CHAR_UP_ARROW}{status.ahead}")
    if status.behind:
        parts.append(f"{CHAR_DOWN_ARROW}{status.behind}")
    return " ".join(parts)


def git_segment(status: RepoStatus) -> Segment:
    glyph = CHAR_GIT_DETACHED if status.detached else CHAR_GIT_BRANCH
    text = f"{glyph} {status.head}"
    background: Color = "bright_green"

    if status.dirty:
        text += CHAR_PLUS_MINUS
        background = "bright_yellow"

    divergence = divergence_text(status)
    if divergence:
        text += f" {divergence}"

    return _block("bright_black", background, text)


def compose_segments(facts: PromptFacts, options: ComposerOptions) -> list[Segment]:
    """Build the full ordered segment list: exit code, user, cwd, git."""
    segments: list[Segment] = []

    if facts.exit_code is not None:
        segments.append(exit_code_segment(facts.exit_code))

    if should_show_user(facts.user, options):
        user = user_segment(facts.user, facts.hostname, options)
        if user is not None:
            segments.append(user)

    segments.append(cwd_segment(facts.cwd, facts.home_dir))

    if facts.repo_status is not None:
        segments.append(git_segment(facts.repo_status))

    return segments


def compose(facts: PromptFacts, options: ComposerOptions) -> PromptLayout:
    """Compose segments and split them across lines per the layout mode."""
    segments = compose_segments(facts, options)

    if options.layout_mode is LayoutMode.SINGLE_LINE or facts.exit_code is None:
        return PromptLayout(main=tuple(segments))

    exit_block, *rest = segments
    if facts.user.is_root and facts.exit_code == SUCCESS_CODE:
        exit_block = exit_block.model_copy(update={"background": "bright_yellow"})
    return PromptLayout(main=tuple(rest), second_line=(exit_block,))
