"""Draw segment chains as ANSI-styled powerline text."""

from collections.abc import Sequence

from powerprompt.core.config import StyleOptions
from powerprompt.core.palette import (
    EMPHASIS_CODES,
    background_code,
    foreground_code,
    transition_foreground,
)
from powerprompt.core.segments import CHAR_RIGHT_ARROW, Color, PromptLayout, Segment

ESC = "\033"
CLEAR_LINE = f"{ESC}[2K"
RESET = f"{ESC}[0m"
CLEAR_TO_END = f"{ESC}[K"


class Renderer:
    """Writes segments with the escape conventions of one shell."""

    def __init__(self, options: StyleOptions | None = None) -> None:
        self.options = options or StyleOptions()

    def control(self, sequence: str) -> str:
        """Wrap a non-printing sequence so the line editor skips it when measuring."""
        if self.options.shell == "bash":
            return f"\001{sequence}\002"
        if self.options.shell == "zsh":
            return f"%{{{sequence}%}}"
        return sequence

    def escape(self, text: str) -> str:
        """Escape text that the shell would otherwise expand inside the prompt."""
        if self.options.shell == "zsh":
            return text.replace("%", "%%")
        return text

    def sgr(self, attribute: int, foreground: int, background: int) -> str:
        if not self.options.color:
            return ""
        return self.control(f"{ESC}[{attribute};{foreground};{background}m")

    def segment(self, segment: Segment) -> str:
        style = self.sgr(
            EMPHASIS_CODES[segment.emphasis],
            foreground_code(segment.foreground),
            background_code(segment.background),
        )
        return f"{style} {self.escape(segment.text)} "

    def transition(self, previous: Color, current: Color) -> str:
        style = self.sgr(0, transition_foreground(previous), background_code(current))
        return f"{style}{CHAR_RIGHT_ARROW}"

    def render(self, segments: Sequence[Segment]) -> str:
        """Render a chain, closing it with an arrow into the default background."""
        out: list[str] = []
        previous: Color | None = None

        for segment in segments:
            if previous is not None:
                out.append(self.transition(previous, segment.background))
            out.append(self.segment(segment))
            previous = segment.background

        if previous is not None:
            out.append(self.transition(previous, "default"))

        return "".join(out)

    def render_prompt(self, layout: PromptLayout) -> str:
        """Full prompt output including the line control framing."""
        out = ["\n", self.control(CLEAR_LINE), self.render(layout.main)]
        if layout.second_line:
            out.append("\n")
            out.append(self.render(layout.second_line))
        out.append(self.control(RESET))
        out.append(" ")
        out.append(self.control(CLEAR_TO_END))
        return "".join(out)

    def render_fallback(self) -> str:
        """Minimal prompt used when building the real one failed."""
        return "".join(
            [
                "\n",
                self.control(CLEAR_LINE),
                self.control(RESET),
                "$ ",
                self.control(CLEAR_TO_END),
            ]
        )
