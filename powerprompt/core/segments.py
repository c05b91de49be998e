"""Segment model and the glyphs drawn inside segments."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Color = Literal[
    "default",
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
]

Emphasis = Literal["none", "bold", "underline"]

CHAR_RIGHT_ARROW = "\ue0b0"
CHAR_PLUS_MINUS = "\u00b1"
CHAR_GIT_BRANCH = "\ue0a0"
CHAR_GIT_DETACHED = "\u27a6"
CHAR_FAILURE = "\u2718"
CHAR_SUCCESS = "\u2714"
CHAR_LIGHTNING = "\u26a1"
CHAR_UP_ARROW = "\u2191"
CHAR_DOWN_ARROW = "\u2193"


class Segment(BaseModel):
    """One colored block of the prompt chain."""

    model_config = ConfigDict(frozen=True)

    foreground: Color
    background: Color
    emphasis: Emphasis = "bold"
    text: str = Field(min_length=1)


class PromptLayout(BaseModel):
    """Segments to draw on the main prompt line and on an optional second line."""

    model_config = ConfigDict(frozen=True)

    main: tuple[Segment, ...] = ()
    second_line: tuple[Segment, ...] = ()
