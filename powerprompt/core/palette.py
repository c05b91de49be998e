"""ANSI SGR codes for every palette color.

Each color carries its own foreground and background code, so the arrow
between two blocks looks up the foreground matching the previous block's
background instead of deriving it from the number.
"""

from typing import NamedTuple

from powerprompt.core.segments import Color, Emphasis


class ColorCodes(NamedTuple):
    foreground: int
    background: int


PALETTE: dict[Color, ColorCodes] = {
    "default": ColorCodes(39, 49),
    "black": ColorCodes(30, 40),
    "red": ColorCodes(31, 41),
    "green": ColorCodes(32, 42),
    "yellow": ColorCodes(33, 43),
    "blue": ColorCodes(34, 44),
    "magenta": ColorCodes(35, 45),
    "cyan": ColorCodes(36, 46),
    "white": ColorCodes(37, 47),
    "bright_black": ColorCodes(90, 100),
    "bright_red": ColorCodes(91, 101),
    "bright_green": ColorCodes(92, 102),
    "bright_yellow": ColorCodes(93, 103),
    "bright_blue": ColorCodes(94, 104),
    "bright_magenta": ColorCodes(95, 105),
    "bright_cyan": ColorCodes(96, 106),
    "bright_white": ColorCodes(97, 107),
}

EMPHASIS_CODES: dict[Emphasis, int] = {
    "none": 0,
    "bold": 1,
    "underline": 4,
}


def foreground_code(color: Color) -> int:
    return PALETTE[color].foreground


def background_code(color: Color) -> int:
    return PALETTE[color].background


def transition_foreground(background: Color) -> int:
    """Foreground code that draws an arrow in the same shade as *background*."""
    return PALETTE[background].foreground
