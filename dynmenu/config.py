"""Built-in appearance and behaviour settings for the menu."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Scheme(enum.IntEnum):
    """Colour schemes used when drawing."""

    NORM = 0
    SEL = 1
    OUT = 2


ColorPair = tuple[str, str]


def _default_colors() -> dict[Scheme, ColorPair]:
    return {
        Scheme.NORM: ("#FDF0D5", "#140000"),
        Scheme.SEL: ("#140000", "#FDF0D5"),
        Scheme.OUT: ("#000000", "#00ffff"),
    }


def _purple_colors() -> dict[Scheme, ColorPair]:
    return {
        Scheme.NORM: ("#ffffff", "#090611"),
        Scheme.SEL: ("#090611", "#ffffff"),
        Scheme.OUT: ("#000000", "#00ffff"),
    }


@dataclass
class Config:
    """Menu settings; command-line options override them.

    ``colors`` maps each scheme to a ``(foreground, background)`` pair.
    """

    topbar: bool = True
    fonts: list[str] = field(default_factory=lambda: ["Fira Code:size=12"])
    prompt: str | None = None
    colors: dict[Scheme, ColorPair] = field(default_factory=_default_colors)
    lines: int = 0
    lineheight: int = 48
    worddelimiters: str = " "

    def foreground(self, scheme: Scheme) -> str:
        """Foreground colour of *scheme*."""
        return self.colors[scheme][0]

    def background(self, scheme: Scheme) -> str:
        """Background colour of *scheme*."""
        return self.colors[scheme][1]


def default_config() -> Config:
    """Return a fresh copy of the default settings."""
    return Config()


def purple_config() -> Config:
    """Return the default settings with the purple colour scheme."""
    return Config(colors=_purple_colors())