"""Command-line options of the menu program."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from .config import Config, Scheme, default_config

VERSION = "5.0"
VERSION_STRING = f"dynmenu-{VERSION}"
USAGE = (
    "usage: dynmenu [-bfiv] [-l lines] [-p prompt] [-fn font] [-m monitor]\n"
    "             [-h height]\n"
    "             [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]"
)
MIN_LINEHEIGHT = 8


class UsageError(ValueError):
    """Raised for an unknown option or an option missing its argument."""


@dataclass
class Options:
    """Settings collected from the command line."""

    config: Config = field(default_factory=default_config)
    fast: bool = False
    case_insensitive: bool = False
    monitor: int = -1
    embed: str | None = None
    show_version: bool = False


def _atoi(value: str) -> int:
    found = re.match(r"\s*([+-]?\d+)", value)
    return int(found.group(1)) if found else 0


def _set_lines(options: Options, value: str) -> None:
    options.config.lines = max(0, _atoi(value))


def _set_monitor(options: Options, value: str) -> None:
    options.monitor = _atoi(value)


def _set_prompt(options: Options, value: str) -> None:
    options.config.prompt = value


def _set_font(options: Options, value: str) -> None:
    options.config.fonts = [value, *options.config.fonts[1:]]


def _set_lineheight(options: Options, value: str) -> None:
    options.config.lineheight = max(_atoi(value), MIN_LINEHEIGHT)


def _set_embed(options: Options, value: str) -> None:
    options.embed = value


def _color_setter(scheme: Scheme, foreground: bool) -> Callable[[Options, str], None]:
    def setter(options: Options, value: str) -> None:
        fg, bg = options.config.colors[scheme]
        options.config.colors[scheme] = (value, bg) if foreground else (fg, value)

    return setter


_VALUED: dict[str, Callable[[Options, str], None]] = {
    "-l": _set_lines,
    "-m": _set_monitor,
    "-p": _set_prompt,
    "-fn": _set_font,
    "-h": _set_lineheight,
    "-nb": _color_setter(Scheme.NORM, foreground=False),
    "-nf": _color_setter(Scheme.NORM, foreground=True),
    "-sb": _color_setter(Scheme.SEL, foreground=False),
    "-sf": _color_setter(Scheme.SEL, foreground=True),
    "-w": _set_embed,
}


def parse_options(argv: list[str]) -> Options:
    """Parse the arguments (without the program name).

    ``-v`` stops parsing at once and sets ``show_version``.
    """
    options = Options()
    args = iter(argv)
    for arg in args:
        if arg == "-v":
            options.show_version = True
            return options
        if arg == "-b":
            options.config.topbar = False
            continue
        if arg == "-f":
            options.fast = True
            continue
        if arg == "-i":
            options.case_insensitive = True
            continue
        value = next(args, None)
        if value is None:
            raise UsageError(f"option {arg} requires an argument")
        setter = _VALUED.get(arg)
        if setter is None:
            raise UsageError(f"unknown option {arg}")
        setter(options, value)
    return options