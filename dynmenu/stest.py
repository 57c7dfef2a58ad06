"""Filter a list of files by properties, like test(1) applied to each."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass, field
from typing import Iterable, TextIO

_SIMPLE_FLAGS = "abcdefghlpqrsuvwx"
USAGE = "usage: stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"


class StestUsageError(ValueError):
    """Raised for an unknown option or a missing option argument."""


@dataclass
class StestOptions:
    """Selected tests.

    ``newer_than`` and ``older_than`` hold modification times in whole seconds
    of the reference files given to ``-n`` and ``-o``.
    """

    flags: frozenset[str] = field(default_factory=frozenset)
    newer_than: int | None = None
    older_than: int | None = None

    def has(self, flag: str) -> bool:
        return flag in self.flags


def parse_args(argv: list[str]) -> tuple[StestOptions, list[str]]:
    """Parse command-line arguments (without the program name).

    Returns the options and the remaining file operands.
    """
    flags: set[str] = set()
    times: dict[str, int | None] = {"n": None, "o": None}
    args = list(argv)
    while args and args[0].startswith("-") and len(args[0]) > 1:
        arg = args.pop(0)
        if arg == "--":
            break
        cluster = arg[1:]
        for pos, flag in enumerate(cluster):
            if flag in "no":
                rest = cluster[pos + 1:]
                if rest:
                    reference = rest
                elif args:
                    reference = args.pop(0)
                else:
                    raise StestUsageError(f"option -{flag} requires an argument")
                try:
                    times[flag] = int(os.stat(reference).st_mtime)
                except OSError as exc:
                    times[flag] = None
                    sys.stderr.write(f"{reference}: {exc.strerror}\n")
                break
            if flag not in _SIMPLE_FLAGS:
                raise StestUsageError(f"unknown option -{flag}")
            flags.add(flag)
    options = StestOptions(frozenset(flags), times["n"], times["o"])
    return options, args


def _access(path: str, mode: int) -> bool:
    return os.access(path, mode)


def _is_symlink(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


def _matches(path: str, name: str, options: StestOptions) -> bool:
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    mode = st.st_mode
    mtime = int(st.st_mtime)
    has = options.has
    checks = (
        lambda: has("a") or not name.startswith("."),
        lambda: not has("b") or stat.S_ISBLK(mode),
        lambda: not has("c") or stat.S_ISCHR(mode),
        lambda: not has("d") or stat.S_ISDIR(mode),
        lambda: not has("e") or _access(path, os.F_OK),
        lambda: not has("f") or stat.S_ISREG(mode),
        lambda: not has("g") or bool(mode & stat.S_ISGID),
        lambda: not has("h") or _is_symlink(path),
        lambda: options.newer_than is None or mtime > options.newer_than,
        lambda: options.older_than is None or mtime < options.older_than,
        lambda: not has("p") or stat.S_ISFIFO(mode),
        lambda: not has("r") or _access(path, os.R_OK),
        lambda: not has("s") or st.st_size > 0,
        lambda: not has("u") or bool(mode & stat.S_ISUID),
        lambda: not has("w") or _access(path, os.W_OK),
        lambda: not has("x") or _access(path, os.X_OK),
    )
    return all(check() for check in checks)


def passes(path: str, name: str, options: StestOptions) -> bool:
    """Whether *path* satisfies the selected tests (inverted by ``-v``)."""
    return _matches(path, name, options) != options.has("v")


def _candidates(
    options: StestOptions, paths: list[str], stdin: TextIO
) -> Iterable[tuple[str, str]]:
    if not paths:
        for line in stdin:
            if not line:
                break
            line = line.removesuffix("\n")
            yield line, line
        return
    for operand in paths:
        if options.has("l"):
            try:
                entries = os.listdir(operand)
            except OSError:
                pass
            else:
                for entry in [".", "..", *entries]:
                    yield f"{operand}/{entry}", entry
                continue
        yield operand, operand


def run(options: StestOptions, paths: list[str], stdin: TextIO, stdout: TextIO) -> int:
    """Print the names that pass; return 0 if any did, else 1."""
    found = False
    for path, name in _candidates(options, paths, stdin):
        if passes(path, name, options):
            if options.has("q"):
                return 0
            found = True
            stdout.write(name + "\n")
    return 0 if found else 1


def main(argv: list[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options, paths = parse_args(argv)
    except StestUsageError:
        sys.stderr.write(USAGE + "\n")
        return 2
    return run(options, paths, sys.stdin, sys.stdout)