"""Menu items and the ordering of items that match the typed text."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass(eq=False)
class Item:
    """One selectable line; ``out`` is set once it has been printed."""

    text: str
    out: bool = False


def _fold(value: str) -> str:
    return value.translate(_ASCII_FOLD)


def _key(value: str, case_insensitive: bool) -> str:
    """Return *value* folded to lower case when matching ignores case."""
    return _fold(value) if case_insensitive else value


def case_insensitive_find(s: str, sub: str) -> int | None:
    """Return the index of the first case-insensitive occurrence of *sub* in *s*.

    An empty *s* never matches, not even an empty *sub*.
    """
    if not s:
        return None
    index = _fold(s).find(_fold(sub))
    return None if index < 0 else index


def match_items(
    items: Iterable[Item], text: str, case_insensitive: bool = False
) -> list[Item]:
    """Return the items that contain every space-separated token of *text*.

    Exact matches come first, then items starting with the first token, then
    the remaining ones; each group keeps the input order.
    """
    tokens = [_key(token, case_insensitive) for token in text.split(" ") if token]
    folded_text = _key(text, case_insensitive)
    exact: list[Item] = []
    prefix: list[Item] = []
    substring: list[Item] = []
    for item in items:
        subject = _key(item.text, case_insensitive)
        if subject and not all(token in subject for token in tokens):
            continue
        if not subject and tokens:
            continue
        if not tokens or subject == folded_text:
            exact.append(item)
        elif subject.startswith(tokens[0]):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring