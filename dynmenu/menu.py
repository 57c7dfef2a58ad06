"""Editing and selection state of the menu, driven by key presses."""

from __future__ import annotations

import enum
from typing import Callable, Iterable

from .config import Config
from .matching import Item, match_items

MAX_TEXT_BYTES = 8191

NAMED_KEYS = frozenset(
    {
        "Return",
        "KP_Enter",
        "Escape",
        "Home",
        "End",
        "Left",
        "Right",
        "Up",
        "Down",
        "Next",
        "Prior",
        "Tab",
        "BackSpace",
        "Delete",
    }
)

_CTRL_KEYS = {
    "a": "Home",
    "b": "Left",
    "c": "Escape",
    "d": "Delete",
    "e": "End",
    "f": "Right",
    "g": "Escape",
    "h": "BackSpace",
    "i": "Tab",
    "n": "Down",
    "p": "Up",
}

_ALT_KEYS = {
    "g": "Home",
    "G": "End",
    "h": "Up",
    "j": "Next",
    "k": "Prior",
    "l": "Down",
}


class Action(enum.Enum):
    """What the caller has to do after a key press."""

    NONE = "none"
    REDRAW = "redraw"
    PASTE_PRIMARY = "paste-primary"
    PASTE_CLIPBOARD = "paste-clipboard"
    OUTPUT = "output"
    SELECT = "select"
    CANCEL = "cancel"


def _is_control(char: str) -> bool:
    code = ord(char)
    return code < 32 or code == 127


class Menu:
    """Input text, matching items and the visible page of a menu.

    ``measure`` returns the drawn width of a string including padding.
    Geometry attributes (``width``, ``bar_height``, ``prompt_width``,
    ``input_width``) may be changed by the caller, followed by ``match()``.
    Keys are either names from ``NAMED_KEYS`` or the text a key produces.
    After ``OUTPUT`` or ``SELECT`` the text to print is in ``output``.
    """

    def __init__(
        self,
        items: Iterable[Item | str],
        config: Config,
        measure: Callable[[str], int],
    ) -> None:
        self.items = [i if isinstance(i, Item) else Item(i) for i in items]
        self.config = config
        self.measure = measure
        self.lines = max(0, min(config.lines, len(self.items)))
        self.bar_height = config.lineheight
        self.width = 0
        self.prompt_width = 0
        self.input_width = max((measure(i.text) for i in self.items), default=0)
        self.case_insensitive = False
        self.text = ""
        self.cursor = 0
        self.output: str | None = None
        self.matches: list[Item] = []
        self.curr: int | None = None
        self.sel: int | None = None
        self.next_page: int | None = None
        self.prev_page: int | None = None
        self._handlers: dict[str, Callable[[], Action]] = {
            "Delete": self._key_delete,
            "BackSpace": self._key_backspace,
            "End": self._key_end,
            "Escape": self._key_escape,
            "Home": self._key_home,
            "Left": self._key_left,
            "Up": self._key_up,
            "Next": self._key_next,
            "Prior": self._key_prior,
            "Right": self._key_right,
            "Down": self._key_down,
            "Tab": self._key_tab,
        }
        self.match()

    @property
    def selected(self) -> Item | None:
        """The highlighted item, if any."""
        return None if self.sel is None else self.matches[self.sel]

    def match(self) -> None:
        """Recompute the matches for the current text and reset the selection."""
        self.matches = match_items(self.items, self.text, self.case_insensitive)
        self.curr = self.sel = 0 if self.matches else None
        self.calc_offsets()

    def _item_extent(self, item: Item, available: int) -> int:
        if self.lines > 0:
            return self.bar_height
        return min(self.measure(item.text), available)

    def calc_offsets(self) -> None:
        """Find where the next and the previous page begin."""
        if self.curr is None:
            self.next_page = self.prev_page = None
            return
        if self.lines > 0:
            available = self.lines * self.bar_height
        else:
            available = self.width - (
                self.prompt_width
                + self.input_width
                + self.measure("<")
                + self.measure(">")
            )
        used = 0
        nxt = self.curr
        while nxt < len(self.matches):
            used += self._item_extent(self.matches[nxt], available)
            if used > available:
                break
            nxt += 1
        self.next_page = nxt if nxt < len(self.matches) else None
        used = 0
        prv = self.curr
        while prv > 0:
            used += self._item_extent(self.matches[prv - 1], available)
            if used > available:
                break
            prv -= 1
        self.prev_page = prv

    def insert_text(self, s: str) -> None:
        """Insert *s* at the cursor unless the text would grow too long."""
        if len(self.text.encode()) + len(s.encode()) > MAX_TEXT_BYTES:
            return
        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)
        self.match()

    def _delete_back_to(self, position: int) -> None:
        self.text = self.text[:position] + self.text[self.cursor :]
        self.cursor = position
        self.match()

    def _word_start(self) -> int:
        delimiters = self.config.worddelimiters
        position = self.cursor
        while position > 0 and self.text[position - 1] in delimiters:
            position -= 1
        while position > 0 and self.text[position - 1] not in delimiters:
            position -= 1
        return position

    def move_word_edge(self, direction: int) -> None:
        """Move the cursor to the start (<0) or end (>0) of a word."""
        if direction < 0:
            self.cursor = self._word_start()
            return
        delimiters = self.config.worddelimiters
        end = len(self.text)
        while self.cursor < end and self.text[self.cursor] in delimiters:
            self.cursor += 1
        while self.cursor < end and self.text[self.cursor] not in delimiters:
            self.cursor += 1

    def visible_items(self) -> list[Item]:
        """The matches on the current page."""
        if self.curr is None:
            return []
        return self.matches[self.curr : self.next_page]

    def handle_key(
        self, key: str, ctrl: bool = False, alt: bool = False, shift: bool = False
    ) -> Action:
        """Apply one key press and report what the caller must do."""
        if ctrl:
            if key in _CTRL_KEYS:
                key = _CTRL_KEYS[key]
            elif key in ("j", "J", "m", "M"):
                key, ctrl = "Return", False
            elif key == "k":
                self.text = self.text[: self.cursor]
                self.match()
                return Action.REDRAW
            elif key == "u":
                self._delete_back_to(0)
                return Action.REDRAW
            elif key == "w":
                start = self._word_start()
                if start != self.cursor:
                    self._delete_back_to(start)
                return Action.REDRAW
            elif key in ("y", "Y"):
                return Action.PASTE_CLIPBOARD if shift else Action.PASTE_PRIMARY
            elif key in ("Left", "Right"):
                self.move_word_edge(-1 if key == "Left" else 1)
                return Action.REDRAW
            elif key == "[":
                return Action.CANCEL
            elif key not in ("Return", "KP_Enter"):
                return Action.NONE
        elif alt:
            if key in ("b", "f"):
                self.move_word_edge(-1 if key == "b" else 1)
                return Action.REDRAW
            if key not in _ALT_KEYS:
                return Action.NONE
            key = _ALT_KEYS[key]

        if key in ("Return", "KP_Enter"):
            return self._accept(ctrl, shift)
        handler = self._handlers.get(key)
        if handler is not None:
            return handler()
        if key and not _is_control(key[0]):
            self.insert_text(key)
        return Action.REDRAW

    def _accept(self, ctrl: bool, shift: bool) -> Action:
        item = self.selected
        self.output = item.text if item is not None and not shift else self.text
        if not ctrl:
            return Action.SELECT
        if item is not None:
            item.out = True
        return Action.OUTPUT

    def _key_delete(self) -> Action:
        if self.cursor >= len(self.text):
            return Action.NONE
        self.cursor += 1
        return self._key_backspace()

    def _key_backspace(self) -> Action:
        if self.cursor == 0:
            return Action.NONE
        self._delete_back_to(self.cursor - 1)
        return Action.REDRAW

    def _key_end(self) -> Action:
        if self.cursor < len(self.text):
            self.cursor = len(self.text)
            return Action.REDRAW
        last = len(self.matches) - 1 if self.matches else None
        if self.next_page is not None and last is not None:
            self.curr = last
            self.calc_offsets()
            self.curr = self.prev_page
            self.calc_offsets()
            while self.next_page is not None and self.curr + 1 < len(self.matches):
                self.curr += 1
                self.calc_offsets()
        self.sel = last
        return Action.REDRAW

    def _key_escape(self) -> Action:
        return Action.CANCEL

    def _key_home(self) -> Action:
        first = 0 if self.matches else None
        if self.sel == first:
            self.cursor = 0
            return Action.REDRAW
        self.sel = self.curr = first
        self.calc_offsets()
        return Action.REDRAW

    def _key_left(self) -> Action:
        if self.cursor > 0 and (not self.sel or self.lines > 0):
            self.cursor -= 1
            return Action.REDRAW
        if self.lines > 0:
            return Action.NONE
        return self._key_up()

    def _key_up(self) -> Action:
        if self.sel:
            self.sel -= 1
            if self.sel + 1 == self.curr:
                self.curr = self.prev_page
                self.calc_offsets()
        return Action.REDRAW

    def _key_next(self) -> Action:
        if self.next_page is None:
            return Action.NONE
        self.sel = self.curr = self.next_page
        self.calc_offsets()
        return Action.REDRAW

    def _key_prior(self) -> Action:
        if self.prev_page is None:
            return Action.NONE
        self.sel = self.curr = self.prev_page
        self.calc_offsets()
        return Action.REDRAW

    def _key_right(self) -> Action:
        if self.cursor < len(self.text):
            self.cursor += 1
            return Action.REDRAW
        if self.lines > 0:
            return Action.NONE
        return self._key_down()

    def _key_down(self) -> Action:
        if self.sel is not None and self.sel + 1 < len(self.matches):
            self.sel += 1
            if self.sel == self.next_page:
                self.curr = self.next_page
                self.calc_offsets()
        return Action.REDRAW

    def _key_tab(self) -> Action:
        item = self.selected
        if item is None:
            return Action.NONE
        self.text = item.text
        self.cursor = len(self.text)
        self.match()
        return Action.REDRAW