"""Graphical menu window on top of Tk, and the menu program's entry point."""

from __future__ import annotations

import sys
import time
from typing import Callable

from .config import Scheme
from .matching import Item
from .menu import NAMED_KEYS, Action, Menu
from .options import USAGE, VERSION_STRING, Options, UsageError, parse_options

SHIFT_MASK = 0x1
CONTROL_MASK = 0x4
MOD1_MASK = 0x8

MAX_DRAWN_CHARS = 1023
GRAB_ATTEMPTS = 1000

_KEY_ALIASES = {
    "Page_Down": "Next",
    "Page_Up": "Prior",
}

_PUNCTUATION = {
    "space": " ",
    "exclam": "!",
    "quotedbl": '"',
    "numbersign": "#",
    "dollar": "$",
    "percent": "%",
    "ampersand": "&",
    "apostrophe": "'",
    "parenleft": "(",
    "parenright": ")",
    "asterisk": "*",
    "plus": "+",
    "comma": ",",
    "minus": "-",
    "period": ".",
    "slash": "/",
    "colon": ":",
    "semicolon": ";",
    "less": "<",
    "equal": "=",
    "greater": ">",
    "question": "?",
    "at": "@",
    "bracketleft": "[",
    "backslash": "\\",
    "bracketright": "]",
    "asciicircum": "^",
    "underscore": "_",
    "grave": "`",
    "braceleft": "{",
    "bar": "|",
    "braceright": "}",
    "asciitilde": "~",
}


def translate_key(keysym: str, state: int) -> tuple[str, bool, bool, bool] | None:
    """Turn a keysym name and modifier state into ``Menu.handle_key`` arguments.

    Returns ``(key, ctrl, alt, shift)``, or ``None`` for keys the menu has no
    name for (modifier keys, or characters only known by their text).
    """
    ctrl = bool(state & CONTROL_MASK)
    alt = bool(state & MOD1_MASK)
    shift = bool(state & SHIFT_MASK)
    key = _KEY_ALIASES.get(keysym, keysym)
    if key in NAMED_KEYS:
        return key, ctrl, alt, shift
    if key in _PUNCTUATION:
        return _PUNCTUATION[key], ctrl, alt, shift
    if len(key) == 1:
        return key, ctrl, alt, shift
    return None


def truncate_text(
    text: str, width: int, measure: Callable[[str], int]
) -> tuple[str, int]:
    """Shorten *text* to fit *width*, ending cut text with up to three dots.

    Returns the text to draw and the width it takes; ``("", 0)`` when
    nothing fits.
    """
    if not text:
        return "", 0
    used = measure(text)
    length = min(len(text), MAX_DRAWN_CHARS)
    while length and used > width:
        used = measure(text[:length])
        length -= 1
    if not length:
        return "", 0
    shown = text[:length]
    if length < len(text):
        dots = min(3, length)
        shown = shown[: length - dots] + "." * dots
    return shown, used


def _font_spec(name: str) -> dict[str, object]:
    family, *properties = name.split(":")
    spec: dict[str, object] = {}
    if family:
        spec["family"] = family
    for prop in properties:
        key, _, value = prop.partition("=")
        try:
            number = round(float(value))
        except ValueError:
            continue
        if key == "size":
            spec["size"] = number
        elif key == "pixelsize":
            spec["size"] = -number
    return spec


class MenuWindow:
    """A borderless bar that shows a ``Menu`` and feeds it key presses."""

    def __init__(self, menu: Menu, options: Options) -> None:
        import tkinter as tk
        from tkinter import font as tkfont

        self._tk = tk
        self.menu = menu
        self.options = options
        self.config = menu.config
        self.status = 1
        self._closing = False
        try:
            if options.embed:
                self.root = tk.Tk(className="dynmenu", use=options.embed)
            else:
                self.root = tk.Tk(className="dynmenu")
        except tk.TclError as exc:
            raise RuntimeError(f"cannot open display: {exc}") from exc
        self.root.withdraw()

        fonts = self.config.fonts or [""]
        try:
            self.font = tkfont.Font(root=self.root, **_font_spec(fonts[0]))
        except tk.TclError as exc:
            raise RuntimeError("no fonts could be loaded.") from exc
        self.font_height = self.font.metrics("linespace")
        self.lrpad = self.font_height

        self._setup_geometry()
        self.canvas = tk.Canvas(
            self.root,
            width=self.menu.width,
            height=self.menu_height,
            highlightthickness=0,
            borderwidth=0,
            background=self.config.background(Scheme.NORM),
        )
        self.canvas.pack(fill="both", expand=True)

        if not options.embed:
            self.root.overrideredirect(True)
            self.root.geometry(f"{self.menu.width}x{self.menu_height}+0+{self._y}")
        self.root.deiconify()
        self.root.lift()

        self.root.bind("<KeyPress>", self._on_key)
        self.root.bind("<Expose>", self._on_expose)
        self.root.bind("<Visibility>", self._on_visibility)
        self.root.bind("<Destroy>", self._on_destroy)
        if options.embed:
            self.root.bind("<FocusOut>", self._on_focus_out)

        self._grab_keyboard()
        self.draw()

    @property
    def menu_height(self) -> int:
        return (self.menu.lines + 1) * self.menu.bar_height

    def textw(self, text: str) -> int:
        """Width of *text* in the menu font plus the horizontal padding."""
        return self.font.measure(text) + self.lrpad

    def _setup_geometry(self) -> None:
        menu = self.menu
        root = self.root
        root.update_idletasks()
        screen_width = root.winfo_screenwidth()
        screen_height = root.winfo_screenheight()
        width = screen_width
        height = screen_height
        if self.options.embed:
            width = root.winfo_width() if root.winfo_width() > 1 else screen_width
            height = root.winfo_height() if root.winfo_height() > 1 else screen_height

        menu.measure = self.textw
        menu.case_insensitive = self.options.case_insensitive
        menu.bar_height = max(self.font_height + 2, self.config.lineheight)
        menu.width = width
        self._y = 0 if self.config.topbar else height - self.menu_height
        prompt = self.config.prompt
        menu.prompt_width = self.textw(prompt) - self.lrpad // 4 if prompt else 0
        longest = max(menu.items, key=lambda i: self.font.measure(i.text), default=None)
        input_width = self.textw(longest.text) if longest is not None else 0
        menu.input_width = min(input_width, width // 3)
        menu.match()

    def _grab_keyboard(self) -> None:
        self.root.update()
        if self.options.embed:
            self.root.focus_force()
            return
        for _ in range(GRAB_ATTEMPTS):
            try:
                self.root.grab_set_global()
            except self._tk.TclError:
                time.sleep(0.001)
                continue
            self.root.focus_force()
            return
        raise RuntimeError("cannot grab keyboard")

    def _draw_text(self, x: int, y: int, w: int, h: int, text: str, scheme: Scheme) -> int:
        fg = self.config.foreground(scheme)
        bg = self.config.background(scheme)
        self.canvas.create_rectangle(x, y, x + w, y + h, fill=bg, outline="")
        lpad = self.lrpad // 2
        shown, _ = truncate_text(text, w - lpad, self.font.measure)
        if shown:
            top = y + (h - self.font_height) // 2
            self.canvas.create_text(
                x + lpad, top, text=shown, anchor="nw", fill=fg, font=self.font
            )
        return x + w

    def _draw_item(self, item: Item, x: int, y: int, w: int) -> int:
        if item is self.menu.selected:
            scheme = Scheme.SEL
        elif item.out:
            scheme = Scheme.OUT
        else:
            scheme = Scheme.NORM
        return self._draw_text(x, y, w, self.menu.bar_height, item.text, scheme)

    def draw(self) -> None:
        """Redraw the prompt, the input field and the visible items."""
        menu = self.menu
        canvas = self.canvas
        bh = menu.bar_height
        mw = menu.width
        fh = self.font_height
        canvas.delete("all")
        canvas.create_rectangle(
            0, 0, mw, self.menu_height,
            fill=self.config.background(Scheme.NORM), outline="",
        )

        x = 0
        if self.config.prompt:
            x = self._draw_text(x, 0, menu.prompt_width, bh, self.config.prompt, Scheme.SEL)
        w = mw - x if menu.lines > 0 or not menu.matches else menu.input_width
        self._draw_text(x, 0, w, bh, menu.text, Scheme.NORM)

        curpos = self.textw(menu.text) - self.textw(menu.text[menu.cursor:])
        curpos += self.lrpad // 2 - 1
        if curpos < w:
            top = 2 + (bh - fh) // 2
            canvas.create_rectangle(
                x + curpos, top, x + curpos + 2, top + fh - 4,
                fill=self.config.foreground(Scheme.NORM), outline="",
            )

        visible = menu.visible_items()
        if menu.lines > 0:
            y = 0
            for item in visible:
                y += bh
                self._draw_item(item, x, y, mw - x)
        elif menu.matches:
            x += menu.input_width
            w = self.textw("<")
            if menu.curr:
                self._draw_text(x, 0, w, bh, "<", Scheme.NORM)
            x += w
            for item in visible:
                x = self._draw_item(
                    item, x, 0, min(self.textw(item.text), mw - x - self.textw(">"))
                )
            if menu.next_page is not None:
                w = self.textw(">")
                self._draw_text(mw - w, 0, w, bh, ">", Scheme.NORM)

    def _on_key(self, event) -> None:
        translated = translate_key(event.keysym, event.state)
        if translated is None:
            char = event.char
            if not char or event.state & (CONTROL_MASK | MOD1_MASK):
                return
            translated = (char, False, False, False)
        self._perform(self.menu.handle_key(*translated))

    def _perform(self, action: Action) -> None:
        if action is Action.NONE:
            return
        if action is Action.PASTE_PRIMARY:
            self._paste("PRIMARY")
        elif action is Action.PASTE_CLIPBOARD:
            self._paste("CLIPBOARD")
        elif action is Action.OUTPUT:
            self._emit()
            self.draw()
        elif action is Action.SELECT:
            self._emit()
            self._close(0)
        elif action is Action.CANCEL:
            self._close(1)
        else:
            self.draw()

    def _emit(self) -> None:
        sys.stdout.write(f"{self.menu.output}\n")
        sys.stdout.flush()

    def _paste(self, selection: str) -> None:
        try:
            data = self.root.selection_get(selection=selection)
        except self._tk.TclError:
            data = None
        if data is not None:
            self.menu.insert_text(data.split("\n", 1)[0])
        self.draw()

    def _close(self, status: int) -> None:
        self.status = status
        self._closing = True
        self.root.destroy()

    def _on_expose(self, event) -> None:
        if getattr(event, "count", 0) == 0:
            self.draw()

    def _on_visibility(self, event) -> None:
        if event.state != "VisibilityUnobscured":
            self.root.lift()

    def _on_focus_out(self, event) -> None:
        if not self._closing:
            self.root.after_idle(self.root.focus_force)

    def _on_destroy(self, event) -> None:
        if event.widget is self.root and not self._closing:
            self.status = 1

    def run(self) -> int:
        """Process events until the menu closes; return the exit status."""
        self.root.mainloop()
        return self.status


def main(argv: list[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_options(argv)
    except UsageError:
        sys.stderr.write(USAGE + "\n")
        return 1
    if options.show_version:
        print(VERSION_STRING)
        return 0
    items = [line.removesuffix("\n") for line in sys.stdin]
    menu = Menu(items, options.config, len)
    try:
        window = MenuWindow(menu, options)
    except (RuntimeError, ImportError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return window.run()