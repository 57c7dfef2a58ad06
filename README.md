# dynmenu

A small, keyboard-driven menu. It reads lines from standard input, shows
them in a borderless bar at the top (or bottom) of the screen, narrows the
list as you type, and prints the line you pick to standard output.

Anything that produces a list can feed it, and anything that accepts a line
can take its answer.

## Installation

```sh
pip install .
```

The window is drawn with Tk (`tkinter`), which ships with most Python
installations. There are no other dependencies.

## Usage

```sh
printf 'firefox\nterminal\neditor\n' | dynmenu -p 'run:'
```

The exit status is 0 when an entry was chosen and 1 when the menu was
cancelled, the window could not be opened, or the options were wrong (the
usage text is then printed to standard error).

| Option        | Meaning                                                             |
|---------------|---------------------------------------------------------------------|
| `-b`          | show the menu at the bottom of the screen                           |
| `-f`          | accepted for compatibility; standard input is always read first     |
| `-i`          | match items case-insensitively (ASCII letters)                      |
| `-v`          | print `dynmenu-5.0` and exit                                        |
| `-l lines`    | vertical list with this many lines (at most the number of items)    |
| `-p prompt`   | prompt to the left of the input field                               |
| `-fn font`    | font, as `Family:size=N` or `Family:pixelsize=N`                    |
| `-m monitor`  | accepted but not used (see below)                                   |
| `-h height`   | minimum height of a menu line, never less than 8 (default 48)       |
| `-nb color`   | normal background colour                                            |
| `-nf color`   | normal foreground colour                                            |
| `-sb color`   | selected background colour                                          |
| `-sf color`   | selected foreground colour                                          |
| `-w windowid` | embed into the given window                                         |

### Matching

The input is split on spaces into tokens. An item is shown only if every
token occurs in it. Exact matches come first, then items that start with the
first token, then everything else that matched; each group keeps the input
order.

### Keys

- `Return` prints the selected item (or the typed text if nothing matches)
  and exits; `Shift+Return` prints the typed text instead; `Ctrl+Return`
  prints the selection, marks it, and keeps the menu open.
- `Tab` completes the input to the selected item.
- `Left`/`Right` move the cursor, and past the ends of the text move the
  selection in the horizontal list; `Up`/`Down` move the selection;
  `Home`/`End` go to the first/last item (or the start/end of the text);
  `Page Up`/`Page Down` turn pages.
- `Escape` or `Ctrl+[` exits without printing anything.
- `Ctrl+a` home, `Ctrl+e` end, `Ctrl+b`/`Ctrl+f` left/right,
  `Ctrl+h` backspace, `Ctrl+d` delete, `Ctrl+n`/`Ctrl+p` down/up,
  `Ctrl+i` tab, `Ctrl+j`/`Ctrl+m` return, `Ctrl+c`/`Ctrl+g` escape.
- `Ctrl+k` deletes to the end, `Ctrl+u` to the start, `Ctrl+w` the word
  before the cursor; `Ctrl+Left`/`Ctrl+Right` move by word.
- `Ctrl+y` pastes the primary selection, `Ctrl+Shift+Y` the clipboard (up to
  the first newline).
- `Alt+b`/`Alt+f` move by word; `Alt+h`/`Alt+l` move the selection up/down;
  `Alt+j`/`Alt+k` next/previous page; `Alt+g`/`Alt+G` first/last item.

## dynmenu-stest

A companion filter that prints the names of files passing a set of tests,
handy for building a list of programs to feed into the menu:

```sh
dynmenu-stest -flx /usr/bin | sort | dynmenu
```

```
dynmenu-stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]
```

| Flag      | Test                                             |
|-----------|--------------------------------------------------|
| `-a`      | include hidden files                             |
| `-b`      | block special                                    |
| `-c`      | character special                                |
| `-d`      | directory                                        |
| `-e`      | exists                                           |
| `-f`      | regular file                                     |
| `-g`      | set-group-id                                     |
| `-h`      | symbolic link                                    |
| `-l`      | test the entries of the named directories        |
| `-n file` | newer than `file`                                |
| `-o file` | older than `file`                                |
| `-p`      | named pipe                                       |
| `-q`      | print nothing, exit 0 on the first match         |
| `-r`      | readable                                         |
| `-s`      | not empty                                        |
| `-u`      | set-user-id                                      |
| `-v`      | invert the result of the tests                   |
| `-w`      | writable                                         |
| `-x`      | executable                                       |

With no file arguments, paths are read one per line from standard input.
The exit status is 0 if anything matched, 1 if nothing did, and 2 on a usage
error.

## Using it from Python

- `dynmenu.matching.match_items(items, text, case_insensitive)` orders
  `Item`s as described above.
- `dynmenu.menu.Menu(items, config, measure)` holds the input text, the
  matches and the visible page; `handle_key(key, ctrl, alt, shift)` applies a
  key press and returns an `Action` telling the caller what to do.
- `dynmenu.config.default_config()` and `purple_config()` return the built-in
  settings; `dynmenu.options.parse_options(argv)` parses the menu's options.
- `dynmenu.stest.parse_args`, `passes` and `run` back the `dynmenu-stest`
  command.

## What it does not do

- There is no multi-monitor placement: the bar always spans the screen Tk
  reports, from its left edge, and `-m` has no effect.
- Only the first font is used, with no fallback fonts for missing glyphs.
- `-f` does not change the order of reading input and grabbing the keyboard.

## Running the tests

```sh
pip install '.[test]'
pytest
```