"""A keyboard-driven Tk menu that filters lines from standard input, and a file-testing filter."""

__version__ = "5.0"