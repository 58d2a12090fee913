"""Centered terminal rendering for termkey"""

import os
import sys
from typing import Callable, List, NamedTuple, Optional, TextIO, Tuple

from .colors import RESET, bg_code, fg_code
from .config import DisplayConfig


BANNER = "Termkey"

CLEAR_SCREEN = "\033[H\033[J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


class TerminalSize(NamedTuple):
    rows: int
    cols: int


FALLBACK_SIZE = TerminalSize(24, 80)


def is_graphic(char: str) -> bool:
    """Printable and not whitespace (C isgraph)"""
    return char.isprintable() and not char.isspace()


class AnsiTerminal:
    """Render sink writing ANSI escape sequences to a text stream"""

    def __init__(self, stream: Optional[TextIO] = None,
                 size_provider: Optional[Callable[[], TerminalSize]] = None):
        self.stream = stream or sys.stdout
        self._size_provider = size_provider

    def size(self) -> TerminalSize:
        """Current terminal dimensions, 24x80 when they cannot be queried"""
        if self._size_provider is not None:
            return self._size_provider()
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (AttributeError, OSError, ValueError):
            return FALLBACK_SIZE
        if size.lines <= 0 or size.columns <= 0:
            return FALLBACK_SIZE
        return TerminalSize(size.lines, size.columns)

    def clear_and_write_at(self, row: int, col: int, text: str,
                           styles: Optional[List[str]] = None):
        """
        Clear the screen and write text at a 1-based position

        Args:
            row: Terminal row (1-based)
            col: Terminal column (1-based)
            text: Text to write
            styles: Optional ANSI prefix per character of text
        """
        out = [CLEAR_SCREEN, f"\033[{row};{col}H"]
        if styles is None:
            out.append(text)
        else:
            for char, style in zip(text, styles):
                out.append(style)
                out.append(char)
            out.append(RESET)
        out.append("\n")
        self.stream.write(''.join(out))
        self.stream.flush()

    def hide_cursor(self):
        self._write(HIDE_CURSOR)

    def show_cursor(self):
        self._write(SHOW_CURSOR)

    def reset(self):
        """Show the cursor, reset attributes and clear the screen"""
        self._write(SHOW_CURSOR + RESET + CLEAR_SCREEN)

    def _write(self, data: str):
        self.stream.write(data)
        self.stream.flush()


class Presenter:
    """Renders labels centered in the terminal

    Keeps the last label so it can be drawn again after a resize. In color
    mode background and foreground swap on every render (blink).
    """

    def __init__(self, config: Optional[DisplayConfig] = None,
                 terminal: Optional[AnsiTerminal] = None):
        self.config = config or DisplayConfig()
        self.terminal = terminal or AnsiTerminal()
        self._last_label: Optional[str] = None
        self._color_toggle = False
        self._active = False

    @property
    def last_label(self) -> Optional[str]:
        return self._last_label

    def position(self, label: str) -> Tuple[int, int]:
        """1-based (row, col) that centers label in the current terminal"""
        rows, cols = self.terminal.size()
        row = max(1, rows // 2)
        col = max(0, (cols - len(label)) // 2) + 1
        return row, col

    def styles_for(self, label: str) -> Optional[List[str]]:
        """Per-character ANSI prefixes for label, None when color is off"""
        if not self.config.use_color:
            return None

        bg_name, fg_name = self.config.bg, self.config.fg
        if self._color_toggle:
            bg_name, fg_name = fg_name, bg_name
        background = bg_code(bg_name)
        foreground = fg_code(fg_name)
        text_color = fg_code(self.config.text) if self.config.text else None

        styles = []
        for char in label:
            if text_color and is_graphic(char):
                styles.append(background + text_color)
            else:
                styles.append(background + foreground)
        return styles

    def show(self, label: str):
        """Clear the screen and draw label at the center"""
        self._last_label = label
        self._draw(label)

    def redraw(self) -> bool:
        """Draw the last label again at the current center"""
        if self._last_label is None:
            return False
        self._draw(self._last_label)
        return True

    def _draw(self, label: str):
        row, col = self.position(label)
        styles = self.styles_for(label)
        self.terminal.clear_and_write_at(row, col, label, styles)
        if styles is not None:
            self._color_toggle = not self._color_toggle

    def start(self, banner: str = BANNER):
        """Hide the cursor and show the startup banner"""
        self._active = True
        self.terminal.hide_cursor()
        self.show(banner)

    def restore(self):
        """Give the terminal back in a usable state; safe to call twice"""
        if not self._active:
            return
        self._active = False
        self.terminal.reset()
