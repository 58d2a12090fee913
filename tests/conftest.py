"""
Shared fixtures for the termkey tests.

Nothing here needs a display or a real input device: events are synthetic
key codes and output goes to an in-memory stream.
"""
import io
import os
import sys

import pytest

# pynput refuses to import on Linux without an X display; its dummy backend
# imports cleanly and is enough for the helpers under test.
if sys.platform.startswith("linux") and not os.environ.get("DISPLAY"):
    os.environ.setdefault("PYNPUT_BACKEND", "dummy")

from termkey.config import DisplayConfig
from termkey.events import EventKind, InputEvent
from termkey.keymap import X11_TABLE, KeyNameResolver
from termkey.presenter import AnsiTerminal, Presenter, TerminalSize
from termkey.session import Session


class SizeBox:
    """Mutable terminal size for resize tests"""

    def __init__(self, rows=24, cols=80):
        self.size = TerminalSize(rows, cols)

    def __call__(self):
        return self.size


def key_down(code, t=0.0):
    return InputEvent(EventKind.KEY_DOWN, code, t)


def key_up(code, t=0.0):
    return InputEvent(EventKind.KEY_UP, code, t)


def button_down(button, t=0.0):
    return InputEvent(EventKind.BUTTON_DOWN, button, t)


def button_up(button, t=0.0):
    return InputEvent(EventKind.BUTTON_UP, button, t)


@pytest.fixture
def resolver():
    return KeyNameResolver(X11_TABLE)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def size_box():
    return SizeBox()


@pytest.fixture
def make_presenter(stream, size_box):
    def factory(config=None):
        return Presenter(config or DisplayConfig(), AnsiTerminal(stream, size_box))
    return factory


@pytest.fixture
def make_session(make_presenter, resolver):
    def factory(config=None):
        config = config or DisplayConfig()
        return Session(make_presenter(config), config, resolver)
    return factory
