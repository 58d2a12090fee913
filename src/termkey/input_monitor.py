"""Input monitoring for termkey - global keyboard and mouse events

pynput delivers events on its own listener threads. The callbacks here only
translate each event into an InputEvent and queue it; all state changes
happen on the thread that drains the queue.
"""

import queue
import sys
import time
from typing import Iterable, List, Optional

from pynput import keyboard, mouse

from .errors import EventSourceError
from .events import EventKind, InputEvent
from .keymap import char_to_keysym


MAX_QUEUED_EVENTS = 1024


# pynput button names -> X11 style button numbers
BUTTON_CODES = {
    'left': 1,
    'middle': 2,
    'right': 3,
    'x1': 8,
    'x2': 9,
}

WHEEL_UP, WHEEL_DOWN, WHEEL_LEFT, WHEEL_RIGHT = 4, 5, 6, 7


def base_keysym(display, keysym: int) -> int:
    """
    Unshifted keysym of the key that produces keysym

    pynput reports the keysym at the current shift level, so the same key
    can go down as Meta_L and come up as Alt_L. Looking up level 0 of its
    keycode gives one stable code per physical key.
    """
    keycode = display.keysym_to_keycode(keysym)
    if not keycode:
        return keysym
    return display.keycode_to_keysym(keycode, 0) or keysym


def key_to_code(key, platform: Optional[str] = None, display=None) -> Optional[int]:
    """
    Platform key code (X11 keysym / Win32 virtual key) of a pynput key

    Args:
        key: pynput Key or KeyCode
        platform: sys.platform style name (running platform by default)
        display: Open Xlib display used to map X11 keysyms to their unshifted level
    """
    if key is None:
        return None
    if isinstance(key, keyboard.Key):
        key = key.value

    platform = platform or sys.platform
    windows = platform.startswith('win')

    code = getattr(key, 'vk', None)
    if code is None:
        char = getattr(key, 'char', None)
        if not char or len(char) != 1:
            return None
        if windows:
            upper = char.upper()
            if upper.isascii() and upper.isalnum():
                return ord(upper)
            return None
        code = char_to_keysym(char)

    if display is not None and not windows:
        code = base_keysym(display, code)
    return code


def button_to_code(button) -> Optional[int]:
    """Button number of a pynput mouse button"""
    code = BUTTON_CODES.get(getattr(button, 'name', None))
    if code is not None:
        return code
    value = getattr(button, 'value', None)
    if isinstance(value, int) and value > 0:
        return value
    return None


def scroll_to_buttons(dx: int, dy: int) -> List[int]:
    """Wheel buttons matching a scroll delta"""
    buttons = []
    if dy > 0:
        buttons.append(WHEEL_UP)
    elif dy < 0:
        buttons.append(WHEEL_DOWN)
    if dx < 0:
        buttons.append(WHEEL_LEFT)
    elif dx > 0:
        buttons.append(WHEEL_RIGHT)
    return buttons


def open_display(platform: Optional[str] = None):
    """
    Open the X display global capture runs against

    Returns None on Windows and macOS, where no display connection is used.

    Raises:
        EventSourceError: If the display cannot be opened or lacks the RECORD
            extension that pynput relies on
    """
    platform = platform or sys.platform
    if platform.startswith('win') or platform == 'darwin':
        return None

    from Xlib import display

    try:
        conn = display.Display()
    except Exception as e:
        raise EventSourceError(f"Cannot open X display: {e}") from e

    if not conn.has_extension('RECORD'):
        conn.close()
        raise EventSourceError("X server does not support the RECORD extension")
    return conn


def check_display(platform: Optional[str] = None):
    """Verify that global input can be captured on this machine"""
    conn = open_display(platform)
    if conn is not None:
        conn.close()


class InputMonitor:
    """Global keyboard and mouse listener feeding a single event queue

    Args:
        events: Queue to fill (bounded to MAX_QUEUED_EVENTS by default)
        display: Xlib display for keysym lookups; opened by probe() when omitted
        platform: sys.platform style name (running platform by default)
    """

    def __init__(self, events: Optional[queue.Queue] = None, display=None,
                 platform: Optional[str] = None):
        self.events: queue.Queue = events if events is not None else queue.Queue(MAX_QUEUED_EVENTS)
        self.platform = platform or sys.platform
        self._display = display
        self._owns_display = False
        self._keyboard_listener: Optional[keyboard.Listener] = None
        self._mouse_listener: Optional[mouse.Listener] = None
        self._running = False
        self.dropped = 0

    def _emit(self, kind: EventKind, code: Optional[int]):
        if code is None:
            return
        try:
            self.events.put_nowait(InputEvent(kind, code, time.monotonic()))
        except queue.Full:
            self.dropped += 1

    def _on_press(self, key):
        """Handle key press"""
        self._emit(EventKind.KEY_DOWN, key_to_code(key, self.platform, self._display))

    def _on_release(self, key):
        """Handle key release"""
        self._emit(EventKind.KEY_UP, key_to_code(key, self.platform, self._display))

    def _on_click(self, x: int, y: int, button, pressed: bool):
        """Handle mouse button events"""
        kind = EventKind.BUTTON_DOWN if pressed else EventKind.BUTTON_UP
        self._emit(kind, button_to_code(button))

    def _on_scroll(self, x: int, y: int, dx: int, dy: int):
        """Wheel steps arrive as a press and release of buttons 4-7"""
        for button in scroll_to_buttons(dx, dy):
            self._emit(EventKind.BUTTON_DOWN, button)
            self._emit(EventKind.BUTTON_UP, button)

    def probe(self):
        """Fail early with EventSourceError if capture cannot work here"""
        if self._display is None:
            self._display = open_display(self.platform)
            self._owns_display = self._display is not None

    def start(self) -> bool:
        """Start keyboard and mouse listeners"""
        if self._running:
            return False

        try:
            self._keyboard_listener = keyboard.Listener(
                on_press=self._on_press,
                on_release=self._on_release
            )
            self._mouse_listener = mouse.Listener(
                on_click=self._on_click,
                on_scroll=self._on_scroll
            )
            self._keyboard_listener.start()
            self._mouse_listener.start()
            self._running = True
            return True

        except Exception as e:
            print(f"Error starting input listeners: {e}", file=sys.stderr)
            self.stop()
            return False

    def stop(self):
        """Stop both listeners; safe to call more than once"""
        for listener in (self._keyboard_listener, self._mouse_listener):
            if listener is not None:
                listener.stop()
        self._keyboard_listener = None
        self._mouse_listener = None
        self._running = False

        if self._owns_display:
            self._display.close()
            self._display = None
            self._owns_display = False

    def is_running(self) -> bool:
        """Check if both listeners are alive"""
        if not self._running:
            return False
        listeners: Iterable = (self._keyboard_listener, self._mouse_listener)
        return all(listener is not None and listener.is_alive() for listener in listeners)

    def get(self, timeout: float) -> Optional[InputEvent]:
        """Next queued event, or None after timeout seconds"""
        try:
            return self.events.get(timeout=timeout)
        except queue.Empty:
            return None
