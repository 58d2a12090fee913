"""Held-input state for termkey - modifier keys and mouse buttons"""

from typing import Dict, List, Optional, Set

from .keymap import KeyTable, ModifierId, mouse_button_name, table_for_platform


# Presses closer together than this belong to the same mouse gesture
GESTURE_WINDOW = 0.050


class ModifierTracker:
    """Tracks the pressed/released state of every modifier slot"""

    def __init__(self, table: Optional[KeyTable] = None):
        self._table = table or table_for_platform()
        self._state: Dict[ModifierId, bool] = {mod: False for mod in ModifierId}

    def modifier_for(self, code: int) -> Optional[ModifierId]:
        """Modifier slot bound to a key code, if any"""
        return self._table.modifiers.get(code)

    def is_modifier(self, code: int) -> bool:
        """Check if a key code is one of the tracked modifiers"""
        return code in self._table.modifiers

    def update(self, code: int, is_pressed: bool) -> bool:
        """
        Record a key transition

        Returns:
            True if the code was a modifier and its slot changed
        """
        modifier = self._table.modifiers.get(code)
        if modifier is None:
            return False

        changed = self._state[modifier] != is_pressed
        self._state[modifier] = is_pressed
        return changed

    def is_pressed(self, modifier: ModifierId) -> bool:
        """Check if a modifier slot is held"""
        return self._state[modifier]

    def snapshot(self) -> Dict[ModifierId, bool]:
        """Copy of the current modifier state, in display order"""
        return {mod: self._state[mod] for mod in ModifierId}

    def held(self) -> List[ModifierId]:
        """Held modifiers in display order"""
        return [mod for mod in ModifierId if self._state[mod]]

    def __repr__(self):
        held = '+'.join(mod.name for mod in self.held()) or '-'
        return f"ModifierTracker[{held}]"


class MouseButtonTracker:
    """Tracks the set of currently pressed mouse buttons

    Presses arriving within ``window`` seconds of each other are part of one
    combined gesture. A press that comes after a longer pause, with every
    earlier button already released, starts a new gesture.
    """

    def __init__(self, window: float = GESTURE_WINDOW):
        self.window = window
        self._pressed: Set[int] = set()
        self._last_press: Optional[float] = None
        self._gesture_start: Optional[float] = None

    @property
    def active_count(self) -> int:
        """Number of buttons currently held"""
        return len(self._pressed)

    @property
    def pressed(self) -> Set[int]:
        """Copy of the held button set"""
        return set(self._pressed)

    @property
    def gesture_start(self) -> Optional[float]:
        """Timestamp of the first press of the current gesture"""
        return self._gesture_start

    def press(self, button: int, timestamp: float) -> bool:
        """
        Record a button press

        Returns:
            True if the press joined an existing gesture
        """
        stale = self._last_press is None or timestamp - self._last_press > self.window
        joined = not (stale and not self._pressed)

        if not joined:
            self._pressed.clear()
            self._gesture_start = timestamp

        self._pressed.add(button)
        self._last_press = timestamp
        return joined

    def release(self, button: int) -> bool:
        """Record a button release, returns False if the button was not held"""
        if button not in self._pressed:
            return False
        self._pressed.discard(button)
        return True

    def is_pressed(self, button: int) -> bool:
        return button in self._pressed

    def active_label(self) -> str:
        """Names of held buttons in ascending id order, joined with ' + '"""
        return ' + '.join(mouse_button_name(button) for button in sorted(self._pressed))

    def __repr__(self):
        return f"MouseButtonTracker({sorted(self._pressed)})"
