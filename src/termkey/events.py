"""Raw input events passed from the event source to the session"""

from enum import Enum
from typing import NamedTuple


class EventKind(Enum):
    """Raw input event types"""
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"
    BUTTON_DOWN = "button_down"
    BUTTON_UP = "button_up"


class InputEvent(NamedTuple):
    kind: EventKind
    code: int
    timestamp: float
