"""Label composition for termkey

Combines held modifiers, the primary key or button, and the mouse state into
the single line shown on screen, e.g. ``LEFT CLICK + CONTROL_L + SHIFT_L + A``.
"""

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional

from .keymap import KeyNameResolver, ModifierId


# Identical events closer together than this count as a held-key repeat
REPEAT_THRESHOLD = 0.100

SEPARATOR = " + "


@dataclass
class DisplayLabel:
    """The last rendered label and what produced it"""

    text: str
    identity: Hashable
    timestamp: float
    repeat: int = 1

    @property
    def rendered(self) -> str:
        """Label with the repeat suffix applied"""
        if self.repeat > 1:
            return f"{self.text} [x{self.repeat}]"
        return self.text


class LabelComposer:
    """Builds display labels and applies repeat compression

    Args:
        resolver: Resolver used to name modifier slots
        repeat_threshold: Maximum gap (seconds) between identical events counted as a repeat
        compress_repeats: Append ``[xN]`` for auto-repeating keys
    """

    def __init__(self, resolver: KeyNameResolver,
                 repeat_threshold: float = REPEAT_THRESHOLD,
                 compress_repeats: bool = True):
        self.resolver = resolver
        self.repeat_threshold = repeat_threshold
        self.compress_repeats = compress_repeats
        self._last: Optional[DisplayLabel] = None

    @property
    def last(self) -> Optional[DisplayLabel]:
        return self._last

    def modifier_names(self, modifiers: Dict[ModifierId, bool], primary: Optional[str] = None) -> List[str]:
        """Names of held modifiers in display order, skipping the primary key itself"""
        names = []
        for modifier in ModifierId:
            if not modifiers.get(modifier):
                continue
            name = self.resolver.modifier_name(modifier)
            if name != primary:
                names.append(name)
        return names

    def modifier_prefix(self, modifiers: Dict[ModifierId, bool], primary: Optional[str] = None) -> str:
        """'<NAME> + ' for each held modifier"""
        return ''.join(name + SEPARATOR for name in self.modifier_names(modifiers, primary))

    def compose(self, primary: Optional[str], is_primary_modifier: bool,
                modifiers: Dict[ModifierId, bool], mouse_label: str = "") -> str:
        """
        Compose the label for the current input state

        Args:
            primary: Canonical name of the key just pressed, None for a pure mouse event
            is_primary_modifier: Whether the primary key is itself a modifier
            modifiers: Current modifier state
            mouse_label: Label of the held mouse buttons ('' when none)

        Returns:
            The composed label, without any repeat suffix
        """
        if primary is None:
            # Click with modifiers held: LEFT CLICK + CONTROL_L
            names = self.modifier_names(modifiers)
            if mouse_label and names:
                return SEPARATOR.join([mouse_label] + names)
            return mouse_label

        prefix = self.modifier_prefix(modifiers, primary)
        if is_primary_modifier and not prefix:
            key_label = primary
        else:
            key_label = prefix + primary

        if mouse_label:
            return mouse_label + SEPARATOR + key_label
        return key_label

    def is_lone_modifier(self, is_primary_modifier: bool,
                         modifiers: Dict[ModifierId, bool], primary: Optional[str]) -> bool:
        """Check if a keystroke is a modifier pressed on its own"""
        return is_primary_modifier and not self.modifier_prefix(modifiers, primary)

    def render(self, text: str, identity: Hashable, timestamp: float, repeatable: bool = True) -> str:
        """
        Record a composed label and return the string to display

        A label identical to the previous one, produced by the same event
        identity within ``repeat_threshold`` seconds, bumps the repeat counter.
        Anything else starts the counter over at 1.
        """
        last = self._last
        if (self.compress_repeats and repeatable and last is not None
                and last.text == text and last.identity == identity
                and timestamp - last.timestamp < self.repeat_threshold):
            last.repeat += 1
            last.timestamp = timestamp
            return last.rendered

        self._last = DisplayLabel(text, identity, timestamp)
        return self._last.rendered

    def reset(self):
        """Forget the previous label so the next render starts a new count"""
        self._last = None
