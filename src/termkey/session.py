"""Display session for termkey

A Session owns every piece of mutable input/display state and turns each
InputEvent into (at most) one render. Events must be fed from a single thread.
"""

from typing import Optional

from .composer import LabelComposer
from .config import DisplayConfig
from .events import EventKind, InputEvent
from .input_state import ModifierTracker, MouseButtonTracker
from .keymap import (
    UNKNOWN_KEY,
    WHEEL_BUTTONS,
    KeyNameResolver,
    mouse_button_name,
    resolver_for_platform,
)
from .presenter import Presenter


class Session:
    """Modifier, mouse and label state for one run of termkey"""

    def __init__(self, presenter: Presenter,
                 config: Optional[DisplayConfig] = None,
                 resolver: Optional[KeyNameResolver] = None):
        self.config = config or DisplayConfig()
        self.resolver = resolver or resolver_for_platform()
        self.presenter = presenter
        self.modifiers = ModifierTracker(self.resolver.table)
        self.mouse = MouseButtonTracker()
        self.composer = LabelComposer(self.resolver, compress_repeats=self.config.compress_repeats)
        self._last_button: Optional[int] = None

    def handle(self, event: InputEvent) -> Optional[str]:
        """
        Apply one input event

        Returns:
            The label that was rendered, or None if nothing was drawn
        """
        if event.kind == EventKind.KEY_DOWN:
            return self._key_down(event)
        if event.kind == EventKind.KEY_UP:
            return self._key_up(event)
        if event.kind == EventKind.BUTTON_DOWN:
            return self._button_down(event)
        if event.kind == EventKind.BUTTON_UP:
            return self._button_up(event)
        return None

    def resize(self) -> bool:
        """Redraw the last label for new terminal dimensions"""
        return self.presenter.redraw()

    def mouse_label(self) -> str:
        """Label for the held mouse buttons ('' when none)"""
        if not self.mouse.active_count:
            return ""
        if self.config.multi_button:
            return self.mouse.active_label()
        if self._last_button is None or not self.mouse.is_pressed(self._last_button):
            return ""
        return mouse_button_name(self._last_button)

    def _key_down(self, event: InputEvent) -> Optional[str]:
        self.modifiers.update(event.code, True)

        name = self.resolver.resolve(event.code)
        if name == UNKNOWN_KEY:
            return None

        is_modifier = self.modifiers.is_modifier(event.code)
        state = self.modifiers.snapshot()
        text = self.composer.compose(name, is_modifier, state, self.mouse_label())
        repeatable = not self.composer.is_lone_modifier(is_modifier, state, name)
        label = self.composer.render(text, ('key', event.code), event.timestamp, repeatable)
        self.presenter.show(label)
        return label

    def _key_up(self, event: InputEvent) -> None:
        self.modifiers.update(event.code, False)
        self._reset_repeat_unless(('key', event.code))
        return None

    def _button_down(self, event: InputEvent) -> str:
        self.mouse.press(event.code, event.timestamp)
        self._last_button = event.code

        text = self.composer.compose(None, False, self.modifiers.snapshot(), self.mouse_label())
        label = self.composer.render(text, ('button', event.code), event.timestamp)
        self.presenter.show(label)
        return label

    def _button_up(self, event: InputEvent) -> Optional[str]:
        if not self.mouse.release(event.code):
            return None
        self._reset_repeat_unless(('button', event.code))

        # A wheel release follows its press at once, keep the wheel label up
        if event.code in WHEEL_BUTTONS:
            return None
        if not self.config.multi_button or not self.mouse.active_count:
            return None

        # Remaining buttons are still held, show them
        text = self.composer.compose(None, False, self.modifiers.snapshot(), self.mouse_label())
        label = self.composer.render(text, ('buttons', tuple(sorted(self.mouse.pressed))),
                                     event.timestamp, repeatable=False)
        self.presenter.show(label)
        return label

    def _reset_repeat_unless(self, identity):
        last = self.composer.last
        if last is not None and last.identity != identity:
            self.composer.reset()
