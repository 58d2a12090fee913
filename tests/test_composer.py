"""Tests for termkey.composer"""
from termkey.composer import DisplayLabel, LabelComposer
from termkey.keymap import ModifierId


def held(*mods):
    state = {mod: False for mod in ModifierId}
    for mod in mods:
        state[mod] = True
    return state


class TestCompose:
    def test_plain_key(self, resolver):
        composer = LabelComposer(resolver)
        assert composer.compose("A", False, held()) == "A"

    def test_modifiers_in_display_order(self, resolver):
        composer = LabelComposer(resolver)
        state = held(ModifierId.SHIFT_L, ModifierId.CTRL_L)
        assert composer.compose("A", False, state) == "CONTROL_L + SHIFT_L + A"

    def test_lone_modifier(self, resolver):
        composer = LabelComposer(resolver)
        state = held(ModifierId.SHIFT_L)
        assert composer.compose("SHIFT_L", True, state) == "SHIFT_L"
        assert composer.is_lone_modifier(True, state, "SHIFT_L")

    def test_modifier_primary_is_not_repeated(self, resolver):
        composer = LabelComposer(resolver)
        state = held(ModifierId.SHIFT_L, ModifierId.CTRL_L)
        assert composer.compose("CONTROL_L", True, state) == "SHIFT_L + CONTROL_L"
        assert not composer.is_lone_modifier(True, state, "CONTROL_L")

    def test_mouse_prefix(self, resolver):
        composer = LabelComposer(resolver)
        state = held(ModifierId.CTRL_L)
        assert composer.compose("A", False, state, "LEFT CLICK") == "LEFT CLICK + CONTROL_L + A"

    def test_mouse_only(self, resolver):
        composer = LabelComposer(resolver)
        assert composer.compose(None, False, held(), "RIGHT CLICK") == "RIGHT CLICK"


class TestRepeat:
    def test_rendered_suffix(self):
        assert DisplayLabel("A", "a", 0.0).rendered == "A"
        assert DisplayLabel("A", "a", 0.0, repeat=3).rendered == "A [x3]"

    def test_fast_repeats_are_counted(self, resolver):
        composer = LabelComposer(resolver)
        assert composer.render("A", "a", 0.00) == "A"
        assert composer.render("A", "a", 0.03) == "A [x2]"
        assert composer.render("A", "a", 0.06) == "A [x3]"

    def test_gap_measured_from_previous_event(self, resolver):
        composer = LabelComposer(resolver)
        for i in range(10):
            label = composer.render("A", "a", i * 0.09)
        assert label == "A [x10]"

    def test_slow_repeat_starts_over(self, resolver):
        composer = LabelComposer(resolver)
        composer.render("A", "a", 0.0)
        composer.render("A", "a", 0.05)
        assert composer.render("A", "a", 0.5) == "A"

    def test_threshold_is_exclusive(self, resolver):
        composer = LabelComposer(resolver, repeat_threshold=0.25)
        composer.render("A", "a", 0.0)
        assert composer.render("A", "a", 0.25) == "A"

    def test_different_identity_starts_over(self, resolver):
        composer = LabelComposer(resolver)
        composer.render("A", "a", 0.0)
        assert composer.render("A", "other", 0.01) == "A"
        assert composer.last.repeat == 1

    def test_different_text_starts_over(self, resolver):
        composer = LabelComposer(resolver)
        composer.render("A", "a", 0.0)
        composer.render("B", "b", 0.01)
        assert composer.render("A", "a", 0.02) == "A"

    def test_not_repeatable(self, resolver):
        composer = LabelComposer(resolver)
        composer.render("SHIFT_L", "s", 0.0, repeatable=False)
        assert composer.render("SHIFT_L", "s", 0.01, repeatable=False) == "SHIFT_L"

    def test_compression_disabled(self, resolver):
        composer = LabelComposer(resolver, compress_repeats=False)
        composer.render("A", "a", 0.0)
        assert composer.render("A", "a", 0.01) == "A"

    def test_reset(self, resolver):
        composer = LabelComposer(resolver)
        composer.render("A", "a", 0.0)
        composer.reset()
        assert composer.last is None
        assert composer.render("A", "a", 0.01) == "A"


class TestMouseWithModifiers:
    def test_click_with_modifier_held(self, resolver):
        composer = LabelComposer(resolver)
        state = held(ModifierId.SHIFT_L, ModifierId.CTRL_L)
        assert composer.compose(None, False, state, "LEFT CLICK") == "LEFT CLICK + CONTROL_L + SHIFT_L"

    def test_no_buttons_no_label(self, resolver):
        composer = LabelComposer(resolver)
        assert composer.compose(None, False, held(ModifierId.CTRL_L), "") == ""
