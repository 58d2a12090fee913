"""Key and mouse button naming for termkey

Maps raw platform key codes (X11 keysyms, Win32 virtual-key codes) and
mouse button numbers to the uppercase labels shown on screen.
"""

import sys
from enum import Enum
from importlib import import_module
from typing import Callable, Dict, Optional

from Xlib import XK


UNKNOWN_KEY = "UNKNOWN"
UNKNOWN_BUTTON = "UNKNOWN BUTTON"


class ModifierId(Enum):
    """Modifier slots, declared in the order they appear in a label"""
    CTRL_L = "ctrl_l"
    CTRL_R = "ctrl_r"
    ALT_L = "alt_l"
    ALT_R = "alt_r"
    SHIFT_L = "shift_l"
    SHIFT_R = "shift_r"
    META_L = "meta_l"
    META_R = "meta_r"
    ALT_GR = "alt_gr"
    SUPER_L = "super_l"
    SUPER_R = "super_r"


MOUSE_BUTTON_NAMES: Dict[int, str] = {
    1: "LEFT CLICK",
    2: "MIDDLE CLICK",
    3: "RIGHT CLICK",
    4: "WHEEL UP",
    5: "WHEEL DOWN",
    6: "WHEEL LEFT",
    7: "WHEEL RIGHT",
    8: "X BUTTON 1",
    9: "X BUTTON 2",
}


# Scroll steps arrive as an instantaneous press and release of these
WHEEL_BUTTONS = frozenset(range(4, 8))


def mouse_button_name(button: int) -> str:
    """Canonical name of a mouse button number"""
    return MOUSE_BUTTON_NAMES.get(button, UNKNOWN_BUTTON)


class KeyTable:
    """Platform-specific naming data

    Args:
        platform: Short platform tag ('x11', 'win32')
        overrides: Code -> display name for keys whose default name is obscure
        modifiers: Code -> modifier slot
        default_name: Fallback naming function, returns None when a code has no name
    """

    def __init__(self, platform: str, overrides: Dict[int, str],
                 modifiers: Dict[int, ModifierId],
                 default_name: Callable[[int], Optional[str]]):
        self.platform = platform
        self.overrides = dict(overrides)
        self.modifiers = dict(modifiers)
        self.default_name = default_name
        self.modifier_codes: Dict[ModifierId, int] = {mod: code for code, mod in self.modifiers.items()}

    def __repr__(self):
        return f"KeyTable({self.platform}, {len(self.overrides)} overrides)"


# ---------------------------------------------------------------------------
# X11
# ---------------------------------------------------------------------------

# Groups in lookup order. miscellany and latin1 are always loaded by Xlib.XK;
# xkb holds ISO_Level3_Shift and the dead keys, the rest widen name coverage.
KEYSYM_GROUPS = ('miscellany', 'latin1', 'xkb', 'latin2', 'latin3', 'latin4',
                 'greek', 'cyrillic', 'technical', 'publishing')

for _group in KEYSYM_GROUPS[2:]:
    XK.load_keysym_group(_group)

# First declared name wins for aliases (KP_Prior over KP_Page_Up, F11 over L1),
# matching XKeysymToString
_KEYSYM_NAMES: Dict[int, str] = {}
for _group in KEYSYM_GROUPS:
    for _name, _value in vars(import_module(f'Xlib.keysymdef.{_group}')).items():
        if _name.startswith('XK_') and isinstance(_value, int):
            _KEYSYM_NAMES.setdefault(_value, _name[3:])

UNICODE_KEYSYM_BASE = 0x01000000


def char_to_keysym(char: str) -> int:
    """Keysym for a single character (Latin-1 direct, Unicode offset otherwise)"""
    codepoint = ord(char)
    if codepoint < 0x100:
        return codepoint
    return UNICODE_KEYSYM_BASE | codepoint


def x11_keysym_name(keysym: int) -> Optional[str]:
    """Symbolic keysym name, as XKeysymToString would report it"""
    name = _KEYSYM_NAMES.get(keysym)
    if name is not None:
        return name

    if keysym & 0xff000000 == UNICODE_KEYSYM_BASE:
        codepoint = keysym & 0x00ffffff
        try:
            char = chr(codepoint)
        except ValueError:
            return None
        return char if char.isprintable() else f"U{codepoint:04X}"

    return None


X11_MODIFIERS: Dict[int, ModifierId] = {
    XK.XK_Shift_L: ModifierId.SHIFT_L,
    XK.XK_Shift_R: ModifierId.SHIFT_R,
    XK.XK_Control_L: ModifierId.CTRL_L,
    XK.XK_Control_R: ModifierId.CTRL_R,
    XK.XK_Alt_L: ModifierId.ALT_L,
    XK.XK_Alt_R: ModifierId.ALT_R,
    XK.XK_Meta_L: ModifierId.META_L,
    XK.XK_Meta_R: ModifierId.META_R,
    XK.XK_ISO_Level3_Shift: ModifierId.ALT_GR,
    XK.XK_Mode_switch: ModifierId.ALT_GR,
    XK.XK_Super_L: ModifierId.SUPER_L,
    XK.XK_Super_R: ModifierId.SUPER_R,
}

X11_OVERRIDES: Dict[int, str] = {
    # Modifiers
    XK.XK_Shift_L: "SHIFT_L",
    XK.XK_Shift_R: "SHIFT_R",
    XK.XK_Control_L: "CONTROL_L",
    XK.XK_Control_R: "CONTROL_R",
    XK.XK_Alt_L: "ALT_L",
    XK.XK_Alt_R: "ALT_R",
    XK.XK_Meta_L: "META_L",
    XK.XK_Meta_R: "META_R",
    XK.XK_ISO_Level3_Shift: "ALTGR",
    XK.XK_Mode_switch: "ALTGR",
    XK.XK_Super_L: "SUPER_L",
    XK.XK_Super_R: "SUPER_R",
    # Punctuation, arrows, navigation
    XK.XK_apostrophe: "APOSTROPHE (')",
    XK.XK_slash: "SLASH (/)",
    XK.XK_backslash: "BACKSLASH (\\)",
    XK.XK_Left: "ARROW LEFT",
    XK.XK_Right: "ARROW RIGHT",
    XK.XK_Up: "ARROW UP",
    XK.XK_Down: "ARROW DOWN",
    XK.XK_KP_Divide: "KP_DIVIDE (/)",
    XK.XK_KP_Multiply: "KP_MULTIPLY (*)",
    XK.XK_KP_Subtract: "KP_SUBTRACT (-)",
    XK.XK_KP_Add: "KP_ADD (+)",
    XK.XK_bracketleft: "BRACKETLEFT ([)",
    XK.XK_bracketright: "BRACKETRIGHT (])",
    XK.XK_comma: "COMMA (,)",
    XK.XK_period: "PERIOD (.)",
    XK.XK_dead_acute: "DEAD_ACUTE (´)",
    XK.XK_dead_tilde: "DEAD_TILDE (~)",
    XK.XK_dead_cedilla: "DEAD_CEDILLA (Ç)",
    XK.XK_minus: "MINUS (-)",
    XK.XK_equal: "EQUAL (=)",
    XK.XK_semicolon: "SEMICOLON (;)",
    XK.XK_Page_Up: "PAGE UP",
    XK.XK_Page_Down: "PAGE DOWN",
    XK.XK_Home: "HOME",
    XK.XK_End: "END",
}

X11_TABLE = KeyTable('x11', X11_OVERRIDES, X11_MODIFIERS, x11_keysym_name)


# ---------------------------------------------------------------------------
# Win32 virtual-key codes
# ---------------------------------------------------------------------------

VK_LSHIFT, VK_RSHIFT = 0xA0, 0xA1
VK_LCONTROL, VK_RCONTROL = 0xA2, 0xA3
VK_LMENU, VK_RMENU = 0xA4, 0xA5
VK_LWIN, VK_RWIN = 0x5B, 0x5C
VK_F1, VK_F24 = 0x70, 0x87
VK_NUMPAD0, VK_NUMPAD9 = 0x60, 0x69

WIN32_MODIFIERS: Dict[int, ModifierId] = {
    VK_LSHIFT: ModifierId.SHIFT_L,
    VK_RSHIFT: ModifierId.SHIFT_R,
    VK_LCONTROL: ModifierId.CTRL_L,
    VK_RCONTROL: ModifierId.CTRL_R,
    VK_LMENU: ModifierId.ALT_L,
    VK_RMENU: ModifierId.ALT_R,
    VK_LWIN: ModifierId.SUPER_L,
    VK_RWIN: ModifierId.SUPER_R,
}

WIN32_OVERRIDES: Dict[int, str] = {
    VK_LSHIFT: "SHIFT_L",
    VK_RSHIFT: "SHIFT_R",
    VK_LCONTROL: "CONTROL_L",
    VK_RCONTROL: "CONTROL_R",
    VK_LMENU: "ALT_L",
    VK_RMENU: "ALT_R",
    VK_LWIN: "WIN_L",
    VK_RWIN: "WIN_R",
    0x25: "ARROW LEFT",
    0x27: "ARROW RIGHT",
    0x26: "ARROW UP",
    0x28: "ARROW DOWN",
    0x6F: "KP_DIVIDE (/)",
    0x6A: "KP_MULTIPLY (*)",
    0x6D: "KP_SUBTRACT (-)",
    0x6B: "KP_ADD (+)",
    0xDB: "BRACKETLEFT ([)",
    0xDD: "BRACKETRIGHT (])",
    0xBC: "COMMA (,)",
    0xBE: "PERIOD (.)",
    0xBD: "MINUS (-)",
    0xBB: "EQUAL (=)",
    0xBA: "SEMICOLON (;)",
    0xDE: "APOSTROPHE (')",
    0xBF: "SLASH (/)",
    0xDC: "BACKSLASH (\\)",
    0x21: "PAGE UP",
    0x22: "PAGE DOWN",
    0x24: "HOME",
    0x23: "END",
    0x20: "SPACE",
    0x0D: "ENTER",
    0x08: "BACKSPACE",
    0x09: "TAB",
    0x1B: "ESCAPE",
    0x2E: "DELETE",
    0x2D: "INSERT",
    0x14: "CAPS LOCK",
    0x90: "NUM LOCK",
    0x91: "SCROLL LOCK",
    0x13: "PAUSE",
    0x2C: "PRINT SCREEN",
}


def win32_vk_name(vk: int) -> Optional[str]:
    """Default name for a Win32 virtual-key code"""
    if VK_F1 <= vk <= VK_F24:
        return f"F{vk - VK_F1 + 1}"
    if VK_NUMPAD0 <= vk <= VK_NUMPAD9:
        return f"KP_{vk - VK_NUMPAD0}"
    if ord('A') <= vk <= ord('Z') or ord('0') <= vk <= ord('9'):
        return chr(vk)
    return None


WIN32_TABLE = KeyTable('win32', WIN32_OVERRIDES, WIN32_MODIFIERS, win32_vk_name)


def table_for_platform(platform: Optional[str] = None) -> KeyTable:
    """Key table matching the running platform (X11 unless on Windows)"""
    platform = platform or sys.platform
    if platform.startswith('win'):
        return WIN32_TABLE
    return X11_TABLE


class KeyNameResolver:
    """Pure, total mapping from key code to canonical display name"""

    def __init__(self, table: Optional[KeyTable] = None):
        self.table = table or table_for_platform()

    def resolve(self, code: int) -> str:
        """Resolve a key code: override table, platform name, then UNKNOWN"""
        name = self.table.overrides.get(code)
        if name is None:
            try:
                name = self.table.default_name(code)
            except (TypeError, ValueError, OverflowError):
                name = None
        if not name:
            return UNKNOWN_KEY
        return name.upper()

    def modifier_name(self, modifier: ModifierId) -> str:
        """Display name of a modifier slot on this platform"""
        code = self.table.modifier_codes.get(modifier)
        if code is None:
            return modifier.value.upper()
        return self.resolve(code)


def resolver_for_platform(platform: Optional[str] = None) -> KeyNameResolver:
    """Build a resolver for the running platform"""
    return KeyNameResolver(table_for_platform(platform))
