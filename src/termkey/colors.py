"""Terminal color names and their ANSI codes"""

from typing import Dict, Tuple

from .errors import ConfigError


# name -> (foreground code, background code)
COLOR_TABLE: Dict[str, Tuple[str, str]] = {
    "black": ("\033[30m", "\033[40m"),
    "red": ("\033[31m", "\033[41m"),
    "green": ("\033[32m", "\033[42m"),
    "yellow": ("\033[33m", "\033[43m"),
    "blue": ("\033[34m", "\033[44m"),
    "magenta": ("\033[35m", "\033[45m"),
    "cyan": ("\033[36m", "\033[46m"),
    "white": ("\033[37m", "\033[47m"),
    "default": ("\033[39m", "\033[49m"),
}

COLOR_NAMES = tuple(COLOR_TABLE)

RESET = "\033[0m"


def is_valid_color(name: str) -> bool:
    return name in COLOR_TABLE


def validate_color(name: str, option: str = "color") -> str:
    """Return the color name, raising ConfigError if it is not recognized"""
    if name not in COLOR_TABLE:
        raise ConfigError(
            f"Invalid {option} color '{name}' (available: {', '.join(COLOR_NAMES)})"
        )
    return name


def fg_code(name: str) -> str:
    """ANSI foreground sequence for a color name"""
    return COLOR_TABLE[name][0]


def bg_code(name: str) -> str:
    """ANSI background sequence for a color name"""
    return COLOR_TABLE[name][1]
