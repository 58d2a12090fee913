"""Command-line configuration for termkey"""

import argparse
from dataclasses import dataclass
from typing import List, Optional

from .colors import COLOR_NAMES, validate_color


USAGE_EXAMPLES = """\
Available colors: {colors}

Examples:
  %(prog)s -c                                 # Color mode, default colors
  %(prog)s --text=green                       # Green text only
  %(prog)s --bg=black --text=cyan             # Black background, cyan text
  %(prog)s --bg=red --fg=white --text=blue    # Full color customization
""".format(colors=', '.join(COLOR_NAMES))


@dataclass(frozen=True)
class DisplayConfig:
    """Immutable display settings chosen at startup"""

    use_color: bool = False
    bg: str = "default"
    fg: str = "default"
    text: Optional[str] = None
    compress_repeats: bool = True
    multi_button: bool = True

    def __post_init__(self):
        validate_color(self.bg, "background")
        validate_color(self.fg, "foreground")
        if self.text is not None:
            validate_color(self.text, "text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='termkey',
        description='Show the keys and mouse buttons being pressed, centered in the terminal',
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-c', '--color', action='store_true',
                        help='Enable color mode with the default colors')
    parser.add_argument('--bg', metavar='COLOR',
                        help='Background color (implies --color)')
    parser.add_argument('--fg', metavar='COLOR',
                        help='Foreground color (implies --color)')
    parser.add_argument('--text', metavar='COLOR',
                        help='Color for printable characters of the label (implies --color)')
    parser.add_argument('--no-repeat', action='store_true',
                        help='Do not count held-key repeats as [xN]')
    parser.add_argument('--single-button', action='store_true',
                        help='Show only the last pressed mouse button instead of every held one')
    return parser


def config_from_args(args: argparse.Namespace) -> DisplayConfig:
    """
    Build a DisplayConfig from parsed arguments

    Raises:
        ConfigError: If a color name is not recognized
    """
    use_color = bool(args.color or args.bg or args.fg or args.text)
    return DisplayConfig(
        use_color=use_color,
        bg=args.bg or "default",
        fg=args.fg or "default",
        text=args.text,
        compress_repeats=not args.no_repeat,
        multi_button=not args.single_button,
    )


def parse_config(argv: Optional[List[str]] = None) -> DisplayConfig:
    """Parse the command line into a DisplayConfig (exits on --help)"""
    args = build_parser().parse_args(argv)
    return config_from_args(args)
