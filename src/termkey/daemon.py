#!/usr/bin/env python3
"""
termkey - show the keys and mouse buttons being pressed

Captures global keyboard and mouse input and draws a label such as
``CONTROL_L + SHIFT_L + A`` centered in the terminal, for screencasts.

Usage:
    python -m termkey [-c] [--bg=COLOR] [--fg=COLOR] [--text=COLOR]

Signal handlers only raise flags; the main loop notices them, redraws after
a resize and tears everything down on SIGINT/SIGTERM.
"""

import signal
import sys
from typing import List, Optional

from .config import DisplayConfig, parse_config
from .errors import ConfigError, EventSourceError, TermkeyError
from .presenter import Presenter
from .session import Session


# Seconds to wait for an event before checking the flags again
POLL_TIMEOUT = 0.010


class TermkeyDaemon:
    """Runs the capture -> compose -> render loop"""

    def __init__(self, config: Optional[DisplayConfig] = None,
                 monitor=None,
                 presenter: Optional[Presenter] = None,
                 session: Optional[Session] = None):
        """
        Initialize daemon

        Args:
            config: Display settings from the command line
            monitor: Event source (global pynput listeners by default)
            presenter: Renderer (stdout by default)
            session: Input/display state (built from presenter and config by default)
        """
        self.config = config or DisplayConfig()
        if monitor is None:
            from .input_monitor import InputMonitor
            monitor = InputMonitor()
        self.monitor = monitor
        self.presenter = presenter or Presenter(self.config)
        self.session = session or Session(self.presenter, self.config)

        self._shutdown_requested = False
        self._resize_pending = False
        self._stopped = False

    def request_shutdown(self):
        self._shutdown_requested = True

    def request_resize(self):
        self._resize_pending = True

    def _setup_signal_handlers(self):
        """Setup signal handlers for clean shutdown and terminal resize"""
        def shutdown_handler(signum, frame):
            self.request_shutdown()

        def resize_handler(signum, frame):
            self.request_resize()

        signal.signal(signal.SIGINT, shutdown_handler)
        signal.signal(signal.SIGTERM, shutdown_handler)
        if hasattr(signal, 'SIGWINCH'):
            signal.signal(signal.SIGWINCH, resize_handler)
        if hasattr(signal, 'SIGBREAK'):
            signal.signal(signal.SIGBREAK, shutdown_handler)

    def start(self, install_signals: bool = True) -> int:
        """
        Start capturing and run until shutdown is requested

        Returns:
            Process exit status (0 on clean shutdown, 1 on setup failure)
        """
        try:
            if install_signals:
                self._setup_signal_handlers()

            self.monitor.probe()
            if not self.monitor.start():
                raise EventSourceError("Cannot install the keyboard/mouse listeners")

            self.presenter.start()
            self.run()

        except TermkeyError as e:
            self.stop()
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            self.stop()
            print(f"ERROR: termkey crashed: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            return 1

        self.stop()
        return 0

    def run(self):
        """Dispatch loop: one event at a time, flags checked between polls"""
        while not self._shutdown_requested:
            if self._resize_pending:
                self._resize_pending = False
                self.session.resize()

            event = self.monitor.get(POLL_TIMEOUT)
            if event is not None:
                self.session.handle(event)
            elif not self.monitor.is_running():
                raise EventSourceError("Input listeners stopped unexpectedly")

    def stop(self):
        """Stop listeners and restore the terminal; safe to call twice"""
        if self._stopped:
            return
        self._stopped = True

        try:
            self.monitor.stop()
        finally:
            self.presenter.restore()


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    try:
        config = parse_config(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        daemon = TermkeyDaemon(config)
    except KeyboardInterrupt:
        # Interrupted while loading the input backend, before handlers exist
        sys.exit(0)
    except ImportError as e:
        # pynput refuses to import when no display backend is reachable
        print(f"Error: Cannot load the input backend: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(daemon.start())


if __name__ == '__main__':
    main()
