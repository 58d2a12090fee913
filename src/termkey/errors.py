"""Exceptions raised by termkey"""


class TermkeyError(Exception):
    """Base class for termkey errors"""


class ConfigError(TermkeyError, ValueError):
    """Invalid command-line configuration"""


class EventSourceError(TermkeyError):
    """The input event source could not be opened or started"""
