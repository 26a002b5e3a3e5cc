"""
Exceptions raised by the engine.

Each error also subclasses ValueError, so callers that already catch
python-chess parse errors (all ValueError subclasses) handle these the same way.
"""


class HexbotError(Exception):
    """Base class for all engine errors."""


class InvalidDepthError(HexbotError, ValueError):
    """Search depth is not a non-negative integer within the configured bound."""


class IllegalMoveError(HexbotError, ValueError):
    """A strict move application was asked to play an illegal move."""


class InvalidRecordError(HexbotError, ValueError):
    """A move record could not be parsed or contains an illegal move."""


class ConfigError(HexbotError, ValueError):
    """Configuration read from the environment is malformed."""
