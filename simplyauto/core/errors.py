"""Exception types raised by the engine.

None of these are fatal: every failed call leaves its session in the
state it was in before the call.
"""


class SimplyAutoError(Exception):
    """Base class for all engine errors."""


class ValidationError(SimplyAutoError, ValueError):
    """A config value (interval, jitter, repeat count, speed…) is out of range."""


class CaptureError(SimplyAutoError):
    """The input event source could not be installed or removed."""


class BusyError(SimplyAutoError):
    """Another session currently occupies the coordinator."""


class StorageError(SimplyAutoError):
    """A recording could not be saved or loaded."""
