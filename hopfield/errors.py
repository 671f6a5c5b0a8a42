"""Exception hierarchy for Hopfield associative memories.

Every error raised for caller misuse or malformed input derives from
``HopfieldError`` and from the builtin exception a caller would normally
expect (``ValueError`` for bad arguments, ``RuntimeError`` for calls made in
the wrong lifecycle state).
"""


class HopfieldError(Exception):
    """Base class for all Hopfield network errors."""


class InvalidDimensionError(HopfieldError, ValueError):
    """Network or generator dimension is not a positive integer."""


class DimensionMismatchError(HopfieldError, ValueError):
    """A pattern, state or bias length differs from the network dimension."""


class InvalidValueError(HopfieldError, ValueError):
    """A pattern or state contains an element other than +1 or -1."""


class EmptyPatternSetError(HopfieldError, ValueError):
    """Training was requested with no patterns."""


class NotTrainedError(HopfieldError, RuntimeError):
    """Recall or energy was requested before a weight matrix exists."""


class CorruptDataError(HopfieldError, ValueError):
    """A persisted weight matrix failed validation on load."""
