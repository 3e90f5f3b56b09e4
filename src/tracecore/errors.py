"""Exceptions raised by tracecore.

Only construction problems are errors. A ray that misses, runs parallel to
a quad, or hits outside the requested interval is an ordinary Miss record,
never an exception.
"""


class TracerError(Exception):
    """Base class for all tracecore errors."""


class ShapeError(TracerError, ValueError):
    """A shape was built from invalid geometry.

    Raised for non-finite vectors, a non-positive radius, or quad edges that
    do not span a plane. These are programmer errors and are not meant to be
    recovered from.
    """


class MaterialError(TracerError, ValueError):
    """A material or texture was built from invalid parameters."""
