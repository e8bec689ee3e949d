"""Exception types raised across randviz."""

from __future__ import annotations


class RandvizError(Exception):
    """Base class for all randviz errors."""


class InvalidArgument(RandvizError, ValueError):
    """A caller passed an unknown source, mode, or a bad count."""


class SourceReadError(RandvizError, IOError):
    """The random device could not be opened or returned a short read."""


class NetworkError(RandvizError, ConnectionError):
    """The client could not fetch bytes from the server."""
