"""Byte source implementations and the identifier registry."""

from __future__ import annotations

from randviz.errors import InvalidArgument
from randviz.sources.base import ByteSource
from randviz.sources.device import DeviceSource
from randviz.sources.lcg import LCGGenerator, LCGSource
from randviz.sources.stdlib import StdlibRandomSource

ALL_SOURCES: list[type[ByteSource]] = [
    DeviceSource,
    LCGSource,
    StdlibRandomSource,
]

SOURCES_BY_NAME: dict[str, type[ByteSource]] = {cls.name: cls for cls in ALL_SOURCES}
SOURCE_NAMES: tuple[str, ...] = tuple(SOURCES_BY_NAME)


def create_source(name: str, **options) -> ByteSource:
    """Instantiate the source registered as *name*.

    Unknown identifiers raise ``InvalidArgument``; there is no fallback.
    """
    try:
        cls = SOURCES_BY_NAME[name]
    except (KeyError, TypeError):
        raise InvalidArgument(
            f"unknown source {name!r}, expected one of {', '.join(SOURCE_NAMES)}"
        ) from None
    return cls(**options)


__all__ = [
    "ALL_SOURCES",
    "SOURCE_NAMES",
    "ByteSource",
    "DeviceSource",
    "LCGGenerator",
    "LCGSource",
    "StdlibRandomSource",
    "create_source",
]
