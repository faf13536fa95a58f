"""Custom value codec protocol.

Codecs serialize property values to the storage wire format and back. The
codec subsystem itself lives outside this package; the mapper only needs to
know which codec class a property declares and to instantiate it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TypeCodec(Protocol):
    """Value codec protocol."""

    def serialize(self, value: Any) -> Any:
        """Convert a property value to its storage representation."""
        ...

    def deserialize(self, raw: Any) -> Any:
        """Convert a storage representation back to a property value."""
        ...


class NoCodec:
    """Sentinel codec class meaning "no custom codec declared"."""

    def __init__(self) -> None:
        raise TypeError("NoCodec is a marker and cannot be instantiated")
