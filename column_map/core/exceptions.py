"""column_map exception hierarchy.

All exceptions are column_map-specific. Errors raised by user code or by the
interpreter's introspection machinery are always chained, never exposed raw.
"""

from __future__ import annotations

from typing import Any


class ColumnMapError(Exception):
    """Base exception for all column_map errors."""


# --- Configuration ---


class ConfigurationError(ColumnMapError):
    """Raised when a mapped class cannot be mapped under the active configuration.

    Reported eagerly while mapping properties, never deferred to first use.
    """

    def __init__(self, mapped_class: type, property_name: str, detail: str) -> None:
        self.mapped_class = mapped_class
        self.property_name = property_name
        super().__init__(f"Property '{property_name}' in {mapped_class.__qualname__} {detail}")


# --- Introspection ---


class IntrospectionError(ColumnMapError):
    """Raised when the members of a class cannot be enumerated."""

    def __init__(self, inspected: Any, detail: str) -> None:
        self.inspected = inspected
        name = getattr(inspected, "__qualname__", repr(inspected))
        super().__init__(f"Cannot introspect {name}: {detail}")


# --- Codec ---


class CodecInstantiationError(ColumnMapError):
    """Raised when a declared custom codec cannot be built with no arguments."""

    def __init__(self, codec_class: type, property_name: str) -> None:
        self.codec_class = codec_class
        self.property_name = property_name
        super().__init__(
            f"Can't create an instance of codec {codec_class.__qualname__} "
            f"for property '{property_name}'"
        )


# --- Access ---


class AccessError(ColumnMapError):
    """Raised when reading or writing a property of an entity fails."""

    def __init__(self, action: str, property_name: str, entity: Any, detail: str = "") -> None:
        self.action = action
        self.property_name = property_name
        self.entity_class = type(entity)
        message = (
            f"Unable to {action} property '{property_name}' in {self.entity_class.__qualname__}"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
