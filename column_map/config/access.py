"""Property access strategies.

An access strategy decides which members are scanned (storage slots,
accessors or both), which accessor is the getter/setter of record for a
property, and how values are read from and written to entities.

Custom strategies implement :class:`PropertyAccessStrategy`; they may bypass
runtime reflection entirely by also implementing :class:`PropertySupplier`
and disabling both scans.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from column_map.core.exceptions import AccessError
from column_map.core.introspection import (
    Accessor,
    PropertyDescriptor,
    Slot,
    find_inherited_getter,
    find_relaxed_setter,
)

if TYPE_CHECKING:
    from column_map.mapping.property import MappedProperty


@runtime_checkable
class PropertyAccessStrategy(Protocol):
    """Property access strategy protocol."""

    def is_field_scan_allowed(self) -> bool:
        """Whether storage slots are scanned."""
        ...

    def is_accessor_scan_allowed(self) -> bool:
        """Whether properties and accessor methods are scanned."""
        ...

    def locate_getter(self, mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
        """Return the getter of record for *descriptor*, or None."""
        ...

    def locate_setter(self, mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
        """Return the setter of record for *descriptor*, or None."""
        ...

    def read_property(
        self,
        entity: Any,
        property_name: str,
        slot: Slot | None,
        getter: Accessor | None,
    ) -> Any:
        """Read a property value from *entity*."""
        ...

    def write_property(
        self,
        entity: Any,
        property_name: str,
        value: Any,
        slot: Slot | None,
        setter: Accessor | None,
    ) -> None:
        """Write a property value to *entity*."""
        ...


@runtime_checkable
class PropertySupplier(Protocol):
    """Supplies mapped properties without scanning the mapped class.

    Honored only when the access strategy disables both field and accessor
    scanning; the supplied properties are used as they are.
    """

    def supply_properties(self, mapped_class: type) -> Iterable[MappedProperty]:
        """Return the mapped properties of *mapped_class*."""
        ...


class DefaultPropertyAccessStrategy:
    """Scans slots and accessors; prefers accessors when reading and writing.

    The getter of record is the descriptor's read method or, failing that, a
    ``get_<name>`` / ``is_<name>`` method inherited by the mapped class. The
    setter of record is the descriptor's write method or, failing that, a
    "relaxed" ``set_<name>`` method whatever its return type, so fluent setters
    are recognized.
    """

    def is_field_scan_allowed(self) -> bool:
        return True

    def is_accessor_scan_allowed(self) -> bool:
        return True

    def locate_getter(self, mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
        if descriptor.read_method is not None:
            return descriptor.read_method
        return find_inherited_getter(mapped_class, descriptor)

    def locate_setter(self, mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
        if descriptor.write_method is not None:
            return descriptor.write_method
        return find_relaxed_setter(mapped_class, descriptor)

    def read_property(
        self,
        entity: Any,
        property_name: str,
        slot: Slot | None,
        getter: Accessor | None,
    ) -> Any:
        if getter is None and slot is None:
            raise AccessError("read", property_name, entity, "no getter or storage slot")
        try:
            # Getter first, direct slot access otherwise
            if getter is not None:
                return getter(entity)
            return slot.read(entity)  # type: ignore[union-attr]
        except Exception as e:
            raise AccessError("read", property_name, entity, str(e)) from e

    def write_property(
        self,
        entity: Any,
        property_name: str,
        value: Any,
        slot: Slot | None,
        setter: Accessor | None,
    ) -> None:
        if setter is None and slot is None:
            raise AccessError("write", property_name, entity, "no setter or storage slot")
        try:
            if setter is not None:
                setter(entity, value)
            else:
                slot.write(entity, value)  # type: ignore[union-attr]
        except Exception as e:
            raise AccessError("write", property_name, entity, str(e)) from e


class FieldOnlyPropertyAccessStrategy(DefaultPropertyAccessStrategy):
    """Maps storage slots only; accessors are ignored."""

    def is_accessor_scan_allowed(self) -> bool:
        return False


class AccessorOnlyPropertyAccessStrategy(DefaultPropertyAccessStrategy):
    """Maps properties and accessor methods only; storage slots are ignored."""

    def is_field_scan_allowed(self) -> bool:
        return False
