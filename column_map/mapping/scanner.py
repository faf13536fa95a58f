"""Member scanner.

Enumerates the storage slots and accessors of a walked class hierarchy and
merges them into one Candidate per property name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from column_map.core.introspection import (
    Accessor,
    PropertyDescriptor,
    Slot,
    declared_slots,
    introspect_accessors,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from column_map.config.access import PropertyAccessStrategy

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """Raw access surface of one property, before metadata and filtering."""

    property_name: str
    slot: Slot | None = None
    getter: Accessor | None = None
    setter: Accessor | None = None

    def __post_init__(self) -> None:
        if self.slot is None and self.getter is None and self.setter is None:
            raise ValueError(
                f"Candidate '{self.property_name}' needs a slot, a getter or a setter"
            )


def scan_slots(classes: Sequence[type]) -> dict[str, Slot]:
    """Storage slots of *classes*, most specific declaration first.

    A slot declared by a more specific class masks a same-named slot of an
    ancestor.
    """
    slots: dict[str, Slot] = {}
    for klass in classes:
        for slot in declared_slots(klass):
            slots.setdefault(slot.name, slot)
    return slots


def scan_accessors(classes: Sequence[type]) -> dict[str, PropertyDescriptor]:
    """Property descriptors of *classes*, each class introspected on its own."""
    descriptors: dict[str, PropertyDescriptor] = {}
    for klass in classes:
        for descriptor in introspect_accessors(klass):
            descriptors.setdefault(descriptor.name, descriptor)
    return descriptors


def _attach_backing_slot(candidates: dict[str, Candidate], name: str) -> None:
    """Fold a slot-only ``_name`` candidate into accessor property *name*.

    The merged candidate takes the place of ``_name`` in discovery order.
    """
    backing = candidates.get(f"_{name}")
    if backing is None or backing.getter is not None or backing.setter is not None:
        return
    if backing.slot is None or backing.slot.is_transient:
        return
    merged = replace(candidates.pop(name), slot=backing.slot)
    reordered: dict[str, Candidate] = {}
    for key, candidate in candidates.items():
        if key == backing.property_name:
            reordered[name] = merged
        else:
            reordered[key] = candidate
    candidates.clear()
    candidates.update(reordered)
    log.debug("Slot '%s' backs property '%s'", backing.property_name, name)


def scan(classes: Sequence[type], access_strategy: PropertyAccessStrategy) -> dict[str, Candidate]:
    """Merge slots and accessors of *classes* into candidates keyed by property name.

    ``classes[0]`` is the mapped class. Slots come first in the result, in walk
    order, followed by accessor-only properties. A slot-only ``_x`` backing an
    accessor property ``x`` that has no slot of its own is folded into ``x``.
    Scans disabled by the access strategy are skipped entirely.

    Raises:
        IntrospectionError: If a class's members cannot be enumerated.
    """
    mapped_class = classes[0]
    candidates: dict[str, Candidate] = {}

    if access_strategy.is_field_scan_allowed():
        for name, slot in scan_slots(classes).items():
            candidates[name] = Candidate(name, slot=slot)

    if access_strategy.is_accessor_scan_allowed():
        for name, descriptor in scan_accessors(classes).items():
            getter = access_strategy.locate_getter(mapped_class, descriptor)
            setter = access_strategy.locate_setter(mapped_class, descriptor)
            existing = candidates.get(name)
            if existing is not None:
                candidates[name] = replace(existing, getter=getter, setter=setter)
            elif getter is not None or setter is not None:
                candidates[name] = Candidate(name, getter=getter, setter=setter)
                _attach_backing_slot(candidates, name)

    log.debug(
        "Scanned %d classes of %s: %d candidate properties",
        len(classes),
        mapped_class.__qualname__,
        len(candidates),
    )
    return candidates
