"""Property transience strategies.

A transient property is excluded from mapping. Transience is decided after
metadata resolution, so strategies see the full set of annotations a property
carries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from column_map.core.annotations import (
    ClusteringColumn,
    Column,
    Computed,
    Frozen,
    FrozenKey,
    FrozenValue,
    PartitionKey,
    Transient,
    UDTField,
)
from column_map.core.introspection import Accessor, Slot

if TYPE_CHECKING:
    from column_map.mapping.metadata import MetadataBag

log = logging.getLogger(__name__)

# Kinds that mark a property as explicitly mapped.
NON_TRANSIENT_ANNOTATIONS: frozenset[type] = frozenset(
    {
        Column,
        PartitionKey,
        ClusteringColumn,
        UDTField,
        Computed,
        Frozen,
        FrozenKey,
        FrozenValue,
    }
)

# "class" comes from a get_class() accessor, "metaClass" from Groovy-style metaprogramming.
DEFAULT_TRANSIENT_PROPERTIES: frozenset[str] = frozenset({"class", "metaClass"})


@dataclass(frozen=True)
class PropertyContext:
    """Everything known about a property when its transience is decided."""

    mapped_class: type
    property_name: str
    slot: Slot | None
    getter: Accessor | None
    setter: Accessor | None
    annotations: MetadataBag
    transient_properties: frozenset[str] = field(default=DEFAULT_TRANSIENT_PROPERTIES)

    def has_mapping_annotation(self) -> bool:
        """True if any annotation kind marks the property as explicitly mapped."""
        return not NON_TRANSIENT_ANNOTATIONS.isdisjoint(self.annotations.keys())


@runtime_checkable
class PropertyTransienceStrategy(Protocol):
    """Property transience strategy protocol.

    ``context.transient_properties`` is the configured denylist. Strategies are
    free to ignore it; the built-in strategies never let it exclude a property
    that carries an annotation from ``NON_TRANSIENT_ANNOTATIONS``, and custom
    strategies should follow the same rule unless they document otherwise.
    """

    def is_transient(self, context: PropertyContext) -> bool:
        """Return True if the property must not be mapped."""
        ...


class OptOutPropertyTransienceStrategy:
    """Maps every property unless it is explicitly excluded.

    A property is transient if it is annotated :class:`Transient`, if its slot
    is an ``InitVar`` pseudo field, or if its name is in the configured denylist
    and it carries no explicit mapping annotation.
    """

    def is_transient(self, context: PropertyContext) -> bool:
        if Transient in context.annotations:
            log.debug("Property '%s' annotated transient", context.property_name)
            return True
        if context.slot is not None and context.slot.is_transient:
            log.debug("Property '%s' declared as InitVar", context.property_name)
            return True
        # Explicit mapping annotations take precedence over the denylist
        return (
            context.property_name in context.transient_properties
            and not context.has_mapping_annotation()
        )


DefaultPropertyTransienceStrategy = OptOutPropertyTransienceStrategy


class OptInPropertyTransienceStrategy:
    """Maps only properties carrying an explicit mapping annotation."""

    def is_transient(self, context: PropertyContext) -> bool:
        return not context.has_mapping_annotation()
