"""Mapping configuration and the strategies it bundles."""

from __future__ import annotations

from column_map.config.access import (
    AccessorOnlyPropertyAccessStrategy,
    DefaultPropertyAccessStrategy,
    FieldOnlyPropertyAccessStrategy,
    PropertyAccessStrategy,
    PropertySupplier,
)
from column_map.config.configuration import MappingConfiguration, MappingConfigurationBuilder
from column_map.config.hierarchy import (
    HIERARCHY_SCAN_DISABLED,
    DefaultHierarchyScanStrategy,
    DisabledHierarchyScanStrategy,
    HierarchyScanStrategy,
    walk,
)
from column_map.config.transience import (
    DEFAULT_TRANSIENT_PROPERTIES,
    NON_TRANSIENT_ANNOTATIONS,
    DefaultPropertyTransienceStrategy,
    OptInPropertyTransienceStrategy,
    OptOutPropertyTransienceStrategy,
    PropertyContext,
    PropertyTransienceStrategy,
)

__all__ = [
    "MappingConfiguration",
    "MappingConfigurationBuilder",
    "PropertyAccessStrategy",
    "PropertySupplier",
    "DefaultPropertyAccessStrategy",
    "FieldOnlyPropertyAccessStrategy",
    "AccessorOnlyPropertyAccessStrategy",
    "HierarchyScanStrategy",
    "DefaultHierarchyScanStrategy",
    "DisabledHierarchyScanStrategy",
    "HIERARCHY_SCAN_DISABLED",
    "walk",
    "PropertyTransienceStrategy",
    "PropertyContext",
    "OptOutPropertyTransienceStrategy",
    "OptInPropertyTransienceStrategy",
    "DefaultPropertyTransienceStrategy",
    "NON_TRANSIENT_ANNOTATIONS",
    "DEFAULT_TRANSIENT_PROPERTIES",
]
