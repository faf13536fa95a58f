"""column_map - map class properties to named, typed storage columns."""

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
)
from column_map.config.transience import (
    DefaultPropertyTransienceStrategy,
    OptInPropertyTransienceStrategy,
    OptOutPropertyTransienceStrategy,
    PropertyContext,
    PropertyTransienceStrategy,
)
from column_map.core.annotations import (
    ClusteringColumn,
    Column,
    Computed,
    Frozen,
    FrozenKey,
    FrozenValue,
    MappingAnnotation,
    PartitionKey,
    Transient,
    UDTField,
)
from column_map.core.codec import NoCodec, TypeCodec
from column_map.core.enums import PropertyAccessMode, PropertyMappingStrategy
from column_map.core.exceptions import (
    AccessError,
    CodecInstantiationError,
    ColumnMapError,
    ConfigurationError,
    IntrospectionError,
)
from column_map.mapping.mapper import PropertyMapper, map_properties
from column_map.mapping.property import MappedProperty

__all__ = [
    # Mapping
    "PropertyMapper",
    "map_properties",
    "MappedProperty",
    # Configuration
    "MappingConfiguration",
    "MappingConfigurationBuilder",
    # Access strategies
    "PropertyAccessStrategy",
    "PropertySupplier",
    "DefaultPropertyAccessStrategy",
    "FieldOnlyPropertyAccessStrategy",
    "AccessorOnlyPropertyAccessStrategy",
    # Transience strategies
    "PropertyTransienceStrategy",
    "PropertyContext",
    "OptOutPropertyTransienceStrategy",
    "OptInPropertyTransienceStrategy",
    "DefaultPropertyTransienceStrategy",
    # Hierarchy scan strategies
    "HierarchyScanStrategy",
    "DefaultHierarchyScanStrategy",
    "DisabledHierarchyScanStrategy",
    "HIERARCHY_SCAN_DISABLED",
    # Annotations
    "MappingAnnotation",
    "Column",
    "UDTField",
    "PartitionKey",
    "ClusteringColumn",
    "Computed",
    "Transient",
    "Frozen",
    "FrozenKey",
    "FrozenValue",
    # Codecs
    "TypeCodec",
    "NoCodec",
    # Enums
    "PropertyMappingStrategy",
    "PropertyAccessMode",
    # Exceptions
    "ColumnMapError",
    "ConfigurationError",
    "AccessError",
    "CodecInstantiationError",
    "IntrospectionError",
]
