"""Mapping configuration.

MappingConfiguration is a frozen Pydantic model bundling the strategies that
drive a mapping pass. Build it once, then share it read-only::

    config = (
        MappingConfiguration.builder()
        .with_property_mapping_strategy(PropertyMappingStrategy.OPT_IN)
        .with_highest_ancestor(BaseEntity, included=True)
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from column_map.config.access import (
    AccessorOnlyPropertyAccessStrategy,
    DefaultPropertyAccessStrategy,
    FieldOnlyPropertyAccessStrategy,
    PropertyAccessStrategy,
)
from column_map.config.hierarchy import (
    HIERARCHY_SCAN_DISABLED,
    DefaultHierarchyScanStrategy,
    HierarchyScanStrategy,
)
from column_map.config.transience import (
    DEFAULT_TRANSIENT_PROPERTIES,
    OptInPropertyTransienceStrategy,
    OptOutPropertyTransienceStrategy,
    PropertyTransienceStrategy,
)
from column_map.core.enums import PropertyAccessMode, PropertyMappingStrategy

_ACCESS_STRATEGIES: dict[PropertyAccessMode, type] = {
    PropertyAccessMode.BOTH: DefaultPropertyAccessStrategy,
    PropertyAccessMode.FIELDS: FieldOnlyPropertyAccessStrategy,
    PropertyAccessMode.ACCESSORS: AccessorOnlyPropertyAccessStrategy,
}

_TRANSIENCE_STRATEGIES: dict[PropertyMappingStrategy, type] = {
    PropertyMappingStrategy.OPT_OUT: OptOutPropertyTransienceStrategy,
    PropertyMappingStrategy.OPT_IN: OptInPropertyTransienceStrategy,
}


class MappingConfiguration(BaseModel):
    """Immutable bundle of property scan strategies.

    Defaults: slots and accessors are both scanned, every property is mapped
    unless excluded, all ancestors but ``object`` are scanned, and the
    ``class`` / ``metaClass`` property names are treated as transient.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    property_access_strategy: PropertyAccessStrategy = Field(
        default_factory=DefaultPropertyAccessStrategy
    )
    property_transience_strategy: PropertyTransienceStrategy = Field(
        default_factory=OptOutPropertyTransienceStrategy
    )
    hierarchy_scan_strategy: HierarchyScanStrategy = Field(
        default_factory=DefaultHierarchyScanStrategy
    )
    transient_properties: frozenset[str] = DEFAULT_TRANSIENT_PROPERTIES

    @field_validator("transient_properties", mode="before")
    @classmethod
    def _normalize_transient_properties(cls, value: Any) -> Any:
        if isinstance(value, str):
            return frozenset({value})
        if isinstance(value, Iterable):
            return frozenset(value)
        return value

    @classmethod
    def builder(cls) -> MappingConfigurationBuilder:
        """Return a fluent builder starting from the defaults."""
        return MappingConfigurationBuilder()


class MappingConfigurationBuilder:
    """Fluent builder for MappingConfiguration instances."""

    def __init__(self) -> None:
        self._access_strategy: PropertyAccessStrategy = DefaultPropertyAccessStrategy()
        self._transience_strategy: PropertyTransienceStrategy = OptOutPropertyTransienceStrategy()
        self._hierarchy_scan_strategy: HierarchyScanStrategy = DefaultHierarchyScanStrategy()
        self._transient_properties: frozenset[str] = DEFAULT_TRANSIENT_PROPERTIES

    def with_property_access_strategy(
        self, strategy: PropertyAccessStrategy
    ) -> MappingConfigurationBuilder:
        """Use a specific (possibly custom) access strategy."""
        self._access_strategy = strategy
        return self

    def with_property_access_mode(self, mode: PropertyAccessMode) -> MappingConfigurationBuilder:
        """Use the built-in access strategy scanning the given member kinds."""
        self._access_strategy = _ACCESS_STRATEGIES[mode]()
        return self

    def with_property_transience_strategy(
        self, strategy: PropertyTransienceStrategy
    ) -> MappingConfigurationBuilder:
        """Use a specific (possibly custom) transience strategy."""
        self._transience_strategy = strategy
        return self

    def with_property_mapping_strategy(
        self, strategy: PropertyMappingStrategy
    ) -> MappingConfigurationBuilder:
        """Use the built-in opt-out or opt-in transience strategy."""
        self._transience_strategy = _TRANSIENCE_STRATEGIES[strategy]()
        return self

    def with_hierarchy_scan_strategy(
        self, strategy: HierarchyScanStrategy
    ) -> MappingConfigurationBuilder:
        """Use a specific (possibly custom) hierarchy scan strategy."""
        self._hierarchy_scan_strategy = strategy
        return self

    def with_highest_ancestor(
        self, highest_ancestor: type, included: bool = False
    ) -> MappingConfigurationBuilder:
        """Scan ancestors up to *highest_ancestor*, itself included only if *included*."""
        self._hierarchy_scan_strategy = DefaultHierarchyScanStrategy(
            highest_ancestor=highest_ancestor,
            include_highest_ancestor=included,
        )
        return self

    def without_hierarchy_scan(self) -> MappingConfigurationBuilder:
        """Scan the mapped class only."""
        self._hierarchy_scan_strategy = HIERARCHY_SCAN_DISABLED
        return self

    def with_transient_properties(self, *names: str) -> MappingConfigurationBuilder:
        """Replace the denylist of property names treated as transient.

        The defaults (``class``, ``metaClass``) are dropped unless listed again.
        """
        self._transient_properties = frozenset(names)
        return self

    def build(self) -> MappingConfiguration:
        """Create the immutable configuration."""
        return MappingConfiguration(
            property_access_strategy=self._access_strategy,
            property_transience_strategy=self._transience_strategy,
            hierarchy_scan_strategy=self._hierarchy_scan_strategy,
            transient_properties=self._transient_properties,
        )
