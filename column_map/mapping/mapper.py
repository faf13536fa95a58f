"""Property mapper.

Runs a complete mapping pass over one class:

    walk hierarchy -> scan members -> resolve metadata -> filter transient -> assemble

Results are not cached; callers are expected to memoize per
(class, configuration).
"""

from __future__ import annotations

import logging

from column_map.config.access import PropertySupplier
from column_map.config.configuration import MappingConfiguration
from column_map.config.hierarchy import walk
from column_map.config.transience import PropertyContext
from column_map.mapping.metadata import resolve_metadata
from column_map.mapping.property import MappedProperty, assemble
from column_map.mapping.scanner import scan

log = logging.getLogger(__name__)


class PropertyMapper:
    """Maps the properties of classes under one configuration.

    Args:
        configuration: Strategies to apply. Defaults to ``MappingConfiguration()``.
    """

    def __init__(self, configuration: MappingConfiguration | None = None) -> None:
        if configuration is None:
            configuration = MappingConfiguration()
        self._configuration = configuration

    @property
    def configuration(self) -> MappingConfiguration:
        return self._configuration

    def map(self, mapped_class: type) -> tuple[MappedProperty, ...]:
        """Map the properties of *mapped_class*.

        Returns:
            The non-transient properties in discovery order: storage slots in
            hierarchy walk order, then accessor-only properties.

        Raises:
            IntrospectionError: If the class's members cannot be enumerated.
            ConfigurationError: If a property cannot be read or written, or
                claims two key roles.
            CodecInstantiationError: If a declared codec cannot be instantiated.
        """
        configuration = self._configuration
        access_strategy = configuration.property_access_strategy

        if not (
            access_strategy.is_field_scan_allowed() or access_strategy.is_accessor_scan_allowed()
        ):
            if isinstance(access_strategy, PropertySupplier):
                log.debug("Properties of %s supplied by access strategy", mapped_class.__qualname__)
                return tuple(access_strategy.supply_properties(mapped_class))
            log.warning(
                "Access strategy %s scans neither fields nor accessors; %s maps no properties",
                type(access_strategy).__name__,
                mapped_class.__qualname__,
            )
            return ()

        classes = walk(mapped_class, configuration.hierarchy_scan_strategy)
        candidates = scan(classes, access_strategy)
        transience_strategy = configuration.property_transience_strategy

        properties = []
        for candidate in candidates.values():
            annotations = resolve_metadata(candidate)
            context = PropertyContext(
                mapped_class=mapped_class,
                property_name=candidate.property_name,
                slot=candidate.slot,
                getter=candidate.getter,
                setter=candidate.setter,
                annotations=annotations,
                transient_properties=configuration.transient_properties,
            )
            if transience_strategy.is_transient(context):
                log.debug(
                    "Skipping transient property '%s' of %s",
                    candidate.property_name,
                    mapped_class.__qualname__,
                )
                continue
            properties.append(assemble(candidate, annotations, configuration, mapped_class))

        return tuple(properties)


def map_properties(
    mapped_class: type,
    configuration: MappingConfiguration | None = None,
) -> tuple[MappedProperty, ...]:
    """Map the properties of *mapped_class*; see :meth:`PropertyMapper.map`."""
    return PropertyMapper(configuration).map(mapped_class)
