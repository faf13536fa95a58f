"""Shared test fixtures."""

from __future__ import annotations

import pytest

from column_map.config.configuration import MappingConfiguration
from column_map.mapping.mapper import PropertyMapper
from column_map.mapping.property import MappedProperty


@pytest.fixture
def default_config() -> MappingConfiguration:
    """Default mapping configuration."""
    return MappingConfiguration()


@pytest.fixture
def map_by_name(default_config: MappingConfiguration):
    """Helper mapping a class and indexing the result by property name.

    Usage:
        props = map_by_name(User)
        props = map_by_name(User, config)
    """

    def _map(
        mapped_class: type,
        config: MappingConfiguration | None = None,
    ) -> dict[str, MappedProperty]:
        mapper = PropertyMapper(config if config is not None else default_config)
        return {p.property_name: p for p in mapper.map(mapped_class)}

    return _map

