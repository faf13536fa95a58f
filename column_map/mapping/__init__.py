"""Mapping layer - turn classes into mapped property descriptors."""

from __future__ import annotations

from column_map.mapping.mapper import PropertyMapper, map_properties
from column_map.mapping.metadata import MetadataBag, MetadataSource, resolve_metadata
from column_map.mapping.property import MappedProperty, assemble
from column_map.mapping.scanner import Candidate, scan

__all__ = [
    "PropertyMapper",
    "map_properties",
    "MappedProperty",
    "assemble",
    "MetadataBag",
    "MetadataSource",
    "resolve_metadata",
    "Candidate",
    "scan",
]
