"""Contract tests for strategy protocol compliance and custom strategies."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Annotated, Any

import pytest

from column_map.config.access import (
    AccessorOnlyPropertyAccessStrategy,
    DefaultPropertyAccessStrategy,
    FieldOnlyPropertyAccessStrategy,
    PropertyAccessStrategy,
    PropertySupplier,
)
from column_map.config.configuration import MappingConfiguration
from column_map.config.hierarchy import (
    HIERARCHY_SCAN_DISABLED,
    DefaultHierarchyScanStrategy,
    HierarchyScanStrategy,
)
from column_map.config.transience import (
    OptInPropertyTransienceStrategy,
    OptOutPropertyTransienceStrategy,
    PropertyContext,
    PropertyTransienceStrategy,
)
from column_map.core.annotations import Column, PartitionKey
from column_map.core.codec import TypeCodec
from column_map.core.introspection import Accessor, Slot
from column_map.mapping.mapper import PropertyMapper
from column_map.mapping.metadata import MetadataBag
from column_map.mapping.property import MappedProperty


class Foo4:
    def __init__(self) -> None:
        self._k = 0
        self._v = 0

    def get_k(self) -> int:
        return self._k

    def set_k(self, k: int) -> None:
        self._k = k

    def get_v(self) -> int:
        return self._v

    def set_v(self, v: int) -> Foo4:
        self._v = v
        return self


class NoReflectionPropertyAccessStrategy(DefaultPropertyAccessStrategy):
    """Hand-written mapping for Foo4; never inspects the class."""

    def is_field_scan_allowed(self) -> bool:
        return False

    def is_accessor_scan_allowed(self) -> bool:
        return False

    def supply_properties(self, mapped_class: type) -> Iterable[MappedProperty]:
        return (
            MappedProperty(
                "k",
                "k",
                int,
                partition_key=True,
                position=0,
                annotations=MetadataBag([PartitionKey()]),
                reader=lambda entity: entity.get_k(),
                writer=lambda entity, value: entity.set_k(value),
            ),
            MappedProperty(
                "v",
                "v",
                int,
                reader=lambda entity: entity.get_v(),
                writer=lambda entity, value: entity.set_v(value),
            ),
        )


class NoScanPropertyAccessStrategy(DefaultPropertyAccessStrategy):
    def is_field_scan_allowed(self) -> bool:
        return False

    def is_accessor_scan_allowed(self) -> bool:
        return False


class Record:
    """Entity keeping its values in a mapping rather than attributes."""

    key: Annotated[str, PartitionKey()]
    payload: Annotated[bytes, Column(name="data")]

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}


class RecordAccessStrategy(FieldOnlyPropertyAccessStrategy):
    """Reads and writes Record values through its ``values`` mapping."""

    def read_property(
        self, entity: Any, property_name: str, slot: Slot | None, getter: Accessor | None
    ) -> Any:
        return entity.values[property_name]

    def write_property(
        self,
        entity: Any,
        property_name: str,
        value: Any,
        slot: Slot | None,
        setter: Accessor | None,
    ) -> None:
        entity.values[property_name] = value


class NotUpperCased:
    """Transience strategy excluding properties whose names are all upper-case."""

    def is_transient(self, context: PropertyContext) -> bool:
        return context.property_name.isupper()


class Constants:
    TTL: int
    name: str


class SelfOnlyHierarchyScanStrategy:
    def filter_class_hierarchy(self, mapped_class: type) -> list[type]:
        return [mapped_class]


class Parent:
    inherited: int


class Child(Parent):
    own: int


class Utf8Codec:
    def serialize(self, value: str) -> bytes:
        return value.encode()

    def deserialize(self, raw: bytes) -> str:
        return raw.decode()


class TestProtocolCompliance:
    @pytest.mark.parametrize(
        "strategy",
        [
            DefaultPropertyAccessStrategy(),
            FieldOnlyPropertyAccessStrategy(),
            AccessorOnlyPropertyAccessStrategy(),
            NoReflectionPropertyAccessStrategy(),
        ],
    )
    def test_access_strategies(self, strategy: Any) -> None:
        assert isinstance(strategy, PropertyAccessStrategy)

    def test_supplier(self) -> None:
        assert isinstance(NoReflectionPropertyAccessStrategy(), PropertySupplier)
        assert not isinstance(DefaultPropertyAccessStrategy(), PropertySupplier)

    @pytest.mark.parametrize(
        "strategy",
        [OptOutPropertyTransienceStrategy(), OptInPropertyTransienceStrategy(), NotUpperCased()],
    )
    def test_transience_strategies(self, strategy: Any) -> None:
        assert isinstance(strategy, PropertyTransienceStrategy)

    @pytest.mark.parametrize(
        "strategy",
        [DefaultHierarchyScanStrategy(), HIERARCHY_SCAN_DISABLED, SelfOnlyHierarchyScanStrategy()],
    )
    def test_hierarchy_scan_strategies(self, strategy: Any) -> None:
        assert isinstance(strategy, HierarchyScanStrategy)

    def test_codec(self) -> None:
        assert isinstance(Utf8Codec(), TypeCodec)


class TestEscapeHatch:
    def test_supplied_properties_used_verbatim(self) -> None:
        config = (
            MappingConfiguration.builder()
            .with_property_access_strategy(NoReflectionPropertyAccessStrategy())
            .build()
        )
        props = {p.property_name: p for p in PropertyMapper(config).map(Foo4)}
        assert set(props) == {"k", "v"}
        assert props["k"].partition_key

        entity = Foo4()
        props["v"].set_value(entity, 1)
        assert props["v"].get_value(entity) == 1

    def test_no_scan_without_supplier_maps_nothing(self, caplog: pytest.LogCaptureFixture) -> None:
        config = MappingConfiguration(property_access_strategy=NoScanPropertyAccessStrategy())
        with caplog.at_level(logging.WARNING, logger="column_map"):
            assert PropertyMapper(config).map(Foo4) == ()
        assert "scans neither fields nor accessors" in caplog.text


class TestCustomStrategies:
    def test_custom_access_strategy(self, map_by_name) -> None:
        config = MappingConfiguration(property_access_strategy=RecordAccessStrategy())
        props = map_by_name(Record, config)
        assert props["payload"].column_name == "data"

        entity = Record()
        props["key"].set_value(entity, "a")
        assert entity.values == {"key": "a"}
        assert props["key"].get_value(entity) == "a"

    def test_custom_transience_strategy(self, map_by_name) -> None:
        config = MappingConfiguration(property_transience_strategy=NotUpperCased())
        assert set(map_by_name(Constants, config)) == {"name"}

    def test_custom_hierarchy_scan_strategy(self, map_by_name) -> None:
        config = MappingConfiguration(hierarchy_scan_strategy=SelfOnlyHierarchyScanStrategy())
        assert set(map_by_name(Child, config)) == {"own"}
        assert set(map_by_name(Child)) == {"own", "inherited"}

    def test_codec_instance_bound(self, map_by_name) -> None:
        class Document:
            body: Annotated[str, Column(codec=Utf8Codec)]

        prop = map_by_name(Document)["body"]
        assert isinstance(prop.custom_codec, Utf8Codec)
        assert prop.custom_codec.serialize("hi") == b"hi"
