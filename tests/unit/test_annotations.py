"""Unit tests for mapping annotations."""

from __future__ import annotations

import pytest

from column_map.core.annotations import (
    ANNOTATIONS_ATTRIBUTE,
    ClusteringColumn,
    Column,
    Computed,
    PartitionKey,
    Transient,
    declared_annotations,
)
from column_map.core.codec import NoCodec


class UpperCodec:
    def serialize(self, value: str) -> str:
        return value.upper()

    def deserialize(self, raw: str) -> str:
        return raw.lower()


class TestAnnotationValues:
    def test_defaults(self) -> None:
        column = Column()
        assert column.name == ""
        assert column.case_sensitive is False
        assert column.codec is NoCodec
        assert PartitionKey().position == 0
        assert ClusteringColumn().position == 0

    def test_frozen(self) -> None:
        key = PartitionKey(1)
        with pytest.raises(AttributeError):
            key.position = 2  # type: ignore[misc]

    def test_equal_by_value(self) -> None:
        assert Column(name="a") == Column(name="a")
        assert Transient() == Transient()
        assert hash(PartitionKey(1)) == hash(PartitionKey(1))
        assert PartitionKey(1) != ClusteringColumn(1)

    def test_codec_must_be_a_class(self) -> None:
        with pytest.raises(TypeError, match="codec"):
            Column(codec=UpperCodec())  # type: ignore[arg-type]

    def test_codec_class_accepted(self) -> None:
        assert Column(codec=UpperCodec).codec is UpperCodec


class TestAnnotationDecorators:
    def test_decorates_function(self) -> None:
        @PartitionKey(2)
        def get_id(self) -> int:
            return 1

        assert declared_annotations(get_id) == (PartitionKey(2),)

    def test_stacked_decorators_keep_declaration_order(self) -> None:
        @Column(name="x")
        @PartitionKey()
        def get_id(self) -> int:
            return 1

        assert declared_annotations(get_id) == (Column(name="x"), PartitionKey())

    def test_decorating_property_annotates_fget(self) -> None:
        def fget(self) -> int:
            return 1

        decorated = Transient()(property(fget))
        assert isinstance(decorated, property)
        assert getattr(fget, ANNOTATIONS_ATTRIBUTE) == (Transient(),)

    def test_rejects_non_callables(self) -> None:
        with pytest.raises(TypeError, match="Computed"):
            Computed("ttl(v)")(42)

    def test_undecorated_function_has_no_annotations(self) -> None:
        def plain(self) -> int:
            return 1

        assert declared_annotations(plain) == ()
