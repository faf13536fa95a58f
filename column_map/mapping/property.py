"""Mapped property descriptors and their assembly.

A MappedProperty is the immutable result of mapping one property: column
name, declared type, key role and ordinal, optional custom codec, and bound
read/write operations delegating to the configured access strategy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from column_map.core.annotations import (
    ClusteringColumn,
    Column,
    Computed,
    MappingAnnotation,
    PartitionKey,
    UDTField,
)
from column_map.core.codec import NoCodec
from column_map.core.exceptions import (
    AccessError,
    CodecInstantiationError,
    ConfigurationError,
)
from column_map.core.introspection import Accessor, Slot
from column_map.mapping.metadata import MetadataBag

if TYPE_CHECKING:
    from column_map.config.configuration import MappingConfiguration
    from column_map.mapping.scanner import Candidate

A = TypeVar("A", bound=MappingAnnotation)

# Position of properties that are not key components
NO_POSITION = -1


@dataclass(frozen=True)
class MappedProperty:
    """Mapping of one property to one column.

    Equality covers every attribute except the bound read/write operations and
    the codec instance; two mapping passes over the same class and
    configuration produce equal properties.
    """

    property_name: str
    column_name: str
    property_type: Any
    custom_codec: Any = field(default=None, compare=False)
    partition_key: bool = False
    clustering_column: bool = False
    computed: bool = False
    position: int = NO_POSITION
    annotations: MetadataBag = field(default_factory=MetadataBag)
    reader: Callable[[Any], Any] | None = field(default=None, compare=False, repr=False)
    writer: Callable[[Any, Any], None] | None = field(default=None, compare=False, repr=False)

    @property
    def is_stored(self) -> bool:
        """True for properties backed by a column rather than a computed expression."""
        return not self.computed

    @property
    def custom_codec_class(self) -> type | None:
        return type(self.custom_codec) if self.custom_codec is not None else None

    def get_value(self, entity: Any) -> Any:
        """Read this property from *entity*.

        Raises:
            AccessError: If the value cannot be read.
        """
        if self.reader is None:
            raise AccessError("read", self.property_name, entity, "no read operation bound")
        return self.reader(entity)

    def set_value(self, entity: Any, value: Any) -> None:
        """Write *value* to this property of *entity*.

        Raises:
            AccessError: If the value cannot be written.
        """
        if self.writer is None:
            raise AccessError("write", self.property_name, entity, "no write operation bound")
        self.writer(entity, value)

    def has_annotation(self, kind: type) -> bool:
        return kind in self.annotations

    def get_annotation(self, kind: type[A]) -> A | None:
        return self.annotations.annotation(kind)

    def __str__(self) -> str:
        return self.property_name


def quote(identifier: str) -> str:
    """Quote *identifier* as a case-sensitive CQL identifier."""
    return '"' + identifier.replace('"', '""') + '"'


def _column_declaration(annotations: MetadataBag) -> Column | UDTField | None:
    column = annotations.annotation(Column)
    if column is not None:
        return column
    return annotations.annotation(UDTField)


def infer_column_name(property_name: str, annotations: MetadataBag) -> str:
    """Column name of a property.

    Computed properties use their expression verbatim. Otherwise the name is
    the ``Column`` (or ``UDTField``) name when given, else the property name;
    case-sensitive names are quoted, all others lower-cased.
    """
    computed = annotations.annotation(Computed)
    if computed is not None:
        return computed.expression
    case_sensitive = False
    column_name = property_name
    declaration = _column_declaration(annotations)
    if declaration is not None:
        case_sensitive = declaration.case_sensitive
        if declaration.name:
            column_name = declaration.name
    return quote(column_name) if case_sensitive else column_name.lower()


def infer_position(annotations: MetadataBag) -> int:
    partition_key = annotations.annotation(PartitionKey)
    if partition_key is not None:
        return partition_key.position
    clustering_column = annotations.annotation(ClusteringColumn)
    if clustering_column is not None:
        return clustering_column.position
    return NO_POSITION


def infer_property_type(slot: Slot | None, getter: Accessor | None) -> Any:
    """Getter return type, or the slot type when the getter is unannotated."""
    if getter is not None and getter.return_type is not Any:
        return getter.return_type
    if slot is not None:
        return slot.declared_type
    return Any


def create_custom_codec(property_name: str, annotations: MetadataBag) -> Any:
    """Instantiate the declared custom codec, or return None.

    Raises:
        CodecInstantiationError: If the codec class cannot be called without arguments.
    """
    declaration = _column_declaration(annotations)
    codec_class = declaration.codec if declaration is not None else NoCodec
    if codec_class is NoCodec:
        return None
    try:
        return codec_class()
    except Exception as e:
        raise CodecInstantiationError(codec_class, property_name) from e


def _declaring_class(candidate: Candidate) -> type:
    member = candidate.slot or candidate.getter or candidate.setter
    return member.owner  # type: ignore[union-attr]


def assemble(
    candidate: Candidate,
    annotations: MetadataBag,
    configuration: MappingConfiguration,
    mapped_class: type | None = None,
) -> MappedProperty:
    """Build the MappedProperty of a non-transient candidate.

    Args:
        candidate: The scanned property.
        annotations: Its resolved metadata.
        configuration: Supplies the access strategy bound into the result.
        mapped_class: Class being mapped, used in error messages; defaults to
            the class declaring the candidate's members.

    Raises:
        ConfigurationError: If the property is unreadable, unwritable, or both
            a partition key and a clustering column.
        CodecInstantiationError: If the declared codec cannot be instantiated.
    """
    if mapped_class is None:
        mapped_class = _declaring_class(candidate)
    property_name = candidate.property_name
    slot, getter, setter = candidate.slot, candidate.getter, candidate.setter

    if slot is None and getter is None:
        raise ConfigurationError(mapped_class, property_name, "is not readable")
    if slot is None and setter is None:
        raise ConfigurationError(mapped_class, property_name, "is not writable")
    if PartitionKey in annotations and ClusteringColumn in annotations:
        raise ConfigurationError(
            mapped_class,
            property_name,
            "cannot be both a partition key and a clustering column",
        )

    access_strategy = configuration.property_access_strategy

    def reader(entity: Any) -> Any:
        return access_strategy.read_property(entity, property_name, slot, getter)

    def writer(entity: Any, value: Any) -> None:
        access_strategy.write_property(entity, property_name, value, slot, setter)

    return MappedProperty(
        property_name=property_name,
        column_name=infer_column_name(property_name, annotations),
        property_type=infer_property_type(slot, getter),
        custom_codec=create_custom_codec(property_name, annotations),
        partition_key=PartitionKey in annotations,
        clustering_column=ClusteringColumn in annotations,
        computed=Computed in annotations,
        position=infer_position(annotations),
        annotations=annotations,
        reader=reader,
        writer=writer,
    )
