"""Declarative mapping metadata.

Annotations are attached either to a storage slot through ``typing.Annotated``::

    @dataclass
    class User:
        user_id: Annotated[int, PartitionKey()]
        name: Annotated[str, Column(name="UserName", case_sensitive=True)]

or to a getter, as a decorator or in its return annotation::

    class User:
        @property
        @PartitionKey()
        def user_id(self) -> int: ...

        def get_name(self) -> Annotated[str, Column(name="user_name")]: ...

The class of an annotation is its *kind*; a property carries at most one
annotation of each kind once metadata has been resolved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from column_map.core.codec import NoCodec

F = TypeVar("F")

# Function attribute holding decorator-applied annotations, in declaration order.
ANNOTATIONS_ATTRIBUTE = "__column_map_annotations__"


class MappingAnnotation:
    """Base class for every mapping annotation kind.

    Instances double as decorators for getters (plain functions or ``property``
    objects, in which case the annotation lands on ``fget``).
    """

    def __call__(self, target: F) -> F:
        function = target.fget if isinstance(target, property) else target
        if function is None or not callable(function):
            raise TypeError(
                f"{type(self).__name__} can only decorate functions or properties, "
                f"got {target!r}"
            )
        existing = getattr(function, ANNOTATIONS_ATTRIBUTE, ())
        # Decorators apply bottom-up; prepend to keep top-to-bottom order.
        setattr(function, ANNOTATIONS_ATTRIBUTE, (self, *existing))
        return target


def declared_annotations(function: Any) -> tuple[MappingAnnotation, ...]:
    """Return the annotations applied to *function* as decorators."""
    return tuple(getattr(function, ANNOTATIONS_ATTRIBUTE, ()))


def _check_codec(codec: Any) -> None:
    if not isinstance(codec, type):
        raise TypeError(f"codec must be a class, got {codec!r}")


@dataclass(frozen=True)
class Column(MappingAnnotation):
    """Maps a property to a table column.

    Args:
        name: Column name; defaults to the property name.
        case_sensitive: Quote the column name instead of lower-casing it.
        codec: Custom codec class, instantiated with no arguments.
    """

    name: str = ""
    case_sensitive: bool = False
    codec: type = NoCodec

    def __post_init__(self) -> None:
        _check_codec(self.codec)


@dataclass(frozen=True)
class UDTField(MappingAnnotation):
    """Maps a property to a field of a user-defined type."""

    name: str = ""
    case_sensitive: bool = False
    codec: type = NoCodec

    def __post_init__(self) -> None:
        _check_codec(self.codec)


@dataclass(frozen=True)
class PartitionKey(MappingAnnotation):
    """Marks a partition key component; *position* orders composite keys."""

    position: int = 0


@dataclass(frozen=True)
class ClusteringColumn(MappingAnnotation):
    """Marks a clustering column; *position* orders composite keys."""

    position: int = 0


@dataclass(frozen=True)
class Computed(MappingAnnotation):
    """Maps a property to a server-side expression such as ``ttl(v)``."""

    expression: str


@dataclass(frozen=True)
class Transient(MappingAnnotation):
    """Excludes a property from mapping."""


@dataclass(frozen=True)
class Frozen(MappingAnnotation):
    """Declares a frozen collection or UDT type, e.g. ``frozen<list<int>>``."""

    value: str = ""


@dataclass(frozen=True)
class FrozenKey(MappingAnnotation):
    """Declares that the key type of a map property is frozen."""


@dataclass(frozen=True)
class FrozenValue(MappingAnnotation):
    """Declares that the element or value type of a collection property is frozen."""
