"""Metadata resolution.

Collects the mapping annotations of a property from an explicit, ordered list
of sources and folds them into a MetadataBag holding one annotation per kind.

Source precedence, highest first:

1. the getter of record
2. the storage slot
3. getters the getter overrides, from the nearest ancestor to the farthest
   (``object`` excluded)
4. same-named members of Protocols directly implemented by the getter's class
   or one of its ancestors

A kind found in a higher-precedence source is never replaced by a lower one.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, NamedTuple, TypeVar

from column_map.core.annotations import MappingAnnotation
from column_map.core.introspection import (
    Accessor,
    is_protocol,
    linear_ancestors,
    positional_parameters,
)
from column_map.mapping.scanner import Candidate

A = TypeVar("A", bound=MappingAnnotation)


class MetadataBag(Mapping[type, MappingAnnotation]):
    """Immutable mapping from annotation kind to annotation instance.

    When built from an iterable of annotations, the first annotation of each
    kind wins.
    """

    __slots__ = ("_annotations",)

    def __init__(
        self,
        annotations: Mapping[type, MappingAnnotation] | Iterable[MappingAnnotation] = (),
    ) -> None:
        if isinstance(annotations, Mapping):
            resolved = dict(annotations)
        else:
            resolved = {}
            for annotation in annotations:
                resolved.setdefault(type(annotation), annotation)
        self._annotations: dict[type, MappingAnnotation] = resolved

    def __getitem__(self, kind: type) -> MappingAnnotation:
        return self._annotations[kind]

    def __iter__(self) -> Iterator[type]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def __hash__(self) -> int:
        return hash(frozenset(self._annotations.items()))

    def __repr__(self) -> str:
        return f"MetadataBag({list(self._annotations.values())!r})"

    def annotation(self, kind: type[A]) -> A | None:
        """Return the annotation of the given kind, or None."""
        return self._annotations.get(kind)  # type: ignore[return-value]


class MetadataSource(NamedTuple):
    """One place annotations of a property were read from."""

    origin: str
    annotations: tuple[MappingAnnotation, ...]


def _describe(accessor: Accessor) -> str:
    return f"{accessor.owner.__qualname__}.{accessor.name}"


def _overridden_member(getter: Accessor, klass: type) -> Accessor | None:
    """Member of *klass* with the getter's name and parameter count, if any."""
    member: Any = klass.__dict__.get(getter.name)
    if isinstance(member, property):
        member = member.fget
    if not inspect.isfunction(member):
        return None
    if len(positional_parameters(member)) != len(positional_parameters(getter.function)):
        return None
    return Accessor(getter.name, member, klass)


def _inherited_sources(getter: Accessor) -> list[MetadataSource]:
    ancestors = [klass for klass in linear_ancestors(getter.owner)[1:] if klass is not object]
    sources = []
    for klass in ancestors:
        overridden = _overridden_member(getter, klass)
        if overridden is not None:
            origin = f"overridden {_describe(overridden)}"
            sources.append(MetadataSource(origin, overridden.annotations))
    for klass in [getter.owner, *ancestors]:
        for base in klass.__bases__:
            if not is_protocol(base):
                continue
            contract = _overridden_member(getter, base)
            if contract is not None:
                origin = f"protocol {_describe(contract)}"
                sources.append(MetadataSource(origin, contract.annotations))
    return sources


def metadata_sources(candidate: Candidate) -> list[MetadataSource]:
    """Return the annotation sources of *candidate*, highest precedence first."""
    sources = []
    getter = candidate.getter
    if getter is not None:
        sources.append(MetadataSource(f"getter {_describe(getter)}", getter.annotations))
    if candidate.slot is not None:
        slot = candidate.slot
        origin = f"slot {slot.owner.__qualname__}.{slot.name}"
        sources.append(MetadataSource(origin, slot.annotations))
    if getter is not None:
        sources.extend(_inherited_sources(getter))
    return sources


def resolve_metadata(candidate: Candidate) -> MetadataBag:
    """Resolve the annotations of *candidate*, one per kind."""
    return MetadataBag(
        annotation for source in metadata_sources(candidate) for annotation in source.annotations
    )
