"""Hierarchy scan strategies.

Decide which classes of a mapped class's ancestor chain are scanned for
properties and annotations. Only the linear chain (the MRO without Protocol
classes) is walked; Protocols are consulted by the metadata resolver only.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from column_map.core.introspection import linear_ancestors

# Framework classes whose members never describe entity properties
FRAMEWORK_ROOTS: tuple[type, ...] = (BaseModel,)


@runtime_checkable
class HierarchyScanStrategy(Protocol):
    """Hierarchy scan strategy protocol."""

    def filter_class_hierarchy(self, mapped_class: type) -> list[type]:
        """Return the classes to scan, most specific first, starting with *mapped_class*."""
        ...


class DefaultHierarchyScanStrategy(BaseModel):
    """Scans every ancestor up to a common highest ancestor.

    By default the highest ancestor is ``object``, excluded: every ancestor of
    a mapped class except ``object`` itself is scanned.

    Pydantic models also stop before ``BaseModel``, unless ``BaseModel`` is
    itself the configured highest ancestor.

    Args:
        highest_ancestor: Class where the walk stops.
        include_highest_ancestor: Whether *highest_ancestor* itself is scanned.
    """

    model_config = ConfigDict(frozen=True)

    highest_ancestor: type = object
    include_highest_ancestor: bool = False

    def filter_class_hierarchy(self, mapped_class: type) -> list[type]:
        classes: list[type] = []
        for klass in linear_ancestors(mapped_class):
            if klass in FRAMEWORK_ROOTS and klass is not self.highest_ancestor:
                break
            if klass is not self.highest_ancestor or self.include_highest_ancestor:
                classes.append(klass)
            if klass is self.highest_ancestor:
                break
        return classes


class DisabledHierarchyScanStrategy(BaseModel):
    """Scans the mapped class only; ancestors are ignored."""

    model_config = ConfigDict(frozen=True)

    def filter_class_hierarchy(self, mapped_class: type) -> list[type]:
        return [mapped_class]


HIERARCHY_SCAN_DISABLED = DisabledHierarchyScanStrategy()


def walk(mapped_class: type, strategy: HierarchyScanStrategy | None = None) -> list[type]:
    """Classes to scan for *mapped_class*, most specific first.

    The mapped class always comes first, even when a strategy omits it.
    """
    if strategy is None:
        strategy = DefaultHierarchyScanStrategy()
    classes = [mapped_class]
    for klass in strategy.filter_class_hierarchy(mapped_class):
        if klass not in classes:
            classes.append(klass)
    return classes
