"""Class introspection primitives.

Turns Python classes into the raw material of a mapping pass: storage slots
(annotated or ``__slots__`` attributes), accessors (``property`` objects and
``get_x`` / ``is_x`` / ``set_x`` methods) and per-class property descriptors.
Nothing here decides what is mapped; that is left to the strategies.
"""

from __future__ import annotations

import dataclasses
import inspect
import re
import types
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Generic, get_origin

from column_map.core.annotations import MappingAnnotation, declared_annotations
from column_map.core.exceptions import IntrospectionError

# get_foo() / is_foo() -> bool / set_foo(value) -> None
_ACCESSOR_PATTERN = re.compile(r"^(get|is|set)_([A-Za-z]\w*)$")

_MISSING = object()


def is_dunder(name: str) -> bool:
    """Return True for ``__name__``-style names reserved by the interpreter."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_protocol(cls: type) -> bool:
    """Return True if *cls* is a ``typing.Protocol`` class."""
    return bool(cls.__dict__.get("_is_protocol", False))


def linear_ancestors(cls: type) -> list[type]:
    """Return *cls* followed by its ancestors, ``Protocol`` and ``Generic`` removed."""
    return [klass for klass in cls.__mro__ if klass is not Generic and not is_protocol(klass)]


def unwrap_annotated(annotation: Any) -> tuple[Any, tuple[MappingAnnotation, ...]]:
    """Split ``Annotated[T, ...]`` into ``T`` and its mapping annotations."""
    if get_origin(annotation) is Annotated:
        metadata = tuple(m for m in annotation.__metadata__ if isinstance(m, MappingAnnotation))
        return annotation.__origin__, metadata
    return annotation, ()


def _evaluated_annotations(obj: Any) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(obj, eval_str=True))
    except (NameError, SyntaxError, TypeError, AttributeError) as e:
        raise IntrospectionError(obj, f"unresolvable annotation ({e})") from e


def function_annotations(function: Callable[..., Any]) -> dict[str, Any]:
    """Evaluated annotations of *function*, including ``return``."""
    return _evaluated_annotations(function)


def positional_parameters(function: Callable[..., Any]) -> list[inspect.Parameter]:
    """Positional parameters of *function*, or ``[]`` when it takes ``*args``."""
    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError) as e:
        raise IntrospectionError(function, f"no signature ({e})") from e
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return []
    return [
        p
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]


def class_attribute(cls: type, name: str) -> tuple[type | None, Any]:
    """Static attribute lookup along the MRO, without invoking descriptors."""
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return klass, klass.__dict__[name]
    return None, _MISSING


@dataclass(frozen=True)
class Slot:
    """A declared storage slot of a class."""

    name: str
    declared_type: Any
    owner: type
    annotations: tuple[MappingAnnotation, ...] = ()
    # InitVar pseudo fields are never stored on the instance.
    is_transient: bool = False

    def read(self, entity: Any) -> Any:
        """Read the slot directly, bypassing properties and ``__getattribute__`` hooks."""
        _, attribute = class_attribute(type(entity), self.name)
        if isinstance(attribute, types.MemberDescriptorType):
            return attribute.__get__(entity, type(entity))
        namespace = getattr(entity, "__dict__", None)
        if namespace is not None and self.name in namespace:
            return namespace[self.name]
        if attribute is not _MISSING and not hasattr(type(attribute), "__get__"):
            # Class-level default of a never-assigned slot
            return attribute
        raise AttributeError(f"'{type(entity).__qualname__}' object has no stored '{self.name}'")

    def write(self, entity: Any, value: Any) -> None:
        """Write the slot directly, bypassing properties and ``__setattr__`` hooks."""
        _, attribute = class_attribute(type(entity), self.name)
        if isinstance(attribute, types.MemberDescriptorType):
            attribute.__set__(entity, value)
            return
        namespace = getattr(entity, "__dict__", None)
        if namespace is None:
            raise AttributeError(
                f"'{type(entity).__qualname__}' object has no storage for '{self.name}'"
            )
        namespace[self.name] = value


@dataclass(frozen=True)
class Accessor:
    """A getter or setter function together with the class declaring it.

    Calls dispatch on the entity's own class, so an override declared by a
    subclass runs even when the accessor was found on an ancestor.
    """

    name: str
    function: Callable[..., Any]
    owner: type
    # "fget" or "fset" when the accessor belongs to a property object
    property_role: str | None = None

    def __call__(self, entity: Any, *args: Any) -> Any:
        return self.resolve(type(entity))(entity, *args)

    def resolve(self, entity_class: type) -> Callable[..., Any]:
        """Return the function *entity_class* uses for this accessor."""
        owner, member = class_attribute(entity_class, self.name)
        if owner is None or owner is self.owner:
            return self.function
        if self.property_role is not None:
            member = getattr(member, self.property_role) if isinstance(member, property) else None
        if not inspect.isfunction(member):
            return self.function
        return member

    @property
    def annotations(self) -> tuple[MappingAnnotation, ...]:
        """Annotations applied as decorators, then those of the return annotation."""
        _, returned = unwrap_annotated(function_annotations(self.function).get("return"))
        return declared_annotations(self.function) + returned

    @property
    def return_type(self) -> Any:
        annotation = function_annotations(self.function).get("return", _MISSING)
        if annotation is _MISSING:
            return Any
        return unwrap_annotated(annotation)[0]

    @property
    def value_type(self) -> Any:
        """Declared type of a setter's value parameter."""
        parameters = positional_parameters(self.function)
        if len(parameters) < 2:
            return Any
        annotation = function_annotations(self.function).get(parameters[1].name, Any)
        return unwrap_annotated(annotation)[0]


@dataclass(frozen=True)
class PropertyDescriptor:
    """Accessor pair for one property name, as declared by a single class."""

    name: str
    read_method: Accessor | None
    write_method: Accessor | None
    property_type: Any
    owner: type


def _is_class_var(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _is_init_var(annotation: Any) -> bool:
    return annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar)


def _own_slot_names(cls: type) -> list[str]:
    declared = cls.__dict__.get("__slots__", ())
    if isinstance(declared, str):
        declared = (declared,)
    return [name for name in declared if not is_dunder(name)]


def declared_slots(cls: type) -> list[Slot]:
    """Instance storage slots declared by *cls* itself, in declaration order.

    ``ClassVar`` annotations (class-level state) and dunder names are skipped.
    ``InitVar`` annotations are returned but flagged transient.

    Raises:
        IntrospectionError: If an annotation of *cls* cannot be evaluated.
    """
    annotations = _evaluated_annotations(cls)
    slots = []
    for name, annotation in annotations.items():
        if is_dunder(name) or _is_class_var(annotation):
            continue
        is_transient = _is_init_var(annotation)
        if is_transient:
            annotation = annotation.type if isinstance(annotation, dataclasses.InitVar) else Any
        declared_type, metadata = unwrap_annotated(annotation)
        slots.append(Slot(name, declared_type, cls, metadata, is_transient))
    for name in _own_slot_names(cls):
        if name not in annotations:
            slots.append(Slot(name, Any, cls))
    return slots


def _returns_none(function: Callable[..., Any]) -> bool:
    returned = function_annotations(function).get("return", None)
    return returned is None or returned is type(None)


def _accessor_methods(cls: type) -> Iterator[tuple[str, str, Accessor]]:
    """Yield ``(prefix, property_name, accessor)`` for conventional accessor methods."""
    for member_name, member in vars(cls).items():
        if not inspect.isfunction(member):
            continue
        match = _ACCESSOR_PATTERN.match(member_name)
        if match is None:
            continue
        prefix, property_name = match.groups()
        accessor = Accessor(member_name, member, cls)
        arity = len(positional_parameters(member))
        if prefix == "get" and arity == 1:
            yield prefix, property_name, accessor
        elif prefix == "is" and arity == 1 and accessor.return_type is bool:
            yield prefix, property_name, accessor
        elif prefix == "set" and arity == 2 and _returns_none(member):
            yield prefix, property_name, accessor


def _property_type(getter: Accessor | None, setter: Accessor | None) -> Any:
    if getter is not None:
        return getter.return_type
    if setter is not None:
        return setter.value_type
    return Any


def introspect_accessors(cls: type) -> list[PropertyDescriptor]:
    """Property descriptors for accessors declared by *cls* itself.

    ``property`` objects come first, then ``get_x`` / ``is_x`` / ``set_x``
    method pairs. When several members describe the same property name the
    first one wins.

    Raises:
        IntrospectionError: If an accessor signature cannot be evaluated.
    """
    descriptors: dict[str, PropertyDescriptor] = {}

    for member_name, member in vars(cls).items():
        if not isinstance(member, property) or is_dunder(member_name):
            continue
        getter = (
            Accessor(member_name, member.fget, cls, "fget") if member.fget is not None else None
        )
        setter = (
            Accessor(member_name, member.fset, cls, "fset") if member.fset is not None else None
        )
        if getter is None and setter is None:
            continue
        descriptors.setdefault(
            member_name,
            PropertyDescriptor(member_name, getter, setter, _property_type(getter, setter), cls),
        )

    readers: dict[str, Accessor] = {}
    writers: dict[str, Accessor] = {}
    for prefix, property_name, accessor in _accessor_methods(cls):
        target = writers if prefix == "set" else readers
        target.setdefault(property_name, accessor)

    for property_name in [*readers, *(n for n in writers if n not in readers)]:
        getter = readers.get(property_name)
        setter = writers.get(property_name)
        descriptors.setdefault(
            property_name,
            PropertyDescriptor(property_name, getter, setter, _property_type(getter, setter), cls),
        )

    return list(descriptors.values())


def find_relaxed_setter(mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
    """Locate ``set_<name>`` on *mapped_class* whatever its return type.

    Supports fluent setters returning ``self``. The method must be a plain
    instance method taking exactly one value whose declared type, when both
    sides are annotated, equals the property type.
    """
    setter_name = f"set_{descriptor.name}"
    owner, member = class_attribute(mapped_class, setter_name)
    if owner is None or not inspect.isfunction(member):
        return None
    if len(positional_parameters(member)) != 2:
        return None
    setter = Accessor(setter_name, member, owner)
    expected = descriptor.property_type
    actual = setter.value_type
    if expected is not Any and actual is not Any and actual != expected:
        return None
    return setter


def find_inherited_getter(mapped_class: type, descriptor: PropertyDescriptor) -> Accessor | None:
    """Locate ``get_<name>`` or ``is_<name>`` on *mapped_class* or an ancestor.

    Covers subclasses overriding only the setter of an inherited accessor pair.
    ``is_<name>`` must be annotated to return ``bool``.
    """
    for prefix in ("get", "is"):
        getter_name = f"{prefix}_{descriptor.name}"
        owner, member = class_attribute(mapped_class, getter_name)
        if owner is None or not inspect.isfunction(member):
            continue
        if len(positional_parameters(member)) != 1:
            continue
        getter = Accessor(getter_name, member, owner)
        if prefix == "is" and getter.return_type is not bool:
            continue
        return getter
    return None
