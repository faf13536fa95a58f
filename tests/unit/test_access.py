"""Unit tests for property access strategies."""

from __future__ import annotations

from typing import Any

import pytest

from column_map.config.access import (
    AccessorOnlyPropertyAccessStrategy,
    DefaultPropertyAccessStrategy,
    FieldOnlyPropertyAccessStrategy,
)
from column_map.core.exceptions import AccessError
from column_map.core.introspection import Accessor, Slot, introspect_accessors


class Account:
    balance: int

    def __init__(self) -> None:
        self.balance = 10
        self.reads = 0

    def get_balance(self) -> int:
        self.reads += 1
        return self.balance * 100

    def set_balance(self, balance: int) -> None:
        self.balance = balance // 100


class Locked:
    secret: str

    def get_secret(self) -> str:
        raise PermissionError("locked")

    def set_secret(self, secret: str) -> None:
        raise PermissionError("locked")


class Fluent:
    def get_v(self) -> int:
        return 0

    def set_v(self, v: int) -> Fluent:
        return self


def _accessor(owner: type, name: str) -> Accessor:
    return Accessor(name, owner.__dict__[name], owner)


@pytest.fixture
def strategy() -> DefaultPropertyAccessStrategy:
    return DefaultPropertyAccessStrategy()


class TestScanFlags:
    @pytest.mark.parametrize(
        ("strategy_class", "fields", "accessors"),
        [
            (DefaultPropertyAccessStrategy, True, True),
            (FieldOnlyPropertyAccessStrategy, True, False),
            (AccessorOnlyPropertyAccessStrategy, False, True),
        ],
    )
    def test_flags(self, strategy_class: type, fields: bool, accessors: bool) -> None:
        instance: Any = strategy_class()
        assert instance.is_field_scan_allowed() is fields
        assert instance.is_accessor_scan_allowed() is accessors


class TestLocateAccessors:
    def test_conventional_pair(self, strategy: DefaultPropertyAccessStrategy) -> None:
        descriptor = introspect_accessors(Account)[0]
        getter = strategy.locate_getter(Account, descriptor)
        setter = strategy.locate_setter(Account, descriptor)
        assert getter is not None
        assert getter.name == "get_balance"
        assert setter is not None
        assert setter.name == "set_balance"

    def test_relaxed_setter(self, strategy: DefaultPropertyAccessStrategy) -> None:
        descriptor = introspect_accessors(Fluent)[0]
        assert descriptor.write_method is None
        setter = strategy.locate_setter(Fluent, descriptor)
        assert setter is not None
        assert setter.name == "set_v"


class TestReadProperty:
    def test_prefers_getter(self, strategy: DefaultPropertyAccessStrategy) -> None:
        entity = Account()
        slot = Slot("balance", int, Account)
        getter = _accessor(Account, "get_balance")
        assert strategy.read_property(entity, "balance", slot, getter) == 1000
        assert entity.reads == 1

    def test_falls_back_to_slot(self, strategy: DefaultPropertyAccessStrategy) -> None:
        entity = Account()
        assert strategy.read_property(entity, "balance", Slot("balance", int, Account), None) == 10
        assert entity.reads == 0

    def test_nothing_to_read(self, strategy: DefaultPropertyAccessStrategy) -> None:
        with pytest.raises(AccessError, match="Unable to read property 'balance' in Account"):
            strategy.read_property(Account(), "balance", None, None)

    def test_failing_getter_is_wrapped(self, strategy: DefaultPropertyAccessStrategy) -> None:
        getter = _accessor(Locked, "get_secret")
        with pytest.raises(AccessError, match="locked") as excinfo:
            strategy.read_property(Locked(), "secret", None, getter)
        assert isinstance(excinfo.value.__cause__, PermissionError)
        assert excinfo.value.entity_class is Locked

    def test_missing_storage_is_wrapped(self, strategy: DefaultPropertyAccessStrategy) -> None:
        with pytest.raises(AccessError) as excinfo:
            strategy.read_property(Locked(), "secret", Slot("secret", str, Locked), None)
        assert isinstance(excinfo.value.__cause__, AttributeError)


class TestWriteProperty:
    def test_prefers_setter(self, strategy: DefaultPropertyAccessStrategy) -> None:
        entity = Account()
        setter = _accessor(Account, "set_balance")
        strategy.write_property(entity, "balance", 500, Slot("balance", int, Account), setter)
        assert entity.balance == 5

    def test_falls_back_to_slot(self, strategy: DefaultPropertyAccessStrategy) -> None:
        entity = Account()
        strategy.write_property(entity, "balance", 500, Slot("balance", int, Account), None)
        assert entity.balance == 500

    def test_nothing_to_write(self, strategy: DefaultPropertyAccessStrategy) -> None:
        with pytest.raises(AccessError, match="write"):
            strategy.write_property(Account(), "balance", 1, None, None)

    def test_failing_setter_is_wrapped(self, strategy: DefaultPropertyAccessStrategy) -> None:
        setter = _accessor(Locked, "set_secret")
        with pytest.raises(AccessError, match="Unable to write property 'secret'"):
            strategy.write_property(Locked(), "secret", "x", None, setter)
