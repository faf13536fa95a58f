"""
Example 02: Mapping Configuration

This example demonstrates accessor-based entities, opt-in mapping, hierarchy
scan bounds and a custom codec.
"""

from typing import Annotated

from column_map import (
    Column,
    MappingConfiguration,
    PartitionKey,
    PropertyAccessMode,
    PropertyMapper,
    PropertyMappingStrategy,
)


class Utf8Codec:
    """Codec converting text to bytes"""

    def serialize(self, value):
        return value.encode("utf-8")

    def deserialize(self, raw):
        return raw.decode("utf-8")


class Auditable:
    """Base class whose bookkeeping slots are never stored"""
    created_by: str
    updated_by: str


class Account(Auditable):
    """Entity exposing its state through accessors"""
    owner: Annotated[str, Column(codec=Utf8Codec)]

    def __init__(self, account_id, owner):
        self._id = account_id
        self.owner = owner
        self._balance = 0

    @PartitionKey()
    def get_id(self) -> int:
        return self._id

    def set_id(self, account_id: int) -> None:
        self._id = account_id

    def get_balance(self) -> int:
        return self._balance

    # Fluent setter
    def set_balance(self, balance: int) -> "Account":
        self._balance = balance
        return self


def show(title, properties):
    print(title)
    for prop in properties:
        codec = type(prop.custom_codec).__name__ if prop.custom_codec else "-"
        print(f"   - {prop.property_name} -> {prop.column_name} (codec={codec})")
    print()


def main():
    print("=== Mapping Configuration ===\n")

    # Accessors only, hierarchy bounded at Auditable (excluded)
    config = (
        MappingConfiguration.builder()
        .with_property_access_mode(PropertyAccessMode.ACCESSORS)
        .with_highest_ancestor(Auditable)
        .build()
    )
    show("1. Accessor Mapping:", PropertyMapper(config).map(Account))

    # Fields and accessors, ancestors scanned, only annotated properties mapped
    config = (
        MappingConfiguration.builder()
        .with_property_mapping_strategy(PropertyMappingStrategy.OPT_IN)
        .build()
    )
    mapper = PropertyMapper(config)
    properties = mapper.map(Account)
    show("2. Opt-in Mapping:", properties)

    # Values go through the accessors, including the fluent setter
    account = Account(1, "alice")
    mapped = {prop.property_name: prop for prop in PropertyMapper().map(Account)}
    mapped["balance"].set_value(account, 100)
    print(f"3. Balance through fluent setter: {mapped['balance'].get_value(account)}")


if __name__ == "__main__":
    main()
