"""
Example 01: Basic Mapping

This example demonstrates mapping dataclasses and Pydantic models to columns
and reading/writing entity values through the mapped properties.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import BaseModel

from column_map import (
    ClusteringColumn,
    Column,
    PartitionKey,
    Transient,
    map_properties,
)


@dataclass
class Reading:
    """Sensor reading stored in a time series table"""
    sensor_id: Annotated[str, PartitionKey()]
    taken_at: Annotated[int, ClusteringColumn()]
    value: float
    unitName: Annotated[str, Column(name="UnitName", case_sensitive=True)]
    cached_label: Annotated[str, Transient()] = ""


class Sensor(BaseModel):
    """Sensor model using Pydantic"""
    sensor_id: Annotated[str, PartitionKey()]
    location: str
    calibration: Optional[float] = None


def describe(properties):
    for prop in properties:
        role = "partition key" if prop.partition_key else (
            "clustering column" if prop.clustering_column else "regular"
        )
        print(f"   - {prop.property_name} -> {prop.column_name} ({role}, position={prop.position})")


def main():
    print("=== Basic Mapping ===\n")

    # Map a dataclass with the default configuration
    print("1. Dataclass Mapping:")
    reading_properties = map_properties(Reading)
    describe(reading_properties)
    print()

    # Read and write values through the mapped properties
    print("2. Value Access:")
    reading = Reading("s-1", 1700000000, 21.5, "celsius")
    by_name = {prop.property_name: prop for prop in reading_properties}
    by_name["value"].set_value(reading, 22.0)
    print(f"   value = {by_name['value'].get_value(reading)}\n")

    # Pydantic models: the scan stops before BaseModel itself
    print("3. Pydantic Model Mapping:")
    describe(map_properties(Sensor))


if __name__ == "__main__":
    main()
