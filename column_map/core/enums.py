"""Property scan enumerations."""

from __future__ import annotations

from enum import Enum


class PropertyMappingStrategy(Enum):
    """Which properties are mapped when no transience strategy is given explicitly."""

    # Every discovered property is mapped unless excluded.
    OPT_OUT = "opt_out"
    # Only properties carrying explicit mapping metadata are mapped.
    OPT_IN = "opt_in"


class PropertyAccessMode(Enum):
    """Which member kinds the default access strategies scan."""

    BOTH = "both"
    FIELDS = "fields"
    ACCESSORS = "accessors"
