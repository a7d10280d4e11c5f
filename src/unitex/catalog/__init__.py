"""Concrete units and prefixes for the unit-expression engine."""

from unitex.catalog import binary
from unitex.catalog import level
from unitex.catalog import si
from unitex.core import iterables
from unitex.core import unit


DEFAULT_UNITS = (
    si.BASE_UNITS
    + si.DERIVED_UNITS
    + si.COMMON_UNITS
    + binary.UNITS
    + level.UNITS
    + (unit.EMPTY_UNIT,)
)
"""The candidate units of every parse that does not name its own."""

DEFAULT_PREFIXES = tuple(
    iterables.unique(*(p for u in DEFAULT_UNITS for p in u.prefixes))
)
"""The prefixes of the default units, in order of first appearance."""

