"""
Historical and non-SI temperature scales.

These units are not among the default candidates. Pass `UNITS`, or any of
its members, as extra units to use them; the default units then serve as
their compatible units.
"""

from unitex.catalog import prefixes as prefixes_
from unitex.core import unit as unit_


_units = [
    {
        'symbols': ('°De',),
        'name': 'degree Delisle',
        'shift': (
            lambda v: 373.15 - 2 * v / 3,
            lambda v: 1.5 * (373.15 - v),
        ),
    },
    {
        'symbols': ('°F',),
        'name': 'degree Fahrenheit',
        'shift': (
            lambda v: 5 * (v + 459.67) / 9,
            lambda v: 9 * v / 5 - 459.67,
        ),
    },
    {
        'symbols': ('°N',),
        'name': 'degree Newton',
        'shift': (
            lambda v: 100 * v / 33 + 273.15,
            lambda v: 0.33 * (v - 273.15),
        ),
    },
    {
        'symbols': ('°Ra', '°R'),
        'name': 'degree Rankine',
        'shift': (
            lambda v: 5 * v / 9,
            lambda v: 1.8 * v,
        ),
    },
    {
        'symbols': ('°Ré', '°Re', '°r'),
        'name': 'degree Réaumur',
        'shift': (
            lambda v: 1.25 * v + 273.15,
            lambda v: 0.8 * (v - 273.15),
        ),
    },
    {
        'symbols': ('°Rø',),
        'name': 'degree Rømer',
        'shift': (
            lambda v: 40 * (v - 7.5) / 21 + 273.15,
            lambda v: 21 * (v - 273.15) / 40 + 7.5,
        ),
    },
]


class TemperatureUnit(unit_.NamedUnit):
    """A temperature scale that converts to kelvin by a shifted product."""

    def __init__(self, symbols, name, shift) -> None:
        super().__init__(symbols, name, base={'K': 1}, shift=shift)

    def _lookup(self, symbol: str) -> unit_.Unit:
        from unitex.catalog import si
        return si._BY_SYMBOL[symbol]

    @property
    def prefixes(self):
        return prefixes_.DEFAULT

    def prefix_allowed(self, symbol: str) -> bool:
        return True

    @property
    def compatible_units(self):
        from unitex import catalog
        return catalog.DEFAULT_UNITS


UNITS = tuple(TemperatureUnit(**entry) for entry in _units)
"""The temperature scales in this module."""

DELISLE, FAHRENHEIT, NEWTON, RANKINE, REAUMUR, ROMER = UNITS

