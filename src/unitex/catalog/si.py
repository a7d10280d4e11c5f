"""
Units of the International System of Units and units accepted for use with
it. Gram, rather than kilogram, is the basic unit of mass, so that every mass
unit admits the usual prefixes; the factor of each unit that involves mass
accounts for this.
"""

import typing

import numpy

from unitex.catalog import prefixes as prefixes_
from unitex.core import unit as unit_


_base_units = [
    {'symbols': ('s',), 'name': 'second', 'quantity': 'time'},
    {'symbols': ('m',), 'name': 'meter', 'quantity': 'length'},
    {
        'symbols': ('kg',),
        'name': 'kilogram',
        'quantity': 'mass',
        'factor': 1e3,
        'base': {'g': 1},
    },
    {'symbols': ('g',), 'name': 'gram', 'quantity': 'mass'},
    {'symbols': ('A',), 'name': 'ampere', 'quantity': 'electric current'},
    {'symbols': ('K',), 'name': 'kelvin', 'quantity': 'temperature'},
    {'symbols': ('mol',), 'name': 'mole', 'quantity': 'amount'},
    {'symbols': ('cd',), 'name': 'candela', 'quantity': 'luminous intensity'},
]


_derived_units = [
    {
        'symbols': ('Bq',),
        'name': 'becquerel',
        'quantity': 'radioactivity',
        'base': {'s': -1},
    },
    {
        'symbols': ('C',),
        'name': 'coulomb',
        'quantity': 'electric charge',
        'base': {'s': 1, 'A': 1},
    },
    {
        'symbols': ('°C',),
        'name': 'degree Celsius',
        'quantity': 'temperature',
        'base': {'K': 1},
        'shift': (lambda v: v + 273.15, lambda v: v - 273.15),
    },
    {
        'symbols': ('F',),
        'name': 'farad',
        'quantity': 'capacitance',
        'factor': 1e-3,
        'base': {'g': -1, 'm': -2, 's': 4, 'A': 2},
    },
    {
        'symbols': ('Gy',),
        'name': 'gray',
        'quantity': 'absorbed dose',
        'base': {'m': 2, 's': -2},
    },
    {
        'symbols': ('H',),
        'name': 'henry',
        'quantity': 'inductance',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -2, 'A': -2},
    },
    {
        'symbols': ('Hz',),
        'name': 'hertz',
        'quantity': 'frequency',
        'base': {'s': -1},
    },
    {
        'symbols': ('J',),
        'name': 'joule',
        'quantity': 'energy',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -2},
    },
    {
        'symbols': ('kat',),
        'name': 'katal',
        'quantity': 'catalytic activity',
        'base': {'mol': 1, 's': -1},
    },
    {
        'symbols': ('lm',),
        'name': 'lumen',
        'quantity': 'luminous flux',
        'base': {'cd': 1},
    },
    {
        'symbols': ('lx',),
        'name': 'lux',
        'quantity': 'illuminance',
        'base': {'m': -2, 'cd': 1},
    },
    {
        'symbols': ('N',),
        'name': 'newton',
        'quantity': 'force',
        'factor': 1e3,
        'base': {'g': 1, 'm': 1, 's': -2},
    },
    {
        'symbols': ('Ω', 'Ohm', 'ohm'),
        'name': 'ohm',
        'quantity': 'electric resistance',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -3, 'A': -2},
    },
    {
        'symbols': ('Pa',),
        'name': 'pascal',
        'quantity': 'pressure',
        'factor': 1e3,
        'base': {'g': 1, 'm': -1, 's': -2},
    },
    {
        'symbols': ('rad',),
        'name': 'radian',
        'quantity': 'plane angle',
        'base': {},
    },
    {
        'symbols': ('℧', 'S', 'mho'),
        'name': 'siemens',
        'quantity': 'electric conductance',
        'factor': 1e-3,
        'base': {'g': -1, 'm': -2, 's': 3, 'A': 2},
    },
    {
        'symbols': ('Sv',),
        'name': 'sievert',
        'quantity': 'equivalent dose',
        'base': {'m': 2, 's': -2},
    },
    {
        'symbols': ('sr',),
        'name': 'steradian',
        'quantity': 'solid angle',
        'base': {},
    },
    {
        'symbols': ('T',),
        'name': 'tesla',
        'quantity': 'magnetic induction',
        'factor': 1e3,
        'base': {'g': 1, 's': -2, 'A': -1},
    },
    {
        'symbols': ('V',),
        'name': 'volt',
        'quantity': 'electric potential',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -3, 'A': -1},
    },
    {
        'symbols': ('W',),
        'name': 'watt',
        'quantity': 'power',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -3},
    },
    {
        'symbols': ('Wb',),
        'name': 'weber',
        'quantity': 'magnetic flux',
        'factor': 1e3,
        'base': {'g': 1, 'm': 2, 's': -2, 'A': -1},
    },
]


_common_units = [
    {'symbols': ('yr',), 'name': 'year', 'factor': 31557600, 'base': {'s': 1}},
    {
        'symbols': ('au',),
        'name': 'astronomical unit',
        'factor': 149597870700.0,
        'base': {'m': 1},
    },
    {'symbols': ('d',), 'name': 'day', 'factor': 86400, 'base': {'s': 1}},
    {'symbols': ('h',), 'name': 'hour', 'factor': 3600, 'base': {'s': 1}},
    {'symbols': ('min',), 'name': 'minute', 'factor': 60, 'base': {'s': 1}},
    {'symbols': ('°',), 'name': 'degree', 'factor': numpy.pi / 180},
    {'symbols': ("'",), 'name': 'arcminute', 'factor': numpy.pi / 10800},
    {'symbols': ("''",), 'name': 'arcsecond', 'factor': numpy.pi / 648000},
    {
        'symbols': ('hectare',),
        'name': 'hectare',
        'factor': 1e4,
        'base': {'m': 2},
    },
    {'symbols': ('l', 'L'), 'name': 'liter', 'factor': 1e-3, 'base': {'m': 3}},
    {'symbols': ('t',), 'name': 'tonne', 'factor': 1e6, 'base': {'g': 1}},
    {
        'symbols': ('pc',),
        'name': 'parsec',
        'factor': 648000 * 1.495978707e11 / numpy.pi,
        'base': {'m': 1},
    },
    {
        'symbols': ('ly',),
        'name': 'light-year',
        'factor': 9460730472580800.0,
        'base': {'m': 1},
    },
    {
        'symbols': ('Å', 'ångström', 'angstrom', 'Angstrom'),
        'name': 'ångström',
        'factor': 1e-10,
        'base': {'m': 1},
    },
    {
        'symbols': ('eV',),
        'name': 'electronvolt',
        'factor': 1.602176634e-16,
        'base': {'g': 1, 'm': 2, 's': -2},
    },
    {
        'symbols': ('Da',),
        'name': 'dalton',
        'factor': 1.6605390666e-24,
        'base': {'g': 1},
    },
    {
        'symbols': ('bar',),
        'name': 'bar',
        'factor': 1e8,
        'base': {'g': 1, 'm': -1, 's': -2},
    },
]


class SIUnit(unit_.NamedUnit):
    """Base class of units in this module."""

    def __init__(self, *args, quantity: str=None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.quantity = quantity
        """The physical quantity that this unit measures, if any."""

    def _lookup(self, symbol: str) -> unit_.Unit:
        return _BY_SYMBOL[symbol]

    @property
    def prefixes(self):
        return prefixes_.DEFAULT

    def prefix_allowed(self, symbol: str) -> bool:
        return True


class SIBaseUnit(SIUnit):
    """A unit that spans one axis of the SI dimensional signature.

    Every member except the kilogram is basic. The kilogram is one thousand
    grams and admits no prefixes.
    """

    @property
    def is_basic(self):
        return not self._base

    @property
    def prefixes(self):
        return prefixes_.DEFAULT if self.is_basic else ()

    def prefix_allowed(self, symbol: str) -> bool:
        return self.is_basic

    @property
    def compatible_units(self):
        return BASE_UNITS


class SIDerivedUnit(SIUnit):
    """A named combination of SI base units."""

    @property
    def compatible_units(self):
        return BASE_UNITS


class SICommonUnit(SIUnit):
    """A non-SI unit accepted for use with the SI."""

    def prefix_allowed(self, symbol: str) -> bool:
        return symbol != 'd'

    @property
    def compatible_units(self):
        return BASE_UNITS + DERIVED_UNITS


def _create(
    family: typing.Type[SIUnit],
    table: typing.List[typing.Dict[str, typing.Any]],
) -> typing.Tuple[SIUnit, ...]:
    return tuple(family(**entry) for entry in table)


BASE_UNITS = _create(SIBaseUnit, _base_units)
"""The SI base units, including the non-basic kilogram."""

DERIVED_UNITS = _create(SIDerivedUnit, _derived_units)
"""The named SI derived units."""

COMMON_UNITS = _create(SICommonUnit, _common_units)
"""Common non-SI units that reduce to SI units."""

UNITS = BASE_UNITS + DERIVED_UNITS + COMMON_UNITS
"""All units in this module, in order of matching priority."""

_BY_SYMBOL = {unit.symbol: unit for unit in UNITS}

