"""Units of digital information."""

from unitex.catalog import prefixes as prefixes_
from unitex.core import unit as unit_


_units = [
    {'symbols': ('bit', 'b'), 'name': 'bit'},
    {
        'symbols': ('byte', 'octet', 'o'),
        'name': 'byte',
        'factor': 8,
        'base': {'bit': 1},
    },
]


class BinaryUnit(unit_.NamedUnit):
    """A unit of information. The bit is basic."""

    def _lookup(self, symbol: str) -> unit_.Unit:
        return _BY_SYMBOL[symbol]

    @property
    def prefixes(self):
        return prefixes_.DEFAULT

    def prefix_allowed(self, symbol: str) -> bool:
        return True

    @property
    def is_basic(self):
        return not self._base


UNITS = tuple(BinaryUnit(**entry) for entry in _units)
"""The bit and the byte."""

BIT, BYTE = UNITS

_BY_SYMBOL = {unit.symbol: unit for unit in UNITS}

