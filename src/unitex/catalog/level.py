"""
Logarithmic units of level.

The bel and the neper describe the logarithm of a ratio. On their own, they
reduce to the neper. Relative to a reference value and unit, they become
non-linear units whose base units are those of the reference, written as
``'log(re 1 mW)'`` (bel) or ``'ln(re 1 mW)'`` (neper).
"""

import enum
import logging
import re
import typing

import numpy

from unitex.catalog import prefixes as prefixes_
from unitex.core import iterables
from unitex.core import registry as registry_
from unitex.core import symbolic
from unitex.core import unit as unit_


logger = logging.getLogger(__name__)


class ReferenceTypeError(Exception):
    """The kind of a reference unit is unknown."""

    def __init__(self, reference: unit_.Unit) -> None:
        self.reference = reference

    def __str__(self) -> str:
        kinds = ', '.join(kind.name for kind in ReferenceKind)
        return (
            "Unable to determine whether the reference unit"
            f" {unit_.describe(self.reference)} belongs to any known kind"
            f" ({kinds}). Please specify the kind explicitly."
        )


_references = {
    'ROOT_POWER': (
        'A',
        'T',
        'V',
        'm s^-1',
        'A s m^-2',
        'N C^-1',
        'C m^-1',
        'C m^-2',
        'C m^-3',
        'N kg^-1',
    ),
    'POWER': (
        'W',
        'W m^-1',
        'W m^-2',
        'W m^-3',
        'J',
        'J m^-1',
        'J m^-2',
        'K',
        'cd',
        'cd m^-1',
        'cd m^-2',
        'cd m^-3',
        'Gy',
        'Sv',
        'mm^6 m^-3',
    ),
}


class ReferenceKind(enum.Enum):
    """Whether a level compares root-power or power quantities.

    A root-power quantity (e.g., a voltage) enters a power ratio squared.
    Pressure and energy density belong to both kinds, so neither lists them.
    """

    ROOT_POWER = 'root-power'
    POWER = 'power'

    @property
    def references(self) -> typing.Tuple[str, ...]:
        """Unit expressions that identify this kind."""
        return _references[self.name]


def infer_kind(
    reference: unit_.Unit,
    registry: registry_.Registry=None,
) -> typing.Optional[ReferenceKind]:
    """Determine the kind of a reference unit, if possible.

    This function first looks for a kind with a reference unit that is
    convertible to `reference`, then for one with a proportional reference
    unit.
    """
    from unitex.core import metric
    checks = (metric.convertible, metric.proportional)
    for check in checks:
        for kind in ReferenceKind:
            for expression in kind.references:
                if check(reference, expression, registry=registry):
                    return kind
    return None


_LEVEL_WITH_REFERENCE = re.compile(
    r'(log|ln)\^?(\d*)\(re[\s,](\d+\.?\d*)[\s,](.*?)\)\^?(\d*)'
)


class LevelUnit(unit_.NamedUnit):
    """A logarithmic unit of level. The neper is basic."""

    def _lookup(self, symbol: str) -> unit_.Unit:
        return NEPER

    @property
    def prefixes(self):
        return prefixes_.DEFAULT

    def prefix_allowed(self, symbol: str) -> bool:
        return True

    @property
    def is_basic(self):
        return not self._base

    @property
    def notation(self) -> str:
        """The function name of this unit in reference notation."""
        return 'log' if self is BEL else 'ln'

    def in_reference_to(
        self,
        value: float,
        reference: typing.Union[str, unit_.Unit],
        kind: ReferenceKind=None,
        registry: registry_.Registry=None,
    ) -> 'ReferenceLevel':
        """Create a unit of this level relative to a reference.

        Parameters
        ----------
        value : float
            The reference value.

        reference : string or `~unit.Unit`
            The unit of the reference value.

        kind : `~level.ReferenceKind`, optional
            The kind of quantity that `reference` measures. If omitted, this
            method infers it from `reference`.

        registry : `~registry.Registry`, optional
            The caches to use when parsing unit expressions.

        Raises
        ------
        `~level.ReferenceTypeError`
            `kind` is omitted and `reference` has no known kind.
        """
        if isinstance(reference, str):
            from unitex.core import metric
            reference = metric.parse(reference, registry=registry)
        inferred = infer_kind(reference, registry=registry)
        if kind is None:
            if inferred is None:
                raise ReferenceTypeError(reference)
            kind = inferred
        elif kind is not inferred:
            logger.warning(
                "The reference unit %s does not belong to kind %s."
                " Continuing with the given kind, although the resulting"
                " symbol will not identify it.",
                unit_.describe(reference), kind.name,
            )
        return ReferenceLevel(self, value, reference, kind)

    @property
    def parser(self):
        return self._parse

    def _parse(
        self,
        string: str,
        units: typing.Sequence[unit_.Unit],
        registry: registry_.Registry,
    ) -> typing.Dict[symbolic.StringRange, symbolic.DecodedToken]:
        """Decode each level with a reference in `string`, and this unit."""
        from unitex.core import metric
        found = {}
        for match in _LEVEL_WITH_REFERENCE.finditer(string):
            name, inner, value, symbol, outer = match.groups()
            level = BEL if name == 'log' else NEPER
            reference = metric.parse(symbol, units, registry=registry)
            unit = level.in_reference_to(
                float(value), reference, registry=registry,
            )
            token = symbolic.DecodedToken(
                unit_.IDENTITY_PREFIX,
                unit,
                match[0],
                int(inner or 1) * int(outer or 1),
            )
            found[symbolic.StringRange(match.start(), match.end()-1)] = token
        for location, token in symbolic.match(
            symbolic.split(string), [self]
        ).items():
            found.setdefault(location, token)
        return found


_units = [
    {
        'symbols': ('B',),
        'name': 'bel',
        'factor': numpy.log(10) / 2,
        'base': {'Np': 1},
    },
    {'symbols': ('Np',), 'name': 'neper'},
]


UNITS = tuple(LevelUnit(**entry) for entry in _units)
"""The bel and the neper."""

BEL, NEPER = UNITS


def _format(value: float) -> str:
    """Write `value` without trailing zeros."""
    return f"{value:.16f}".rstrip('0').rstrip('.')


class ReferenceLevel(iterables.ReprStrMixin, unit_.Unit):
    """A level unit relative to a reference value and unit.

    The reference value is a value in the reference unit, which converts it
    to and from base units.

    Instances are equal when they have the same level unit, reference value,
    reference unit and kind.
    """

    def __init__(
        self,
        level: LevelUnit,
        value: float,
        reference: unit_.Unit,
        kind: ReferenceKind,
    ) -> None:
        self.level = level
        """The logarithmic unit."""
        self.value = value
        """The reference value."""
        self.reference = reference
        """The unit of the reference value."""
        self.kind = kind
        """The kind of quantity that the reference unit measures."""
        self._symbols = (
            f"{level.notation}(re {_format(value)} {reference.symbol})",
        )
        self.display.register('symbol', 'kind')
        self.display['__str__'] = "{symbol}"
        self.display['__repr__'] = "'{symbol}', kind={kind}"

    @property
    def symbols(self):
        return self._symbols

    prefixes = ()
    is_basic = False
    is_conversion_linear = False

    def prefix_allowed(self, symbol: str) -> bool:
        return False

    @property
    def base_units(self):
        return self.reference.base_units

    def factor(self, symbol: str=None) -> float:
        return numpy.nan

    @property
    def compatible_units(self):
        return tuple(
            iterables.unique(*UNITS, *self.reference.compatible_units)
        )

    def to_base(self, value):
        if self.level is BEL:
            if self.kind is ReferenceKind.POWER:
                ratio = numpy.power(10.0, value)
            else:
                ratio = numpy.power(10.0, value / 2)
        elif self.kind is ReferenceKind.POWER:
            ratio = numpy.exp(2 * value)
        else:
            ratio = numpy.exp(value)
        return self.reference.to_base(self.value * ratio)

    def from_base(self, value):
        ratio = self.reference.from_base(value) / self.value
        if self.level is BEL:
            if self.kind is ReferenceKind.POWER:
                return numpy.log10(ratio)
            return 2 * numpy.log10(ratio)
        if self.kind is ReferenceKind.POWER:
            return 0.5 * numpy.log(ratio)
        return numpy.log(ratio)

    def _key(self):
        return (self.level, self.value, self.reference, self.kind)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReferenceLevel):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

