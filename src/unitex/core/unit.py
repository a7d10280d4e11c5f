import abc
import typing

import numpy

from unitex.core import iterables


class Prefix(typing.NamedTuple):
    """Metadata for a multiplicative order-of-magnitude prefix."""

    symbols: typing.Tuple[str, ...]
    factor: float
    name: str = ''

    @property
    def symbol(self) -> str:
        """The canonical symbol of this prefix."""
        return self.symbols[0]


IDENTITY_PREFIX = Prefix(('',), 1.0, 'identity')
"""The prefix implied by an unprefixed unit symbol."""


Real = typing.Union[float, numpy.ndarray]


class Unit(abc.ABC):
    """The capabilities of a unit of measurement.

    Every unit in the catalog and every unit that the factory builds from a
    string provides this interface. The engine never inspects concrete types;
    it only asks a unit for its symbols, its admissible prefixes, its
    dimensional signature (see `~Unit.base_units`) and the functions that move
    a value to and from that signature.
    """

    @property
    @abc.abstractmethod
    def symbols(self) -> typing.Tuple[str, ...]:
        """The accepted symbols of this unit. The first is canonical."""

    @property
    @abc.abstractmethod
    def prefixes(self) -> typing.Tuple[Prefix, ...]:
        """The prefixes that this unit admits, in preferred order."""

    @abc.abstractmethod
    def prefix_allowed(self, symbol: str) -> bool:
        """True if the given symbol of this unit may carry a prefix."""

    @property
    @abc.abstractmethod
    def is_basic(self) -> bool:
        """True if this unit is irreducible."""

    @property
    @abc.abstractmethod
    def is_conversion_linear(self) -> bool:
        """True if ``to_base(v) == factor(symbol) * v`` for every `v`."""

    @property
    @abc.abstractmethod
    def base_units(self) -> typing.Mapping['Unit', int]:
        """The dimensional signature of this unit.

        A basic unit maps to itself with exponent 1.
        """

    @abc.abstractmethod
    def factor(self, symbol: str=None) -> float:
        """The multiplicative factor of `symbol` relative to base units."""

    @abc.abstractmethod
    def to_base(self, value: Real) -> Real:
        """Express `value` in this unit's base units."""

    @abc.abstractmethod
    def from_base(self, value: Real) -> Real:
        """Express `value`, given in base units, in this unit."""

    @property
    def compatible_units(self) -> typing.Tuple['Unit', ...]:
        """Units to consult alongside this one when parsing or simplifying."""
        return ()

    @property
    def parser(self) -> typing.Optional[typing.Callable]:
        """A specialized parser for notations beyond whitespace tokens.

        If not ``None``, the factory calls this object with the input text,
        the ordered candidate units and the active registry, and expects a
        mapping from `~symbolic.StringRange` to `~symbolic.DecodedToken`.
        """
        return None

    @property
    def symbol(self) -> str:
        """The canonical symbol of this unit."""
        return self.symbols[0]

    def __str__(self) -> str:
        return self.symbol


class NamedUnit(iterables.ReprStrMixin, Unit):
    """A unit defined by an entry in a catalog table.

    Catalog families subclass this class and override whichever behavior
    differs per entry. Instances are created once, when their catalog module
    loads, and compare by identity.

    Parameters
    ----------
    symbols : iterable of strings
        The accepted symbols. The first is canonical.

    name : string
        The full name of this unit.

    factor : float, default=1.0
        The multiplicative factor relative to `base`.

    base : mapping, optional
        The canonical symbol and exponent of each unit in the signature of
        this unit. The family's `_lookup` resolves each symbol.

    shift : pair of callables, optional
        Functions that convert a value to and from the base units. Giving
        these makes the unit non-linear and its factor undefined.
    """

    def __init__(
        self,
        symbols: typing.Iterable[str],
        name: str,
        factor: float=1.0,
        base: typing.Mapping[str, int]=None,
        shift: typing.Tuple[typing.Callable, typing.Callable]=None,
    ) -> None:
        self._symbols = tuple(symbols)
        self.name = name
        """The full name of this unit."""
        self._factor = numpy.nan if shift else factor
        self._base = dict(base or {})
        self._shift = shift
        self._base_units = None
        self.display.register('symbol', 'name')
        self.display['__str__'] = "{symbol}"
        self.display['__repr__'] = "'{symbol}', name='{name}'"

    def _lookup(self, symbol: str) -> Unit:
        """Find the catalog unit with canonical symbol `symbol`."""
        raise NotImplementedError

    @property
    def symbols(self):
        return self._symbols

    @property
    def prefixes(self):
        return ()

    def prefix_allowed(self, symbol: str) -> bool:
        return bool(self.prefixes)

    @property
    def is_basic(self):
        return False

    @property
    def is_conversion_linear(self):
        return self._shift is None

    @property
    def base_units(self):
        if self._base_units is None:
            if self.is_basic:
                self._base_units = {self: 1}
            else:
                self._base_units = {
                    self._lookup(symbol): exponent
                    for symbol, exponent in self._base.items()
                }
        return self._base_units

    def factor(self, symbol: str=None) -> float:
        return self._factor

    def to_base(self, value):
        if self._shift:
            return self._shift[0](value)
        return self._factor * value

    def from_base(self, value):
        if self._shift:
            return self._shift[1](value)
        return value / self._factor


class _EmptyUnit(iterables.ReprStrMixin, Unit):
    """The dimensionless unit with an empty symbol."""

    def __init__(self) -> None:
        self.display['__str__'] = ""
        self.display['__repr__'] = "''"

    symbols = ('',)
    prefixes = ()
    is_basic = True
    is_conversion_linear = True

    def prefix_allowed(self, symbol: str) -> bool:
        return False

    @property
    def base_units(self):
        return {}

    def factor(self, symbol: str=None) -> float:
        return 1.0

    def to_base(self, value):
        return value

    def from_base(self, value):
        return value


EMPTY_UNIT = _EmptyUnit()
"""The dimensionless unit. It matches only the empty string."""


class UnknownUnit(iterables.ReprStrMixin, Unit):
    """A placeholder for a symbol that no candidate unit matched.

    An unknown unit is its own dimension. Since a unit may not refer to itself
    in its own signature, each public unknown unit wraps an inner placeholder
    that has the same symbol and an empty signature; the outer unit's
    signature is then ``{inner: 1}``. Use `~registry.Registry.unknown_unit`
    rather than this class, so that equal symbols share one instance.
    """

    def __init__(self, symbol: str, inner: 'UnknownUnit'=None) -> None:
        self._symbols = (symbol,)
        self._inner = inner
        self.display.register('symbol')
        self.display['__str__'] = "{symbol}"
        self.display['__repr__'] = "'{symbol}'"

    @property
    def symbols(self):
        return self._symbols

    prefixes = ()
    is_basic = True
    is_conversion_linear = True

    @property
    def base_units(self):
        return {self._inner: 1} if self._inner is not None else {}

    def prefix_allowed(self, symbol: str) -> bool:
        return False

    def factor(self, symbol: str=None) -> float:
        return 1.0

    def to_base(self, value):
        return value

    def from_base(self, value):
        return value

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnknownUnit):
            return NotImplemented
        return self._symbols == other._symbols and self._inner == other._inner

    def __hash__(self) -> int:
        return hash((self._symbols, self._inner))


def is_unknown(unit: Unit) -> bool:
    """True if `unit` stands in for an unrecognized symbol."""
    return isinstance(unit, UnknownUnit)


def describe(*units: Unit) -> str:
    """Represent `units` for use in diagnostic messages.

    Unknown units carry an ``(unknown unit)`` marker. More than one unit
    appears as a bracketed, comma-separated list.

    Examples
    --------
    >>> describe(registry.DEFAULT.unknown_unit('abc'))
    'abc (unknown unit)'
    """
    names = [
        f"{unit.symbol} (unknown unit)" if is_unknown(unit) else unit.symbol
        for unit in units
    ]
    if len(names) == 1:
        return names[0]
    return f"[{', '.join(names)}]"


def to_symbol(base_units: typing.Mapping[Unit, int]) -> str:
    """Write a signature as a whitespace-separated unit expression.

    Examples
    --------
    Signatures keep their insertion order and omit exponents of 1:

    >>> to_symbol({meter: 1, second: -2})
    'm s^-2'
    """
    terms = []
    for unit, exponent in base_units.items():
        if exponent == 0:
            continue
        terms.append(
            unit.symbol if exponent == 1 else f"{unit.symbol}^{exponent}"
        )
    return ' '.join(terms)

