"""
Parse unit expressions and convert values between them.

A unit expression is a whitespace-separated sequence of terms, each of which
is an optional prefix symbol, a unit symbol and an optional integer exponent
introduced by ``'^'`` (e.g., ``'kg m^2 s^-1'``). Functions in this module
accept one or more sets of extra candidate units, after the main arguments,
in place of the default catalog; and an optional registry, which holds the
caches that make repeated parses of equal strings return identical units.
"""

import itertools
import logging
import typing

from unitex import catalog
from unitex.core import conversion
from unitex.core import iterables
from unitex.core import reduction
from unitex.core import registry as registry_
from unitex.core import symbolic
from unitex.core import unit as unit_


logger = logging.getLogger(__name__)


DEFAULT_UNITS = catalog.DEFAULT_UNITS
"""The candidate units to use when a caller does not provide any."""


UnitLike = typing.Union[str, unit_.Unit]


def collect(*extra) -> typing.Tuple[unit_.Unit, ...]:
    """Determine the ordered set of candidate units.

    Parameters
    ----------
    *extra
        Zero or more units or iterables of units.

    Returns
    -------
    tuple of `~unit.Unit`
        The default units if `extra` is empty. Otherwise, the given units,
        followed by the compatible units of each, followed by the
        dimensionless unit, without repetition.
    """
    if not extra:
        return DEFAULT_UNITS
    units = iterables.flatten(*extra)
    compatible = [c for unit in units for c in unit.compatible_units]
    return tuple(iterables.unique(*units, *compatible, unit_.EMPTY_UNIT))


def _scan(
    string: str,
    units: typing.Sequence[unit_.Unit],
    registry: registry_.Registry,
) -> typing.Dict[symbolic.StringRange, symbolic.DecodedToken]:
    """Collect every match of `units` in `string`.

    Units without a specialized parser share a single pass of the token
    matcher per consecutive run, which preserves candidate priority. If two
    passes match the same range, the earlier pass wins. The token matcher
    skips pieces that lie within a specialized match, since those pieces
    (e.g., ``'mW)'`` in ``'log(re 1 mW)'``) are not terms on their own.
    """
    special = {
        unit: unit.parser(string, units, registry)
        for unit in units if unit.parser is not None
    }
    extents = [
        location for matches in special.values() for location in matches
    ]
    pieces = [
        piece for piece in symbolic.split(string)
        if not any(extent.comprises(piece.location) for extent in extents)
    ]
    found = {}
    for generic, group in itertools.groupby(units, lambda u: u.parser is None):
        if generic:
            passes = [symbolic.match(pieces, group)]
        else:
            passes = [special[unit] for unit in group]
        for matches in passes:
            for location, token in matches.items():
                found.setdefault(location, token)
    return found


def parse_tokens(
    text: str,
    *extra,
    registry: registry_.Registry=None,
) -> typing.List[typing.Tuple[symbolic.StringRange, symbolic.DecodedToken]]:
    """Decode the recognized terms of `text`, in order.

    Terms that no candidate unit matches do not appear in the result.

    Raises
    ------
    `~symbolic.AmbiguousUnitError`
        Two matches overlap without one containing the other.

    `~symbolic.ExponentError`
        A matched term has a non-integer exponent.
    """
    registry = registry_.resolve(registry)
    string = text.strip()
    return symbolic.resolve(_scan(string, collect(*extra), registry), string)


def decode(
    text: str,
    *extra,
    registry: registry_.Registry=None,
) -> typing.List[symbolic.DecodedToken]:
    """Decode every term of `text`, in order.

    Unlike `parse_tokens`, this function represents each unrecognized term by
    the registry's unknown unit for that term's name. A term within the range
    of a multi-word match (e.g., the reference unit in ``'log(re 1 mW)'``) is
    part of that match, not an unrecognized term.
    """
    registry = registry_.resolve(registry)
    string = text.strip()
    found = _scan(string, collect(*extra), registry)
    for piece in symbolic.split(string):
        if piece.location in found:
            continue
        if any(other.comprises(piece.location) for other in found):
            continue
        found[piece.location] = symbolic.DecodedToken(
            unit_.IDENTITY_PREFIX,
            registry.unknown_unit(piece.name),
            piece.name,
            piece.exponent,
        )
    return [token for _, token in symbolic.resolve(found, string)]


def is_valid(
    text: str,
    *extra,
    registry: registry_.Registry=None,
) -> bool:
    """True if some candidate unit matches every term of `text`."""
    registry = registry_.resolve(registry)
    string = text.strip()
    try:
        found = _scan(string, collect(*extra), registry)
    except symbolic.UnitParsingError:
        return False
    return all(
        piece.location in found
        or any(other.comprises(piece.location) for other in found)
        for piece in symbolic.split(string)
    )


class _ParsedUnit(iterables.ReprStrMixin, unit_.Unit):
    """Base class for units that the factory builds from a string."""

    def __init__(
        self,
        string: str,
        tokens: typing.Sequence[symbolic.DecodedToken],
        compatible: typing.Iterable[unit_.Unit],
    ) -> None:
        self._symbols = (string,)
        self._tokens = tuple(tokens)
        self._compatible = tuple(compatible)
        self._reduction = None
        self.display.register('symbol')
        self.display['__str__'] = "{symbol}"
        self.display['__repr__'] = "'{symbol}'"

    @property
    def reduction(self) -> reduction.Reduction:
        """The base-unit form of this unit's terms."""
        if self._reduction is None:
            self._reduction = reduction.reduce(self._tokens)
        return self._reduction

    @property
    def tokens(self):
        """The decoded terms of this unit."""
        return self._tokens

    @property
    def symbols(self):
        return self._symbols

    @property
    def is_conversion_linear(self):
        return self.reduction.linear

    @property
    def base_units(self):
        return self.reduction.units

    def factor(self, symbol: str=None) -> float:
        return self.reduction.factor

    @property
    def compatible_units(self):
        return self._compatible

    def _key(self):
        return (
            type(self),
            self._symbols,
            self._tokens,
            frozenset(self._compatible),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, _ParsedUnit):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class DerivedUnit(_ParsedUnit):
    """A unit built from one prefixed or exponentiated term."""

    @property
    def _token(self) -> symbolic.DecodedToken:
        return self._tokens[0]

    @property
    def prefixes(self):
        return self._token.unit.prefixes

    def prefix_allowed(self, symbol: str) -> bool:
        token = self._token
        return (
            token.prefix == unit_.IDENTITY_PREFIX
            and token.unit.prefix_allowed(token.symbol)
        )

    @property
    def is_basic(self):
        return self._token.unit.is_basic and self._token.exponent == 1

    def to_base(self, value):
        if self.is_conversion_linear:
            return value * self.reduction.factor
        token = self._token
        return token.unit.to_base(token.prefix.factor * value)

    def from_base(self, value):
        if self.is_conversion_linear:
            return value / self.reduction.factor
        token = self._token
        return token.unit.from_base(value) / token.prefix.factor


class CompositeUnit(_ParsedUnit):
    """A unit built from more than one term."""

    prefixes = ()
    is_basic = False

    def prefix_allowed(self, symbol: str) -> bool:
        return False

    def _base_tokens(self):
        return tuple(
            symbolic.DecodedToken(
                unit_.IDENTITY_PREFIX, base, base.symbol, exponent
            )
            for base, exponent in self.base_units.items()
        )

    def to_base(self, value):
        return conversion.transform(value, self._tokens, self._base_tokens())

    def from_base(self, value):
        return conversion.transform(value, self._base_tokens(), self._tokens)


def parse(
    text: str,
    *extra,
    registry: registry_.Registry=None,
) -> unit_.Unit:
    """Create a unit from a string.

    Parameters
    ----------
    text : string
        The unit expression. Leading and trailing whitespace do not matter.

    *extra
        Zero or more units or iterables of units to use as candidates in
        place of the default catalog. See `collect`.

    registry : `~registry.Registry`, optional
        The caches to use. Defaults to `registry.DEFAULT`.

    Returns
    -------
    `~unit.Unit`
        One of the following, depending on the matched terms:

        - none: the registry's unknown unit for the stripped text
        - one bare occurrence of a candidate unit: that unit itself
        - one prefixed or exponentiated term: a `DerivedUnit`
        - more than one term: a `CompositeUnit`

        The registry memoizes the last two by string and candidate set, so
        that equal requests return the identical object.

    Examples
    --------
    >>> parse('kg m s^-2').base_units
    {g: 1, m: 1, s: -2}
    """
    registry = registry_.resolve(registry)
    string = text.strip()
    units = collect(*extra)
    resolved = symbolic.resolve(_scan(string, units, registry), string)
    tokens = [token for _, token in resolved]
    if not tokens:
        logger.debug("No known units in %r", string)
        return registry.unknown_unit(string)
    if len(tokens) == 1:
        token = tokens[0]
        if token.prefix == unit_.IDENTITY_PREFIX and token.exponent == 1:
            return token.unit
        build = DerivedUnit
    else:
        build = CompositeUnit
    return registry.special.compute(
        (string, frozenset(units)),
        lambda: build(string, tokens, units),
    )


def _operand(
    this: typing.Optional[UnitLike],
    extra: tuple,
    registry: registry_.Registry,
) -> typing.Optional[conversion.Operand]:
    """Prepare a string or unit for the conversion engine."""
    if this is None:
        return None
    if isinstance(this, unit_.Unit):
        return conversion.Operand(
            unit_.describe(this), (symbolic.whole(this),)
        )
    tokens = decode(this, *extra, registry=registry)
    return conversion.Operand(this, tuple(tokens))


def factor(
    origin: UnitLike,
    target: UnitLike,
    *extra,
    registry: registry_.Registry=None,
) -> float:
    """Compute the multiplicative factor from `origin` to `target`.

    Raises
    ------
    `~conversion.DimensionMismatchError`
        The base units of `origin` and `target` differ.

    `~conversion.NonMultiplicativeError`
        Either unit requires a shift (e.g., ``'°C'``).
    """
    registry = registry_.resolve(registry)
    return conversion.factor(
        _operand(origin, extra, registry),
        _operand(target, extra, registry),
    )


def convert(
    value: unit_.Real,
    origin: UnitLike,
    target: UnitLike,
    *extra,
    registry: registry_.Registry=None,
) -> unit_.Real:
    """Convert `value` from `origin` to `target`.

    Parameters
    ----------
    value : real or array-like
        The numerical value(s) to convert. Arrays convert element-wise.

    origin : string or `~unit.Unit`
        The unit of `value`.

    target : string or `~unit.Unit`
        The unit of the result.

    Raises
    ------
    `~conversion.DimensionMismatchError`
        The base units of `origin` and `target` differ.

    Examples
    --------
    >>> convert(0, '°C', 'K')
    273.15
    """
    registry = registry_.resolve(registry)
    return conversion.convert(
        value,
        _operand(origin, extra, registry),
        _operand(target, extra, registry),
    )


def convertible(
    origin: typing.Optional[UnitLike],
    target: typing.Optional[UnitLike],
    *extra,
    registry: registry_.Registry=None,
) -> bool:
    """True if `origin` and `target` have the same base units.

    Unrecognized terms only match identically named terms.
    """
    registry = registry_.resolve(registry)
    return conversion.convertible(
        _operand(origin, extra, registry),
        _operand(target, extra, registry),
    )


def equivalent(
    value: unit_.Real,
    origin: UnitLike,
    target: UnitLike,
    *extra,
    registry: registry_.Registry=None,
) -> bool:
    """True if converting `value` from `origin` to `target` preserves it."""
    registry = registry_.resolve(registry)
    first = _as_unit(origin, extra, registry)
    second = _as_unit(target, extra, registry)
    if not convertible(first, second, registry=registry):
        return False
    return value == convert(value, first, second, registry=registry)


def _as_unit(
    this: UnitLike,
    extra: tuple,
    registry: registry_.Registry,
) -> unit_.Unit:
    if isinstance(this, unit_.Unit):
        return this
    return parse(this, *extra, registry=registry)


def proportional(
    first: UnitLike,
    second: UnitLike,
    *extra,
    registry: registry_.Registry=None,
) -> bool:
    """True if `second` is a constant multiple of `first`."""
    registry = registry_.resolve(registry)
    return conversion.proportional(
        _operand(first, extra, registry),
        _operand(second, extra, registry),
    )

