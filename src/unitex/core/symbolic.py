import functools
import re
import typing

from unitex.core import iterables
from unitex.core import unit as unit_


class UnitParsingError(Exception):
    """Error when attempting to parse a string into units."""

    def __init__(self, string: str) -> None:
        self.string = string

    def __str__(self) -> str:
        return f"Could not parse units from {self.string!r}"


class ExponentError(UnitParsingError):
    """The exponent of a unit term is not an integer."""

    def __init__(self, string: str, exponent: str) -> None:
        super().__init__(string)
        self.exponent = exponent

    def __str__(self) -> str:
        return (
            f"Could not interpret {self.exponent!r} as an integer exponent"
            f" in {self.string!r}"
        )


@functools.total_ordering
class StringRange(iterables.ReprStrMixin):
    """The inclusive character range of a match within a string.

    Ranges order first by their starting index, then by their length.
    """

    def __init__(self, start: int, stop: int) -> None:
        if start > stop:
            raise ValueError(
                f"Start of range ({start}) must not exceed its stop ({stop})"
            )
        self.start = start
        """The index of the first character in this range."""
        self.stop = stop
        """The index of the last character in this range."""
        self.display.register('start', 'stop')
        self.display['__str__'] = "[{start}, {stop}]"
        self.display['__repr__'] = "{start}, {stop}"

    def __len__(self) -> int:
        """The number of characters in this range."""
        return self.stop - self.start + 1

    def comprises(self, other: 'StringRange') -> bool:
        """True if this range strictly contains `other`."""
        return (
            (self.start <= other.start and self.stop > other.stop)
            or (self.start < other.start and self.stop >= other.stop)
        )

    def intersects(self, other: 'StringRange') -> bool:
        """True if this range shares at least one character with `other`."""
        return self.stop >= other.start and self.start <= other.stop

    def _key(self):
        return (self.start, len(self))

    def __eq__(self, other) -> bool:
        if not isinstance(other, StringRange):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other) -> bool:
        if not isinstance(other, StringRange):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class DecodedToken(typing.NamedTuple):
    """The parsed form of one term in a unit expression."""

    prefix: unit_.Prefix
    unit: unit_.Unit
    symbol: str
    exponent: int


def whole(unit: unit_.Unit) -> DecodedToken:
    """Create the token that represents `unit` on its own."""
    return DecodedToken(unit_.IDENTITY_PREFIX, unit, unit.symbol, 1)


class Piece(typing.NamedTuple):
    """A whitespace-delimited piece of an input string."""

    location: StringRange
    name: str
    power: typing.Optional[str]

    @property
    def exponent(self) -> int:
        """The integer exponent of this piece."""
        if self.power is None:
            return 1
        if not _EXPONENT.fullmatch(self.power):
            raise ExponentError(f"{self.name}^{self.power}", self.power)
        return int(self.power)


_PIECE = re.compile(r'\S+')
_EXPONENT = re.compile(r'[+-]?\d+')


def split(string: str) -> typing.List[Piece]:
    """Split `string` into pieces at whitespace.

    Each piece records its location in `string`, the text before the first
    ``'^'`` and, if present, the text after it. A string that contains only
    whitespace produces a single empty piece, so that it can match the
    dimensionless unit.
    """
    pieces = []
    for match in _PIECE.finditer(string):
        name, caret, power = match.group().partition('^')
        location = StringRange(match.start(), match.end() - 1)
        pieces.append(Piece(location, name, power if caret else None))
    if not pieces:
        return [Piece(StringRange(0, 0), '', None)]
    return pieces


def identify(
    name: str,
    units: typing.Iterable[unit_.Unit],
) -> typing.Optional[typing.Tuple[unit_.Prefix, unit_.Unit, str]]:
    """Find the first unit whose symbol completes `name`.

    Parameters
    ----------
    name : string
        The text of a single term, without its exponent (e.g., ``'km'``).

    units : iterable of `~unit.Unit`
        The candidate units, in order of priority.

    Returns
    -------
    tuple or None
        The matched prefix, unit and symbol, or ``None`` if no candidate
        matches. A candidate matches when `name` ends with one of its symbols
        and the remainder is either empty or exactly one of the unit's prefix
        symbols on a symbol that admits prefixes.
    """
    for unit in units:
        for symbol in unit.symbols:
            if not name.endswith(symbol):
                continue
            head = name[:len(name)-len(symbol)]
            if not head:
                return unit_.IDENTITY_PREFIX, unit, symbol
            if not unit.prefix_allowed(symbol):
                continue
            for prefix in unit.prefixes:
                if head in prefix.symbols:
                    return prefix, unit, symbol
    return None


def match(
    pieces: typing.Iterable[Piece],
    units: typing.Iterable[unit_.Unit],
) -> typing.Dict[StringRange, DecodedToken]:
    """Decode every piece that one of `units` matches.

    Pieces that no unit matches are absent from the result. The exponent of a
    piece is only interpreted once that piece matches.
    """
    units = tuple(units)
    found = {}
    for piece in pieces:
        if identified := identify(piece.name, units):
            prefix, unit, symbol = identified
            token = DecodedToken(prefix, unit, symbol, piece.exponent)
            found[piece.location] = token
    return found


class AmbiguousUnitError(UnitParsingError):
    """Two matches claim overlapping parts of a string."""

    def __init__(
        self,
        string: str,
        first: typing.Tuple[StringRange, DecodedToken],
        second: typing.Tuple[StringRange, DecodedToken],
    ) -> None:
        super().__init__(string)
        self.first = first
        self.second = second

    def __str__(self) -> str:
        (r0, t0), (r1, t1) = self.first, self.second
        return (
            "The resolved units correspond to overlapping ranges"
            " in the given string. Unable to determine which unit to use."
            f" The units in question were {t0.symbol!r} {r0}"
            f" ({unit_.describe(t0.unit)}) and {t1.symbol!r} {r1}"
            f" ({unit_.describe(t1.unit)}) in {self.string!r}"
        )


def resolve(
    matches: typing.Mapping[StringRange, DecodedToken],
    string: str,
) -> typing.List[typing.Tuple[StringRange, DecodedToken]]:
    """Reduce overlapping matches to an unambiguous, ordered sequence.

    This function discards every match whose range lies strictly within the
    range of another match (e.g., the individual words of a multi-word
    notation), then checks that none of the remaining ranges intersect.

    Parameters
    ----------
    matches : mapping
        The decoded tokens, keyed by the part of `string` that they occupy.

    string : str
        The string from which `matches` came. Only used in error messages.

    Returns
    -------
    list
        The surviving ``(range, token)`` pairs in ascending range order.

    Raises
    ------
    AmbiguousUnitError
        Two surviving ranges intersect.
    """
    ranges = sorted(matches)
    kept = [
        this for this in ranges
        if not any(that.comprises(this) for that in ranges)
    ]
    for i, this in enumerate(kept):
        for that in kept[i+1:]:
            if this.intersects(that):
                raise AmbiguousUnitError(
                    string,
                    (this, matches[this]),
                    (that, matches[that]),
                )
    return [(r, matches[r]) for r in kept]

