import typing

import numpy

from unitex.core import reduction
from unitex.core import symbolic
from unitex.core import unit as unit_


class UnitConversionError(Exception):
    """Unknown unit conversion."""

    def __init__(self, origin: str, target: str) -> None:
        self.origin = origin
        self.target = target

    def __str__(self) -> str:
        return f"Can't convert {self.origin!r} to {self.target!r}"


class DimensionMismatchError(UnitConversionError):
    """The base units of two expressions differ."""

    def __init__(
        self,
        origin: str,
        target: str,
        origin_units: typing.Mapping[unit_.Unit, int],
        target_units: typing.Mapping[unit_.Unit, int],
        reason: str,
    ) -> None:
        super().__init__(origin, target)
        self.origin_units = origin_units
        self.target_units = target_units
        self.reason = reason

    def __str__(self) -> str:
        return (
            f"Cannot convert from {self.origin}"
            f" (units: {unit_.to_symbol(self.origin_units)})"
            f" to {self.target}"
            f" (units: {unit_.to_symbol(self.target_units)})."
            f" {self.reason}"
        )


class NonMultiplicativeError(UnitConversionError):
    """A scalar factor cannot describe a conversion."""

    def __str__(self) -> str:
        return (
            f'Conversion from "{self.origin}" to "{self.target}" contains'
            " non-multiplicative operations, hence a conversion factor"
            " cannot be used here."
        )


class Operand(typing.NamedTuple):
    """A named unit expression and its ordered, decoded terms."""

    name: str
    tokens: typing.Tuple[symbolic.DecodedToken, ...]

    def reduce(self) -> reduction.Reduction:
        """Compute the base-unit form of this expression."""
        return reduction.reduce(self.tokens)


def check(
    origin: Operand,
    target: Operand,
    first: reduction.Reduction,
    second: reduction.Reduction,
) -> None:
    """Raise an exception if two reductions have different signatures.

    The first discrepancy in signature order determines the reported reason.
    """
    if reason := _mismatch(first.units, second.units):
        raise DimensionMismatchError(
            origin.name,
            target.name,
            first.units,
            second.units,
            reason,
        )


def _mismatch(
    origin: typing.Mapping[unit_.Unit, int],
    target: typing.Mapping[unit_.Unit, int],
) -> typing.Optional[str]:
    """Describe the first difference between two signatures, if any."""
    for base, exponent in origin.items():
        if base not in target:
            return (
                f"Target units do not include {unit_.describe(base)},"
                " although the original units contain it."
            )
        if target[base] != exponent:
            return (
                "Target units do not include the correct exponent for"
                f" {unit_.describe(base)}. In the original units, the"
                f" exponent is {exponent}, while it is {target[base]} in the"
                " target units."
            )
    for base in target:
        if base not in origin:
            return (
                f"Original units do not include {unit_.describe(base)},"
                " although the target units contain it."
            )
    return None


def factor(origin: Operand, target: Operand) -> float:
    """Compute the multiplicative factor from `origin` to `target`.

    Raises
    ------
    DimensionMismatchError
        The expressions have different base units.

    NonMultiplicativeError
        Either expression requires a shift, so that no single factor
        converts between them.
    """
    if origin.name == target.name:
        return 1.0
    first, second = origin.reduce(), target.reduce()
    check(origin, target, first, second)
    if not (first.linear and second.linear):
        raise NonMultiplicativeError(origin.name, target.name)
    return first.factor / second.factor


def convert(value: unit_.Real, origin: Operand, target: Operand):
    """Convert `value` from `origin` to `target`.

    If both expressions convert by multiplication alone, the result is
    `value` times their ratio of factors. Otherwise, this function applies
    each term in turn via `transform`.
    """
    if origin.name == target.name:
        return value
    first, second = origin.reduce(), target.reduce()
    check(origin, target, first, second)
    if first.linear and second.linear:
        return value * (first.factor / second.factor)
    return transform(value, origin.tokens, target.tokens)


class _Entry:
    """The net contribution of one symbol to a conversion."""

    __slots__ = ('exponent', 'factor')

    def __init__(self) -> None:
        self.exponent = 0
        self.factor = 1.0


def transform(
    value: unit_.Real,
    origin: typing.Iterable[symbolic.DecodedToken],
    target: typing.Iterable[symbolic.DecodedToken],
) -> unit_.Real:
    """Move `value` through each term of two expressions.

    Parameters
    ----------
    value : real or array-like
        The value to convert.

    origin : iterable of `~symbolic.DecodedToken`
        The terms of the expression in which `value` is given. These
        contribute their exponents and prefix factors positively.

    target : iterable of `~symbolic.DecodedToken`
        The terms of the resultant expression. These contribute their
        exponents and prefix factors negatively.

    Notes
    -----
    After netting the contributions of each symbol, this function applies
    each non-zero net exponent `e`. A linear unit scales `value` by the net
    prefix factor and by ``unit.factor(symbol)**e``. A non-basic, non-linear
    unit replaces `value` by ``to_base(f * value)**e`` when `e` is positive
    or by ``(f * from_base(value))**-e`` when `e` is negative, where `f` is
    the net prefix factor, so that a prefix acts on this unit's own scale. A
    shifted unit at an exponent other than ±1 therefore shifts before
    exponentiating, as in ``(v + 273.15)**2`` for ``°C^2``. A basic,
    non-linear unit, or a symbol whose exponents cancel, only contributes
    its net prefix factor.

    This function does not check that the expressions have equal signatures.
    """
    ledger: typing.Dict[unit_.Unit, typing.Dict[str, _Entry]] = {}
    for sign, tokens in ((+1, origin), (-1, target)):
        for token in tokens:
            entries = ledger.setdefault(token.unit, {})
            entry = entries.setdefault(token.symbol, _Entry())
            entry.exponent += sign * token.exponent
            entry.factor *= token.prefix.factor ** (sign * token.exponent)
    for unit, entries in ledger.items():
        for symbol, entry in entries.items():
            exponent = entry.exponent
            if exponent == 0:
                value = value * entry.factor
            elif unit.is_conversion_linear:
                scale = unit.factor(symbol)
                if exponent > 0:
                    value = value * entry.factor * scale ** exponent
                else:
                    value = value * entry.factor / scale ** -exponent
            elif unit.is_basic:
                value = value * entry.factor
            elif exponent > 0:
                base = unit.to_base(value * entry.factor)
                value = numpy.power(base, exponent)
            else:
                this = unit.from_base(value) * entry.factor
                value = numpy.power(this, -exponent)
    return value


def convertible(
    origin: typing.Optional[Operand],
    target: typing.Optional[Operand],
) -> bool:
    """True if `origin` and `target` have the same base units."""
    if origin is None or target is None:
        return False
    if origin.name == target.name:
        return True
    return dict(origin.reduce().units) == dict(target.reduce().units)


def proportional(first: Operand, second: Operand) -> bool:
    """True if `second` is a constant multiple of `first`.

    Both expressions must be linear, and every base unit of `first` must
    appear in `second` with the same exponent.
    """
    a, b = first.reduce(), second.reduce()
    if not (a.linear and b.linear):
        return False
    return all(
        b.units.get(base, 0) == exponent
        for base, exponent in a.units.items()
    )

