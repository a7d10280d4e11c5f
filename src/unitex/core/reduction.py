import typing

import numpy

from unitex.core import iterables
from unitex.core import symbolic
from unitex.core import unit as unit_


class Reduction(iterables.ReprStrMixin):
    """The components of a unit expression in terms of base units."""

    def __init__(
        self,
        factor: float,
        units: typing.Mapping[unit_.Unit, int],
        linear: bool,
    ) -> None:
        self.factor = factor
        """The product of all prefix and unit factors.

        This is ``nan`` when `linear` is false, since no single factor
        describes a shifted conversion.
        """
        self.units = units
        """The base units and their non-zero summed exponents."""
        self.linear = linear
        """True if every term converts by multiplication alone."""
        self.display.register(signature='_signature')
        self.display.register('factor', 'linear')
        self.display['__str__'] = "{factor} {signature}"
        self.display['__repr__'] = (
            "factor={factor}, units='{signature}', linear={linear}"
        )

    def _signature(self) -> str:
        return unit_.to_symbol(self.units)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Reduction):
            return NotImplemented
        same_factor = (
            self.factor == other.factor
            or (numpy.isnan(self.factor) and numpy.isnan(other.factor))
        )
        return (
            same_factor
            and self.linear == other.linear
            and dict(self.units) == dict(other.units)
        )


def reduce(tokens: typing.Iterable[symbolic.DecodedToken]) -> Reduction:
    """Fold decoded tokens into their base units.

    Parameters
    ----------
    tokens : iterable of `~symbolic.DecodedToken`
        The terms of a unit expression, in order.

    Returns
    -------
    `~reduction.Reduction`
        The summed exponent of each base unit that does not cancel, in order
        of first appearance; the aggregate multiplicative factor; and whether
        all terms are linear.

    Notes
    -----
    The factor of each term is ``prefix**exponent * unit**exponent``, where
    the prefix only contributes if the matched symbol admits prefixes.

    Examples
    --------
    Equal and opposite terms cancel:

    >>> reduce(tokens_of('A^-2 A^2')).units
    {}
    """
    factor = 1.0
    exponents = {}
    linear = True
    for token in tokens:
        unit, exponent = token.unit, token.exponent
        for base, power in unit.base_units.items():
            exponents[base] = exponents.get(base, 0) + power * exponent
        if unit.prefix_allowed(token.symbol):
            factor *= token.prefix.factor ** exponent
        factor *= unit.factor(token.symbol) ** exponent
        linear = linear and unit.is_conversion_linear
    units = {base: power for base, power in exponents.items() if power != 0}
    return Reduction(factor if linear else numpy.nan, units, linear)

