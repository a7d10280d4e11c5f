"""
Find simpler expressions for units.

The search tries every unordered pair of reference units, each raised to a
small integer power, and keeps the pairs that are equivalent to the original
expression at a probe value of 1. A pair with one empty member is a single
unit, so the search also considers single-unit answers.
"""

import sys
import typing

from unitex.core import metric
from unitex.core import registry as registry_
from unitex.core import unit as unit_


EXPONENTS = (1, 2, -1, -2, 3, -3)
"""The exponents to try for each reference unit, in order."""


_WORST = -sys.maxsize - 1


def unit_order(symbol: str) -> typing.Tuple[bool, int, str]:
    """Sort key that puts a symbol with an uppercase letter first.

    Ties go to the shorter symbol, and then to the lexically smaller one.
    """
    upper = any(c.isalpha() and c.isupper() for c in symbol)
    return (not upper, len(symbol), symbol)


def _term(symbol: str, exponent: int) -> str:
    return symbol if exponent == 1 else f"{symbol}^{exponent}"


def _join(first: str, e1: int, second: str, e2: int) -> str:
    """Write a pair of unit powers in canonical order."""
    if unit_order(first) > unit_order(second):
        first, e1, second, e2 = second, e2, first, e1
    return ' '.join(_term(s, e) for s, e in ((first, e1), (second, e2)) if s)


def score(first: str, e1: int, second: str, e2: int) -> int:
    """Rate the complexity of a pair of unit powers. Lower is simpler.

    A single unit scores far below any pair. Each non-empty member adds a
    penalty that grows with the magnitude of its exponent and that is larger
    for a negative exponent than for a positive exponent of equal magnitude.
    """
    if not first and not second:
        return _WORST
    value = 0 if first and second else _WORST
    for symbol, exponent in ((first, e1), (second, e2)):
        if symbol:
            value += 2 ** (2 * abs(exponent) + (exponent < 0))
    return value


def _matches(
    target: typing.Mapping[unit_.Unit, int],
    first: typing.Mapping[unit_.Unit, int],
    e1: int,
    second: typing.Mapping[unit_.Unit, int],
    e2: int,
) -> bool:
    """True if a pair of unit powers has the target signature."""
    for base in {*target, *first, *second}:
        power = first.get(base, 0) * e1 + second.get(base, 0) * e2
        if power != target.get(base, 0):
            return False
    return True


def simplify(
    text: str,
    *extra,
    registry: registry_.Registry=None,
) -> str:
    """Find a simpler, equivalent form of a unit expression.

    Parameters
    ----------
    text : string
        The unit expression to simplify.

    *extra
        Zero or more units or iterables of units to use as references in
        place of the default catalog.

    registry : `~registry.Registry`, optional
        The caches to use. The registry memoizes results in a bounded cache
        that it empties when full.

    Returns
    -------
    string
        The simplest equivalent expression, or `text` if the search found no
        equivalent expression. Among equally simple expressions, this
        function prefers those that appear in `text`, then those that come
        first according to `unit_order`.

    Examples
    --------
    >>> simplify('kg m s^-2')
    'N'
    >>> simplify('A^-2 A^2')
    ''
    """
    registry = registry_.resolve(registry)
    references = metric.collect(*extra)
    return registry.simplified.compute(
        (text, frozenset(references)),
        lambda: _search(text, extra, references, registry),
    )


def _search(
    text: str,
    extra: tuple,
    references: typing.Sequence[unit_.Unit],
    registry: registry_.Registry,
) -> str:
    """Run the brute-force simplification search."""
    original = metric.parse(text, *extra, registry=registry)
    target = dict(original.base_units)
    context = (references,) if extra else ()
    signatures = [dict(unit.base_units) for unit in references]
    buckets: typing.Dict[int, typing.Set[str]] = {}
    for e1 in EXPONENTS:
        for e2 in EXPONENTS:
            processed = set()
            for u1, b1 in zip(references, signatures):
                for u2, b2 in zip(references, signatures):
                    if u2 in processed or not _matches(target, b1, e1, b2, e2):
                        continue
                    symbol = _join(u1.symbol, e1, u2.symbol, e2)
                    candidate = metric.parse(
                        symbol, *context, registry=registry,
                    )
                    if not metric.equivalent(
                        1, original, candidate, registry=registry,
                    ):
                        continue
                    if not candidate.symbol.strip():
                        return candidate.symbol.strip()
                    rank = score(u1.symbol, e1, u2.symbol, e2)
                    buckets.setdefault(rank, set()).add(symbol)
                processed.add(u1)
    if not buckets:
        return text
    best = buckets[min(buckets)]
    return min(best, key=lambda s: (s not in text, *unit_order(s)))

