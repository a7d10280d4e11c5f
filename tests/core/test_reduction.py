import math

import pytest

from unitex.catalog import si
from unitex.core import metric
from unitex.core import reduction


s, m, kg, g, A, K, mol, cd = si.BASE_UNITS


@pytest.fixture
def reductions():
    """Test cases for reducing expressions to base units."""
    return {
        'm': (1.0, {m: 1}),
        'km': (1e3, {m: 1}),
        'km^2': (1e6, {m: 2}),
        'kg': (1e3, {g: 1}),
        'mg': (1e-3, {g: 1}),
        'N': (1e3, {g: 1, m: 1, s: -2}),
        'kg m s^-2': (1e3, {g: 1, m: 1, s: -2}),
        'mJ': (1.0, {g: 1, m: 2, s: -2}),
        'A^-2 A^2': (1.0, {}), # equal and opposite terms cancel
        't t^-1': (1.0, {}),
        '°': (math.pi / 180, {}), # dimensionless, but not unity
        'Hz': (1.0, {s: -1}),
        'MAngstrom': (1e-4, {m: 1}),
    }


def test_reduce(reductions: dict):
    """Test reducing linear expressions."""
    for string, (factor, units) in reductions.items():
        result = reduction.reduce(metric.decode(string))
        assert result.linear, string
        assert result.factor == pytest.approx(factor), string
        assert result.units == units, string


def test_reduce_order():
    """Base units keep their order of first appearance."""
    result = reduction.reduce(metric.decode('s^-2 kg m'))
    assert list(result.units) == [s, g, m]


def test_reduce_non_linear():
    """A shifted term makes the factor undefined."""
    result = reduction.reduce(metric.decode('°C m'))
    assert not result.linear
    assert math.isnan(result.factor)
    assert result.units == {K: 1, m: 1}


def test_reduce_idempotent():
    """Reducing the symbol of a reduction gives the same reduction."""
    first = reduction.reduce(metric.decode('J^2 T^-1 A'))
    symbol = str(first).split(' ', 1)[1]
    second = reduction.reduce(metric.decode(symbol))
    assert second.units == first.units


def test_reduction_equality():
    """Reductions compare by factor, units and linearity."""
    a = reduction.reduce(metric.decode('N'))
    b = reduction.reduce(metric.decode('kg m s^-2'))
    c = reduction.reduce(metric.decode('°C'))
    d = reduction.reduce(metric.decode('°C'))
    assert a == b
    assert a != c
    assert c == d

