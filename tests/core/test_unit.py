import math

import pytest

from unitex.catalog import si
from unitex.core import registry
from unitex.core import unit


def test_empty_unit():
    """The dimensionless unit has an empty symbol and no base units."""
    u = unit.EMPTY_UNIT
    assert u.symbol == ''
    assert u.is_basic
    assert u.is_conversion_linear
    assert u.base_units == {}
    assert u.factor() == 1.0
    assert not u.prefix_allowed('')
    assert u.to_base(2.5) == 2.5
    u.base_units[unit.EMPTY_UNIT] = 1
    assert u.base_units == {}


def test_unknown_unit():
    """Unknown units with equal symbols are equal and share a dimension."""
    a = unit.UnknownUnit('abc', inner=unit.UnknownUnit('abc'))
    b = unit.UnknownUnit('abc', inner=unit.UnknownUnit('abc'))
    c = unit.UnknownUnit('xyz', inner=unit.UnknownUnit('xyz'))
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a.base_units == b.base_units
    assert a.base_units != c.base_units
    assert a not in a.base_units
    assert unit.is_unknown(a)
    assert not unit.is_unknown(si.BASE_UNITS[0])


def test_describe():
    """Test the diagnostic representation of units."""
    reg = registry.Registry()
    meter = si.BASE_UNITS[1]
    assert unit.describe(meter) == 'm'
    assert unit.describe(reg.unknown_unit('abc')) == 'abc (unknown unit)'
    assert unit.describe(meter, reg.unknown_unit('abc')) == (
        '[m, abc (unknown unit)]'
    )


def test_to_symbol():
    """Test writing a signature as a unit expression."""
    s, m, _, g, *_ = si.BASE_UNITS
    assert unit.to_symbol({g: 1, m: 2, s: -2}) == 'g m^2 s^-2'
    assert unit.to_symbol({m: 1, s: 0}) == 'm'
    assert unit.to_symbol({}) == ''


def test_named_unit_signature():
    """Catalog units resolve their signatures to catalog units."""
    s, m, kg, g, *_ = si.BASE_UNITS
    assert m.base_units == {m: 1}
    assert kg.base_units == {g: 1}
    assert not kg.is_basic
    assert kg.prefixes == ()
    newton = next(u for u in si.DERIVED_UNITS if u.symbol == 'N')
    assert newton.base_units == {g: 1, m: 1, s: -2}
    assert newton.factor() == 1e3


def test_shifted_named_unit():
    """A unit with a shift is non-linear and has no factor."""
    celsius = next(u for u in si.DERIVED_UNITS if u.symbol == '°C')
    assert not celsius.is_conversion_linear
    assert math.isnan(celsius.factor())
    assert celsius.to_base(0) == 273.15
    assert celsius.from_base(celsius.to_base(1.0)) == pytest.approx(1.0)


def test_prefix():
    """The identity prefix has an empty symbol and unit factor."""
    assert unit.IDENTITY_PREFIX.symbol == ''
    assert unit.IDENTITY_PREFIX.factor == 1.0
    micro = unit.Prefix(('μ', 'u'), 1e-6, 'micro')
    assert micro.symbol == 'μ'
    assert 'u' in micro.symbols

