import logging
import math

import pytest

from unitex.catalog import level
from unitex.core import metric
from unitex.core import registry


@pytest.fixture
def references():
    """Test cases for levels relative to a reference.

    Each key holds the level unit, the reference value and the reference
    unit. Each value holds the base-unit value of a level of 0.3, a level and
    its base-unit value, and the level of a base-unit value of 2.
    """
    return {
        (level.BEL, 1, 'mW'): (
            1.9952623149688795,
            (2, 100.0),
            0.3010299956639812,
        ),
        (level.BEL, 1.0000002, 'mJ'): (
            1.9952627140213424,
            (3, 1000.0),
            0.3010299088050935,
        ),
        (level.BEL, 1.03, 'mV'): (
            1.454913670961437,
            (3, 32.57145989973431),
            0.576385541917618,
        ),
        (level.NEPER, 1, 'mW'): (
            1.8221188003905089,
            (2, 54.598150033144236),
            0.34657359027997264,
        ),
        (level.NEPER, 1.0000002, 'mJ'): (
            1.8221191648142687,
            (3, 403.42887417849374),
            0.3465734902799827,
        ),
        (level.NEPER, 1.03, 'mV'): (
            1.3903545718032833,
            (3, 20.688103030883298),
            0.6635883783184009,
        ),
    }


def test_reference_level(references: dict):
    """Test conversions of levels with a reference."""
    for (unit, value, reference), expected in references.items():
        this = unit.in_reference_to(value, reference)
        small, (given, base), ratio = expected
        assert this.to_base(0.3) == pytest.approx(small), this
        assert this.to_base(given) == pytest.approx(base), this
        assert this.from_base(2) == pytest.approx(ratio), this


def test_symbols():
    """The symbol of a level names its function, value and reference."""
    cases = {
        (level.BEL, 1, 'mW'): 'log(re 1 mW)',
        (level.BEL, 1.0000002, 'mJ'): 'log(re 1.0000002 mJ)',
        (level.NEPER, 1.03, 'mV'): 'ln(re 1.03 mV)',
        (level.BEL, 1.0, 'W m^-2'): 'log(re 1 W m^-2)',
    }
    for (unit, value, reference), expected in cases.items():
        assert unit.in_reference_to(value, reference).symbol == expected


def test_kind():
    """The kind of a reference follows from its base units."""
    cases = {
        'mW': level.ReferenceKind.POWER,
        'mJ': level.ReferenceKind.POWER,
        'W m^-2': level.ReferenceKind.POWER,
        'mV': level.ReferenceKind.ROOT_POWER,
        'km h^-1': level.ReferenceKind.ROOT_POWER,
    }
    for reference, kind in cases.items():
        assert level.BEL.in_reference_to(1, reference).kind is kind
        assert level.infer_kind(metric.parse(reference)) is kind
    assert level.infer_kind(metric.parse('mol')) is None


def test_unknown_kind():
    """A reference without a known kind requires an explicit kind."""
    with pytest.raises(level.ReferenceTypeError) as err:
        level.BEL.in_reference_to(1, 'mol')
    assert 'mol' in str(err.value)
    this = level.BEL.in_reference_to(
        1, 'mol', kind=level.ReferenceKind.POWER,
    )
    assert this.kind is level.ReferenceKind.POWER
    assert this.to_base(1) == pytest.approx(10.0)


def test_kind_mismatch(caplog):
    """A kind that disagrees with the reference is a warning."""
    with caplog.at_level(logging.WARNING, logger='unitex.catalog.level'):
        this = level.BEL.in_reference_to(
            1, 'mV', kind=level.ReferenceKind.POWER,
        )
    assert this.kind is level.ReferenceKind.POWER
    assert 'does not belong to kind POWER' in caplog.text


def test_equality():
    """Levels with equal parameters are interchangeable."""
    a = level.BEL.in_reference_to(1, 'mW')
    b = level.BEL.in_reference_to(1.0, metric.parse('mW'))
    c = level.NEPER.in_reference_to(1, 'mW')
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_reference_level_properties():
    """A level has the signature of its reference and no factor."""
    this = level.BEL.in_reference_to(1, 'mW')
    assert this.base_units == metric.parse('mW').base_units
    assert math.isnan(this.factor())
    assert not this.is_conversion_linear
    assert not this.is_basic
    assert this.prefixes == ()
    assert level.BEL in this.compatible_units
    assert level.NEPER in this.compatible_units


def test_level_units():
    """The bel is a multiple of the basic neper."""
    assert level.NEPER.is_basic
    assert not level.BEL.is_basic
    assert level.BEL.base_units == {level.NEPER: 1}
    assert level.BEL.notation == 'log'
    assert level.NEPER.notation == 'ln'
    assert metric.convert(1, 'B', 'Np') == pytest.approx(math.log(10) / 2)
    assert metric.convert(10, 'dB', 'B') == pytest.approx(1.0)


def test_parser_exponent():
    """Exponents inside and after the notation multiply."""
    reg = registry.Registry()
    cases = {
        'log(re 1 mW)': 1,
        'log^2(re 1 mW)': 2,
        'log(re 1 mW)^3': 3,
        'ln^2(re 1 mW)^3': 6,
    }
    for string, exponent in cases.items():
        tokens = metric.parse_tokens(string, registry=reg)
        assert len(tokens) == 1, string
        _, token = tokens[0]
        assert token.exponent == exponent, string
        assert isinstance(token.unit, level.ReferenceLevel)


def test_parser_separators():
    """A comma may separate the parts of the notation."""
    a = metric.parse('log(re,1,mW)')
    b = metric.parse('log(re 1 mW)')
    assert a == b


def test_convert_reference_level():
    """The reference value is a value in the reference unit."""
    cases = {
        (0.0, 'log(re 1 W)', 'W'): 1.0,
        (0.0, 'log(re 1 mW)', 'mW'): 1.0,
        (0.0, 'log(re 1 mW)', 'W'): 1e-3,
        (1.0, 'log(re 1 W)', 'W'): 10.0,
        (2.0, 'log(re 1 kW)', 'W'): 1e5,
        (10.0, 'W', 'log(re 1 W)'): 1.0,
        (1.0, 'W', 'log(re 1 mW)'): 3.0,
        (0.0, 'ln(re 2 V)', 'mV'): 2e3,
    }
    for (value, origin, target), expected in cases.items():
        result = metric.convert(value, origin, target)
        assert result == pytest.approx(expected), (origin, target)


def test_reference_level_base_units():
    """A level and its reference agree on base-unit values."""
    for reference in ('W', 'mW', 'kJ', 'V'):
        this = level.BEL.in_reference_to(1, reference)
        unit = metric.parse(reference)
        assert this.to_base(0.0) == pytest.approx(unit.to_base(1.0))
        assert this.from_base(unit.to_base(1.0)) == pytest.approx(0.0)
