import pytest

from unitex.catalog import si
from unitex.core import symbolic
from unitex.core import unit


def test_string_range():
    """Test the ordering and containment logic of string ranges."""
    r = symbolic.StringRange(2, 5)
    assert len(r) == 4
    assert r.comprises(symbolic.StringRange(2, 4))
    assert r.comprises(symbolic.StringRange(3, 5))
    assert r.comprises(symbolic.StringRange(3, 4))
    assert not r.comprises(symbolic.StringRange(2, 5))
    assert not r.comprises(symbolic.StringRange(1, 4))
    assert r.intersects(symbolic.StringRange(5, 7))
    assert r.intersects(symbolic.StringRange(0, 2))
    assert not r.intersects(symbolic.StringRange(6, 7))
    ranges = [
        symbolic.StringRange(3, 3),
        symbolic.StringRange(0, 4),
        symbolic.StringRange(0, 1),
    ]
    assert sorted(ranges) == [
        symbolic.StringRange(0, 1),
        symbolic.StringRange(0, 4),
        symbolic.StringRange(3, 3),
    ]
    with pytest.raises(ValueError):
        symbolic.StringRange(3, 2)


def test_split():
    """Test splitting a string into pieces at whitespace."""
    pieces = symbolic.split(' kg^2  s^-1')
    assert [p.name for p in pieces] == ['kg', 's']
    assert [p.exponent for p in pieces] == [2, -1]
    assert [p.location for p in pieces] == [
        symbolic.StringRange(1, 4),
        symbolic.StringRange(7, 10),
    ]
    empty = symbolic.split('   ')
    assert len(empty) == 1
    assert empty[0].name == ''
    assert empty[0].exponent == 1


@pytest.mark.parametrize('power', ['1.5', 'x', '', '--2'])
def test_malformed_exponent(power):
    """A non-integer exponent is an error once its piece matches."""
    pieces = symbolic.split(f'm^{power}')
    with pytest.raises(symbolic.ExponentError):
        symbolic.match(pieces, si.UNITS)


def test_identify():
    """Test matching a single term against candidate units."""
    cases = {
        'm': ('', 'm'),
        'km': ('k', 'm'),
        'μs': ('μ', 's'),
        'us': ('u', 's'),
        'kg': ('', 'kg'),
        'mg': ('m', 'g'),
        'dam': ('da', 'm'),
        'Kis': ('Ki', 's'),
        '°C': ('', '°C'),
        'Ohm': ('', 'Ω'),
        'MAngstrom': ('M', 'Å'),
        'd': ('', 'd'),
    }
    for name, (prefix, symbol) in cases.items():
        found = symbolic.identify(name, si.UNITS)
        assert found is not None, name
        p, u, _ = found
        assert p.symbol == prefix
        assert u.symbol == symbol
    for name in ('kd', 'xm', 'Mkg', 'not_a_unit'):
        assert symbolic.identify(name, si.UNITS) is None


def test_match():
    """Unmatched pieces are absent from the result."""
    found = symbolic.match(symbolic.split('km^2 foo s^-1'), si.UNITS)
    assert sorted(found) == [
        symbolic.StringRange(0, 3),
        symbolic.StringRange(9, 12),
    ]
    km = found[symbolic.StringRange(0, 3)]
    assert km.prefix.factor == 1e3
    assert km.symbol == 'm'
    assert km.exponent == 2


def _token(symbol: str):
    return symbolic.DecodedToken(
        unit.IDENTITY_PREFIX, unit.EMPTY_UNIT, symbol, 1
    )


def test_resolve_comprised():
    """Ranges within a larger range do not survive resolution."""
    matches = {
        symbolic.StringRange(6, 7): _token('c'),
        symbolic.StringRange(0, 4): _token('a'),
        symbolic.StringRange(0, 1): _token('b'),
        symbolic.StringRange(3, 4): _token('d'),
    }
    resolved = symbolic.resolve(matches, 'some string')
    assert [token.symbol for _, token in resolved] == ['a', 'c']


def test_resolve_ambiguous():
    """Intersecting ranges are an error."""
    matches = {
        symbolic.StringRange(0, 3): _token('a'),
        symbolic.StringRange(2, 5): _token('b'),
    }
    with pytest.raises(symbolic.AmbiguousUnitError) as err:
        symbolic.resolve(matches, 'abcdef')
    assert err.value.first[1].symbol == 'a'
    assert err.value.second[1].symbol == 'b'
    assert "'abcdef'" in str(err.value)

