import pytest

from unitex.catalog import si
from unitex.core import registry
from unitex.core import simplification


@pytest.fixture
def simplifications():
    """Test cases for unit simplification."""
    return {
        'kg m s^-2': 'N',
        'kg m^2 s^-2': 'J',
        'kg m^3 s^-2': 'J m',
        'kg^2 m^3 s^-4 A^-1': 'N Wb',
        'kg^3 m^4 s^-6 A^-1': 'J^2 T',
        'nm': 'nm', # nothing simpler
        'kg^2 m^3 s^-4 A^-1 A^-2 A^2': 'N Wb', # cancelling terms
        'A^-2 A^2': '', # dimensionless
        't t^-1': '',
        'Sv A^-2 A^2': 'Sv', # prefer symbols in the original text
    }


def test_simplify(simplifications: dict):
    """Test finding simpler equivalent expressions."""
    for text, expected in simplifications.items():
        assert simplification.simplify(text) == expected, text


def test_simplify_extra_units():
    """Restricting the references restricts the results."""
    reg = registry.Registry()
    assert simplification.simplify(
        'kg m s^-2', si.BASE_UNITS, registry=reg
    ) == 'kg m s^-2'
    assert simplification.simplify(
        'kg m^2 s^-2', si.DERIVED_UNITS, registry=reg
    ) == 'J'


def test_simplify_cache():
    """The registry memoizes results in a bounded cache."""
    reg = registry.Registry(limit=1)
    simplification.simplify('kg m s^-2', registry=reg)
    assert len(reg.simplified) == 1
    simplification.simplify('kg m^2 s^-2', registry=reg)
    assert len(reg.simplified) == 2
    simplification.simplify('A^-2 A^2', registry=reg)
    assert len(reg.simplified) == 1


def test_score():
    """Single units beat pairs, and small exponents beat large ones."""
    single = simplification.score('N', 1, '', 1)
    pair = simplification.score('N', 1, 'm', 1)
    assert single < pair
    assert simplification.score('N', 2, '', 1) > single
    assert simplification.score('N', -1, '', 1) > single
    assert simplification.score('N', -2, '', 1) > (
        simplification.score('N', 2, '', 1)
    )
    assert simplification.score('', 1, '', 1) < single


def test_unit_order():
    """Uppercase symbols come first, then shorter, then lexical."""
    symbols = ['mol', 'm', 'Pa', 'N', 'cd', 's']
    assert sorted(symbols, key=simplification.unit_order) == [
        'N', 'Pa', 'm', 's', 'cd', 'mol',
    ]

