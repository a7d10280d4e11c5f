from unitex.core import iterables


def test_unique():
    """Test the function that extracts unique items while preserving order."""
    cases = {
        'a': ['a'],
        ('a', 'b'): ['a', 'b'],
        ('a', 'b', 'a'): ['a', 'b'],
        ('a', 'b', 'a', 'c'): ['a', 'b', 'c'],
        ('a', 'b', 'b', 'a', 'c'): ['a', 'b', 'c'],
    }
    for items, expected in cases.items():
        assert list(iterables.unique(*items)) == expected


def test_flatten():
    """Test collecting single objects and iterables into one list."""
    assert iterables.flatten([1, 2], 3, (4,)) == [1, 2, 3, 4]
    assert iterables.flatten('ab', ['cd']) == ['ab', 'cd']
    assert iterables.flatten() == []
    assert iterables.flatten([[1], 2]) == [[1], 2]


def test_repr_str_mixin():
    """Test the configurable string representations."""

    class Thing(iterables.ReprStrMixin):
        def __init__(self, name: str, size: int) -> None:
            self.name = name
            self.size = size
            self.display.register('name', length='size')
            self.display['__str__'] = "{name}"
            self.display['__repr__'] = "{name}, length={length}"

    thing = Thing('box', 3)
    assert str(thing) == 'box'
    assert repr(thing).endswith("Thing(box, length=3)")
