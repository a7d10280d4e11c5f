import collections
import collections.abc
import typing


T = typing.TypeVar('T')


def unique(*items: T) -> typing.List[T]:
    """Remove repeated items while preserving order."""
    return list(dict.fromkeys(items))


def flatten(*groups) -> typing.List:
    """Collect the members of `groups` into a single ordered list.

    Each member of `groups` may be a single object or a non-string iterable of
    objects. This function does not recurse beyond one level of nesting.

    Examples
    --------
    >>> flatten([1, 2], 3, (4,))
    [1, 2, 3, 4]
    """
    flat = []
    for group in groups:
        if isinstance(group, collections.abc.Iterable) and not isinstance(
            group, str
        ):
            flat.extend(group)
        else:
            flat.append(group)
    return flat


class DisplayMap:
    """An attribute mapping for string formatting."""

    def __init__(self, instance: 'ReprStrMixin') -> None:
        self._instance = instance

    def __getitem__(self, name: str) -> str:
        """Get the named attribute and call it if necessary."""
        attr = getattr(self._instance, self._instance.display[name])
        this = attr() if callable(attr) else attr
        return str(this)


class Display(collections.UserDict):
    """A dict-like object for string representations.

    The special keys ``'__str__'`` and ``'__repr__'`` hold format strings. All
    other keys map a format field to the name of the attribute that supplies
    its value.
    """

    def __init__(self, **kwargs):
        mapping = {'__str__': '', '__repr__': '', **kwargs}
        super().__init__(mapping)

    def register(self, *names: str, **pairs: str):
        """Set or update which attributes to show.

        Parameters
        ----------
        *names : iterable of strings
            Zero or more names of attributes to include in the display.

        **pairs : dict
            Zero or more key-value pairs in which the key is the name of a
            format field and the value is the name of the attribute to use in
            its place.
        """
        for name in names:
            self.data[name] = name
        for name, alias in pairs.items():
            self.data[name] = alias


class ReprStrMixin:
    """A mixin class that provides support for `__repr__` and `__str__`."""

    _display = None

    @property
    def display(self) -> Display:
        """The attributes to display for each method."""
        if self._display is None:
            self._display = Display()
        return self._display

    def __str__(self) -> str:
        """A simplified representation of this object."""
        return self._get_display('__str__')

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        string = self._get_display('__repr__')
        module = f"{self.__module__.replace('unitex.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({string or self})"

    def _get_display(self, method: str):
        """Helper method for `__str__` and `__repr__`."""
        target = self.display[method]
        return target.format_map(DisplayMap(self))

