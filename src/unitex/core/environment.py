import collections.abc
import configparser
import json
import os
import pathlib
import typing


PathLike = typing.Union[str, os.PathLike]


def search(
    paths: typing.Iterable[typing.Optional[PathLike]],
    file: PathLike,
) -> typing.Optional[pathlib.Path]:
    """Search `paths` for `file`.

    Parameters
    ----------
    paths : iterable of path-like
        The directories to search, in the order given. This function skips
        members that are ``None`` or that are not existing directories.

    file : path-like
        The file to locate.

    Returns
    -------
    path or `None`
        The full path to the file, if found.
    """
    for p in paths:
        if p is None:
            continue
        path = pathlib.Path(p).expanduser()
        if path.is_dir() and (test := path / str(file)).exists():
            return test.resolve()
    return None


_DEFAULTS = {
    'limit': '100',
}


class Environment(collections.abc.Mapping):
    """Settings from the first ``unitex.ini`` file on the search path.

    The search path is, in order: the current working directory, the user's
    home directory, ``~/.config``, ``/etc/unitex``, the directory named by the
    ``UNITEX_INI`` environment variable and the top of this package. Values
    missing from the file, or from the requested section, take their
    defaults.

    Parameters
    ----------
    section : string, default='registry'
        The section of the file to read.
    """

    def __init__(self, section: str='registry') -> None:
        self.section = section
        """The name of the section to read."""
        home = pathlib.Path('~').expanduser()
        paths = [
            pathlib.Path.cwd(),
            home,
            home / '.config',
            '/etc/unitex',
            os.environ.get('UNITEX_INI'),
            pathlib.Path(__file__).parent.parent,
        ]
        config = configparser.ConfigParser(defaults=_DEFAULTS)
        self.path = search(paths, 'unitex.ini')
        """The file that provided the settings, if any."""
        if self.path is not None:
            config.read(self.path)
        if config.has_section(section):
            self._config = config[section]
        else:
            self._config = config[configparser.DEFAULTSECT]

    @property
    def limit(self) -> int:
        """The size bound of the simplification cache."""
        return self._config.getint('limit')

    def __len__(self) -> int:
        """The number of available settings."""
        return len(self._config)

    def __iter__(self):
        """Iterate over available settings."""
        yield from self._config

    def __getitem__(self, key: str):
        """Access settings by mapping key."""
        if key in self._config:
            return self._config[key]
        raise KeyError(
            f"{self.section!r} has no value for {key!r}"
        ) from None

    def __str__(self) -> str:
        return json.dumps(dict(self._config), indent=4, sort_keys=True)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.path}):\n{self}"

