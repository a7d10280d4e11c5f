from unitex.core import unit


_metric = [
    {'symbols': ('y',), 'name': 'yocto', 'factor': 1e-24},
    {'symbols': ('z',), 'name': 'zepto', 'factor': 1e-21},
    {'symbols': ('a',), 'name': 'atto', 'factor': 1e-18},
    {'symbols': ('f',), 'name': 'femto', 'factor': 1e-15},
    {'symbols': ('p',), 'name': 'pico', 'factor': 1e-12},
    {'symbols': ('n',), 'name': 'nano', 'factor': 1e-9},
    {'symbols': ('μ', 'u'), 'name': 'micro', 'factor': 1e-6},
    {'symbols': ('m',), 'name': 'milli', 'factor': 1e-3},
    {'symbols': ('c',), 'name': 'centi', 'factor': 1e-2},
    {'symbols': ('d',), 'name': 'deci', 'factor': 1e-1},
    {'symbols': ('da',), 'name': 'deca', 'factor': 1e+1},
    {'symbols': ('h',), 'name': 'hecto', 'factor': 1e+2},
    {'symbols': ('k',), 'name': 'kilo', 'factor': 1e+3},
    {'symbols': ('M',), 'name': 'mega', 'factor': 1e+6},
    {'symbols': ('G',), 'name': 'giga', 'factor': 1e+9},
    {'symbols': ('T',), 'name': 'tera', 'factor': 1e+12},
    {'symbols': ('P',), 'name': 'peta', 'factor': 1e+15},
    {'symbols': ('E',), 'name': 'exa', 'factor': 1e+18},
    {'symbols': ('Z',), 'name': 'zetta', 'factor': 1e+21},
    {'symbols': ('Y',), 'name': 'yotta', 'factor': 1e+24},
]

_binary = [
    {'symbols': ('Ki', 'ki'), 'name': 'kibi', 'factor': 2**10},
    {'symbols': ('Mi',), 'name': 'mebi', 'factor': 2**20},
    {'symbols': ('Gi',), 'name': 'gibi', 'factor': 2**30},
    {'symbols': ('Ti',), 'name': 'tebi', 'factor': 2**40},
    {'symbols': ('Pi',), 'name': 'pebi', 'factor': 2**50},
    {'symbols': ('Ei',), 'name': 'exbi', 'factor': 2**60},
    {'symbols': ('Zi',), 'name': 'zebi', 'factor': 2**70},
    {'symbols': ('Yi',), 'name': 'yobi', 'factor': 2**80},
]


SI = tuple(unit.Prefix(**entry) for entry in _metric)
"""The decimal prefixes of the International System of Units."""

BINARY = tuple(unit.Prefix(**entry) for entry in _binary)
"""The IEC prefixes for powers of 1024."""

DEFAULT = SI + BINARY
"""The prefixes that most catalog units admit."""

