# read version from installed package
from importlib.metadata import version
__version__ = version("unitex")

from unitex.core.conversion import (
    DimensionMismatchError,
    NonMultiplicativeError,
    UnitConversionError,
)
from unitex.core.metric import (
    collect,
    convert,
    convertible,
    decode,
    equivalent,
    factor,
    is_valid,
    parse,
    parse_tokens,
    proportional,
)
from unitex.core.registry import Registry
from unitex.core.simplification import simplify
from unitex.core.symbolic import (
    AmbiguousUnitError,
    ExponentError,
    UnitParsingError,
)
from unitex.core.unit import (
    EMPTY_UNIT,
    Unit,
    describe,
    is_unknown,
    to_symbol,
)

