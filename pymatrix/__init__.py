"""
PyMatrix: dense two-dimensional matrices over any arithmetic element type.

Elements are stored in a single contiguous numpy buffer in row-major
order. Numeric dtypes use native numpy storage; ``dtype=object`` holds
arbitrary Python numbers (Fraction, Decimal, ...).

Submodules:
    core: Exceptions, validation, output formatting
    dense: The Matrix type
"""

__version__ = "0.1.0"

from pymatrix.core.exceptions import (
    MatrixError,
    ValidationError,
    DimensionError,
    ZeroSizeError,
    InitializerWrongSizeError,
    IncompatibleSizesAddError,
    IncompatibleSizesMultiplyError,
    IndexOutOfRangeError,
)
from pymatrix.core.formatting import FormatOptions, render, set_output_width
from pymatrix.dense import Matrix

__all__ = [
    "__version__",
    "Matrix",
    # Formatting
    "FormatOptions",
    "render",
    "set_output_width",
    # Exceptions
    "MatrixError",
    "ValidationError",
    "DimensionError",
    "ZeroSizeError",
    "InitializerWrongSizeError",
    "IncompatibleSizesAddError",
    "IncompatibleSizesMultiplyError",
    "IndexOutOfRangeError",
]
