"""
Core infrastructure for PyMatrix.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators and element conversion
    formatting: Output width configuration and text rendering
"""

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
from pymatrix.core.formatting import (
    DEFAULT_OUTPUT_WIDTH,
    FormatOptions,
    format_options_for,
    get_output_width,
    render,
    reset_output_widths,
    set_output_width,
)

__all__ = [
    # Exceptions
    "MatrixError",
    "ValidationError",
    "DimensionError",
    "ZeroSizeError",
    "InitializerWrongSizeError",
    "IncompatibleSizesAddError",
    "IncompatibleSizesMultiplyError",
    "IndexOutOfRangeError",
    # Formatting
    "DEFAULT_OUTPUT_WIDTH",
    "FormatOptions",
    "format_options_for",
    "get_output_width",
    "render",
    "reset_output_widths",
    "set_output_width",
]
