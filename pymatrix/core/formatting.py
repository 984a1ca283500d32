"""
Textual output configuration and rendering.

Each element type has its own output width, shared by every matrix of
that type. render() takes an explicit FormatOptions which, when given,
overrides the type-scoped width:

    set_output_width(3)                         # float64 matrices
    text = render(m)                            # uses width 3
    text = render(m, FormatOptions(width=8))    # ignores the registry

Layout (width 3):

    (   1   2   3 )
    (   4   5   6 )
    <blank line>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import DTypeLike

from pymatrix.core.validation import check_element_dtype, check_output_width

if TYPE_CHECKING:
    from pymatrix.dense.matrix import Matrix


DEFAULT_OUTPUT_WIDTH = 5

# Significant digits for floating-point elements
FLOAT_PRECISION = 6

# Rendering of a moved-from matrix
EMPTY_RENDERING = "()\n"


@dataclass(frozen=True)
class FormatOptions:
    """Formatting specification for rendering a matrix."""
    width: int = DEFAULT_OUTPUT_WIDTH

    def __post_init__(self):
        check_output_width(self.width)


_output_widths: dict[np.dtype, int] = {}


def set_output_width(width: int, dtype: DTypeLike = np.float64) -> None:
    """
    Set the character width of elements for every matrix of ``dtype``.

    Args:
        width: New element width (non-negative)
        dtype: Element type the width applies to

    Raises:
        ValidationError: If width is negative or dtype is not arithmetic
    """
    _output_widths[check_element_dtype(dtype)] = check_output_width(width)


def get_output_width(dtype: DTypeLike = np.float64) -> int:
    """Current element width for ``dtype`` (DEFAULT_OUTPUT_WIDTH if unset)."""
    return _output_widths.get(check_element_dtype(dtype), DEFAULT_OUTPUT_WIDTH)


def reset_output_widths() -> None:
    """Forget every width set with set_output_width()."""
    _output_widths.clear()


def format_options_for(dtype: DTypeLike) -> FormatOptions:
    """FormatOptions reflecting the current width for ``dtype``."""
    return FormatOptions(width=get_output_width(dtype))


def format_element(value: Any, width: int) -> str:
    """
    Right-align one element in a field of ``width`` characters.

    Floating-point values use FLOAT_PRECISION significant digits in
    general format, so 1.0 prints as ``1`` and 0.5 as ``0.5``.
    """
    if isinstance(value, (float, np.floating)):
        return f"{value:>{width}.{FLOAT_PRECISION}g}"
    return f"{value!s:>{width}}"


def render(matrix: Matrix, options: FormatOptions | None = None) -> str:
    """
    Render a matrix as text, one parenthesized line per row.

    A trailing blank line follows the last row. A moved-from matrix
    renders as ``EMPTY_RENDERING``.

    Args:
        matrix: Matrix to render
        options: Explicit formatting; None uses the width registered
                 for the matrix dtype

    Returns:
        The rendered text
    """
    if matrix.is_empty:
        return EMPTY_RENDERING

    if options is None:
        options = format_options_for(matrix.dtype)

    width = options.width
    lines = []
    for i in range(matrix.rows):
        cells = "".join(
            format_element(matrix[i, j], width) + " " for j in range(matrix.cols)
        )
        lines.append(f"( {cells})\n")
    lines.append("\n")
    return "".join(lines)
