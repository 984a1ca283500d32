"""
Input validation utilities for PyMatrix.

Each check_* function tests one precondition and raises at once. The
conversion helpers warn when a value changes on its way into the
element type and raise ValidationError when it cannot be represented.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IncompatibleSizesAddError,
    IncompatibleSizesMultiplyError,
    IndexOutOfRangeError,
    InitializerWrongSizeError,
    ValidationError,
    ZeroSizeError,
)

# dtype kinds whose scalars support +, -, unary -, and *
ARITHMETIC_KINDS = frozenset('iufcO')


def check_element_dtype(dtype: DTypeLike, name: str = "dtype") -> np.dtype:
    """
    Validate an element type and normalize it to a numpy dtype.

    Numeric dtypes and ``object`` (arbitrary Python values) are accepted.
    Booleans, strings, bytes, datetimes and structured dtypes are rejected
    because their elements do not support matrix arithmetic.

    Args:
        dtype: Anything numpy accepts as a dtype
        name: Parameter name for error messages

    Returns:
        The normalized numpy dtype

    Raises:
        ValidationError: If the dtype is unknown or not arithmetic
    """
    try:
        result = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a valid dtype: {dtype!r}") from e

    if result.kind not in ARITHMETIC_KINDS:
        raise ValidationError(
            f"{name}: non-arithmetic dtype {result}, expected a numeric dtype or object"
        )
    return result


def check_dimensions(rows: Any, cols: Any) -> tuple[int, int]:
    """
    Verify requested matrix dimensions.

    Args:
        rows: Requested number of rows
        cols: Requested number of columns

    Returns:
        (rows, cols) as plain ints

    Raises:
        ValidationError: If a dimension is not a non-negative integer
        ZeroSizeError: If either dimension is zero
    """
    for value, label in ((rows, "rows"), (cols, "cols")):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValidationError(
                f"{label}: expected an integer, got {type(value).__name__}"
            )
        if value < 0:
            raise ValidationError(f"{label}: must be non-negative, got {value}")

    if rows == 0 or cols == 0:
        raise ZeroSizeError(
            f"Cannot create a {rows}x{cols} matrix: rows and cols must both be positive"
        )
    return int(rows), int(cols)


def check_length(length: int, rows: int, cols: int, name: str = "elements") -> None:
    """
    Verify a flat element sequence fills a rows x cols matrix exactly.

    Raises:
        InitializerWrongSizeError: If length != rows * cols
    """
    if length != rows * cols:
        raise InitializerWrongSizeError(
            f"{name}: a {rows}x{cols} matrix needs {rows * cols} elements, got {length}"
        )


def check_rectangular(data: Any, name: str = "data") -> None:
    """
    Verify nested rows all have the same length.

    ndarrays and flat sequences pass unchecked.

    Raises:
        DimensionError: If rows differ in length or rows are mixed with
            single values
    """
    if not isinstance(data, (list, tuple)):
        return
    nested = [isinstance(row, (list, tuple, np.ndarray)) for row in data]
    if not any(nested):
        return
    if not all(nested):
        raise DimensionError(f"{name}: mixes rows with single values")
    lengths = sorted({len(row) for row in data})
    if len(lengths) > 1:
        raise DimensionError(f"{name}: rows have different lengths {lengths}")


def check_same_shape(
    left: tuple[int, int],
    right: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an elementwise operation have the same shape.

    Args:
        left: Shape of the left operand
        right: Shape of the right operand
        operation: Operation name for error messages ('add', 'subtract')

    Raises:
        IncompatibleSizesAddError: If the shapes differ
    """
    if left != right:
        raise IncompatibleSizesAddError(
            f"Cannot {operation} a {left[0]}x{left[1]} matrix and a "
            f"{right[0]}x{right[1]} matrix: shapes must match"
        )


def check_inner_dimensions(left: tuple[int, int], right: tuple[int, int]) -> None:
    """
    Verify two matrices can be multiplied.

    Raises:
        IncompatibleSizesMultiplyError: If left cols != right rows
    """
    if left[1] != right[0]:
        raise IncompatibleSizesMultiplyError(
            f"Cannot multiply a {left[0]}x{left[1]} matrix by a "
            f"{right[0]}x{right[1]} matrix: left has {left[1]} columns, "
            f"right has {right[0]} rows"
        )


def check_index(row: int, col: int, rows: int, cols: int) -> None:
    """
    Verify (row, col) addresses an element of a rows x cols matrix.

    Negative indices are out of range.

    Raises:
        IndexOutOfRangeError: If row or col is outside the matrix
    """
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexOutOfRangeError(
            f"Element ({row}, {col}) is out of range for a {rows}x{cols} matrix"
        )


def check_output_width(width: Any) -> int:
    """
    Verify a character width for textual output.

    Raises:
        ValidationError: If width is not a non-negative integer
    """
    if isinstance(width, bool) or not isinstance(width, (int, np.integer)):
        raise ValidationError(
            f"width: expected an integer, got {type(width).__name__}"
        )
    if width < 0:
        raise ValidationError(f"width: must be non-negative, got {width}")
    return int(width)


def _is_lossy(original: NDArray[Any], converted: NDArray[Any]) -> bool:
    """True when converting changed at least one value."""
    if original.dtype == converted.dtype:
        return False
    try:
        same = np.asarray(converted == original, dtype=bool)
        was_nan = np.asarray(original != original, dtype=bool)
    except (TypeError, ValueError):
        return False
    if converted.dtype.kind in 'fc':
        # NaN stays NaN; None or anything else turning into NaN is a change
        same = same | (np.isnan(converted) & was_nan)
    return not bool(np.all(same))


def as_elements(values: Any, dtype: np.dtype, name: str) -> NDArray[Any]:
    """
    Convert values to a freshly allocated array of the element type.

    The result never shares memory with ``values``.

    Args:
        values: Scalar, sequence, nested sequence, or ndarray
        dtype: Target element dtype (already validated)
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of ``dtype`` with the natural shape of ``values``

    Raises:
        ValidationError: If the values cannot be represented in ``dtype``

    Warns:
        UserWarning: If the conversion changed at least one value
    """
    if not isinstance(values, np.ndarray) and hasattr(values, '__iter__') \
            and not isinstance(values, (str, bytes)):
        values = list(values)

    if dtype.kind == 'O':
        try:
            return np.array(values, dtype=object)
        except ValueError as e:
            raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    try:
        original = np.asarray(values)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", np.exceptions.ComplexWarning)
            converted = np.array(original, dtype=dtype)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValidationError(f"{name}: cannot convert to {dtype}: {e}") from e

    if _is_lossy(original, converted):
        warnings.warn(
            f"{name}: converting to {dtype} changed at least one value",
            stacklevel=3,
        )
    return converted


def coerce_scalar(value: Any, dtype: np.dtype, name: str = "scalar") -> Any:
    """
    Convert a single value to the element type.

    Object dtype keeps the value as is.

    Raises:
        ValidationError: If value is not a scalar or cannot be converted
    """
    if dtype.kind == 'O':
        return value
    converted = as_elements(value, dtype, name)
    if converted.ndim != 0:
        raise ValidationError(
            f"{name}: expected a single value, got shape {converted.shape}"
        )
    return converted[()]
