"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_element_dtype: accepted and rejected element types
    - check_dimensions: integer, negative and zero checks
    - check_length / check_same_shape / check_inner_dimensions
    - check_index: bounds, including negative indices
    - check_output_width
    - as_elements / coerce_scalar: conversion, warnings on value changes
"""

from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    IncompatibleSizesAddError,
    IncompatibleSizesMultiplyError,
    IndexOutOfRangeError,
    InitializerWrongSizeError,
    ValidationError,
    ZeroSizeError,
)
from pymatrix.core.validation import (
    as_elements,
    check_dimensions,
    check_element_dtype,
    check_index,
    check_inner_dimensions,
    check_length,
    check_output_width,
    check_rectangular,
    check_same_shape,
    coerce_scalar,
)


# ═══════════════════════════════════════════════════════════════════════
# check_element_dtype
# ═══════════════════════════════════════════════════════════════════════


class TestCheckElementDtype:

    @pytest.mark.parametrize("dtype", [
        np.float64, np.float32, np.int64, np.int8, np.uint16, np.complex128,
        float, int, complex, object, "float64",
    ])
    def test_accepts_arithmetic(self, dtype):
        assert check_element_dtype(dtype) == np.dtype(dtype)

    def test_returns_dtype_instance(self):
        assert isinstance(check_element_dtype(float), np.dtype)

    @pytest.mark.parametrize("dtype", [bool, str, bytes, "datetime64[s]"])
    def test_rejects_non_arithmetic(self, dtype):
        with pytest.raises(ValidationError, match="non-arithmetic dtype"):
            check_element_dtype(dtype)

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError, match="not a valid dtype"):
            check_element_dtype("not-a-dtype")


# ═══════════════════════════════════════════════════════════════════════
# check_dimensions
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDimensions:

    def test_valid(self):
        assert check_dimensions(2, 3) == (2, 3)

    def test_numpy_integers(self):
        rows, cols = check_dimensions(np.int64(4), np.int32(1))
        assert (rows, cols) == (4, 1)
        assert type(rows) is int

    @pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (0, 0)])
    def test_zero(self, rows, cols):
        with pytest.raises(ZeroSizeError):
            check_dimensions(rows, cols)

    def test_negative(self):
        with pytest.raises(ValidationError, match="non-negative"):
            check_dimensions(-1, 2)

    @pytest.mark.parametrize("value", [2.0, "2", None, True])
    def test_not_integer(self, value):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_dimensions(value, 2)


# ═══════════════════════════════════════════════════════════════════════
# Shape compatibility
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_length_match(self):
        check_length(6, 2, 3)

    def test_length_mismatch(self):
        with pytest.raises(InitializerWrongSizeError, match="needs 6 elements, got 5"):
            check_length(5, 2, 3)

    def test_same_shape(self):
        check_same_shape((2, 3), (2, 3), "add")

    def test_different_shape(self):
        with pytest.raises(IncompatibleSizesAddError, match="Cannot subtract"):
            check_same_shape((2, 3), (3, 2), "subtract")

    def test_inner_dimensions(self):
        check_inner_dimensions((2, 3), (3, 5))

    def test_inner_mismatch(self):
        with pytest.raises(IncompatibleSizesMultiplyError, match="3 columns"):
            check_inner_dimensions((2, 3), (2, 3))


# ═══════════════════════════════════════════════════════════════════════
# check_index
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_in_bounds(self):
        check_index(0, 0, 2, 3)
        check_index(1, 2, 2, 3)

    @pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (5, 5), (-1, 0), (0, -1)])
    def test_out_of_bounds(self, row, col):
        with pytest.raises(IndexOutOfRangeError, match="out of range"):
            check_index(row, col, 2, 3)


class TestCheckOutputWidth:

    def test_valid(self):
        assert check_output_width(0) == 0
        assert check_output_width(np.int64(7)) == 7

    def test_negative(self):
        with pytest.raises(ValidationError):
            check_output_width(-1)

    def test_float(self):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_output_width(3.0)


# ═══════════════════════════════════════════════════════════════════════
# Conversion
# ═══════════════════════════════════════════════════════════════════════


class TestCheckRectangular:

    @pytest.mark.parametrize("data", [
        [[1, 2], [3, 4]],
        ((1, 2), [3, 4]),
        [1, 2, 3],
        np.zeros((2, 3)),
        5,
    ])
    def test_accepts(self, data):
        check_rectangular(data)

    def test_ragged(self):
        with pytest.raises(DimensionError, match=r"data: rows have different lengths \[1, 2\]"):
            check_rectangular([[1, 2], [3]])

    def test_mixed(self):
        with pytest.raises(DimensionError, match="mixes rows"):
            check_rectangular([[1, 2], 3])

    def test_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            check_rectangular([(1,), (2, 3)], "rows")


class TestAsElements:

    def test_list_to_float(self):
        result = as_elements([1, 2, 3], np.dtype(np.float64), "values")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_generator(self):
        result = as_elements((i for i in range(3)), np.dtype(np.int64), "values")
        np.testing.assert_array_equal(result, [0, 1, 2])

    def test_copies_input(self):
        source = np.array([1.0, 2.0])
        result = as_elements(source, np.dtype(np.float64), "values")
        result[0] = 99.0
        assert source[0] == 1.0

    def test_object_keeps_values(self):
        values = [Fraction(1, 3), Decimal("0.1")]
        result = as_elements(values, np.dtype(object), "values")
        assert result.dtype == object
        assert result[0] == Fraction(1, 3)
        assert result[1] == Decimal("0.1")

    def test_lossy_warns(self):
        with pytest.warns(UserWarning, match="changed at least one value"):
            result = as_elements([1.5, 2.0], np.dtype(np.int64), "values")
        np.testing.assert_array_equal(result, [1, 2])

    def test_lossless_int_conversion_silent(self, recwarn):
        as_elements([1.0, 2.0], np.dtype(np.int64), "values")
        assert len(recwarn) == 0

    def test_nan_preserved_silently(self, recwarn):
        result = as_elements([np.nan, 1], np.dtype(np.float32), "values")
        assert np.isnan(result[0])
        assert len(recwarn) == 0

    def test_none_to_nan_warns(self):
        with pytest.warns(UserWarning, match="changed at least one value"):
            result = as_elements([1, None], np.dtype(np.float64), "values")
        assert np.isnan(result[1])

    def test_complex_to_float_warns(self):
        with pytest.warns(UserWarning):
            as_elements([1 + 2j], np.dtype(np.float64), "values")

    def test_unconvertible(self):
        with pytest.raises(ValidationError, match="cannot convert"):
            as_elements(["a", "b"], np.dtype(np.float64), "values")


class TestCoerceScalar:

    def test_numeric(self):
        value = coerce_scalar(3, np.dtype(np.float64))
        assert value == 3.0
        assert isinstance(value, np.float64)

    def test_object_passthrough(self):
        value = Fraction(2, 3)
        assert coerce_scalar(value, np.dtype(object)) is value

    def test_rejects_sequence(self):
        with pytest.raises(ValidationError, match="expected a single value"):
            coerce_scalar([1, 2], np.dtype(np.float64))

    def test_lossy_warns(self):
        with pytest.warns(UserWarning):
            assert coerce_scalar(2.5, np.dtype(np.int32)) == 2
