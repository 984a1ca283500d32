"""
Matrix: dense two-dimensional container with arithmetic operators.

Elements live in one contiguous numpy buffer of length rows * cols in
row-major order: element (i, j) is buffer[i * cols + j]. The dtype of the
buffer is the element type; ``dtype=object`` holds arbitrary Python values
such as Fraction or Decimal.

Each Matrix exclusively owns its buffer:
    - copy(), from_matrix() and assign() allocate an independent buffer
    - move(), moved_from() and take() transfer the buffer and leave the
      source empty (rows == cols == 0, no buffer). An empty matrix may only
      be reassigned, rendered, or discarded.

Construction:
    Matrix(rows, cols)                  uninitialized elements
    Matrix.full(rows, cols, value)      every element == value
    Matrix.diagonal(values)             square, values on the diagonal
    Matrix.from_flat(rows, cols, values)
    Matrix.from_array(nested)           2D array-like
"""

from __future__ import annotations

import copy
import sys
from typing import Any, Generic, TextIO, TypeVar

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core import formatting
from pymatrix.core.exceptions import DimensionError, ZeroSizeError
from pymatrix.core.formatting import FormatOptions
from pymatrix.core.validation import (
    as_elements,
    check_dimensions,
    check_element_dtype,
    check_index,
    check_inner_dimensions,
    check_length,
    check_rectangular,
    check_same_shape,
    coerce_scalar,
)
from pymatrix.dense import _kernels

T = TypeVar('T')  # Element type


def _additive_identity(dtype: np.dtype) -> Any:
    """Zero of the element type; plain 0 for object dtype."""
    if dtype.kind == 'O':
        return 0
    return dtype.type(0)


class Matrix(Generic[T]):
    """
    Dense rows x cols matrix owning a flat row-major buffer.

    Element access comes in two forms:
        m[i, j], m[i, j] = v     unchecked; out-of-range indices are undefined
                                 behaviour (may silently hit another element)
        m.at(i, j), m.set_at()   checked; raise IndexOutOfRangeError

    Arithmetic operators always produce a new matrix. ``a += b`` and
    ``a -= b`` rebind ``a`` to a freshly computed buffer.

    Examples:
        >>> e = Matrix.from_flat(2, 3, [1, 2, 3, 4, 5, 6])
        >>> e[0, 2] = 7
        >>> (e * Matrix.diagonal([1, 2, 3])).tolist()
        [[1.0, 4.0, 21.0], [4.0, 10.0, 18.0]]
    """

    __slots__ = ("_rows", "_cols", "_dtype", "_buffer")

    # Make numpy scalars on the left defer to __rmul__ and friends
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int, dtype: DTypeLike = np.float64):
        """
        Create a matrix with UNINITIALIZED elements.

        Fast, but every element must be written before it is read.

        Args:
            rows: Number of rows
            cols: Number of columns
            dtype: Element type

        Raises:
            ZeroSizeError: If rows or cols is zero
        """
        rows, cols = check_dimensions(rows, cols)
        dtype = check_element_dtype(dtype)
        self._adopt(rows, cols, dtype, np.empty(rows * cols, dtype=dtype))

    # =====================================================================
    # Construction
    # =====================================================================

    @classmethod
    def full(
        cls,
        rows: int,
        cols: int,
        value: Any,
        dtype: DTypeLike = np.float64,
    ) -> Matrix:
        """
        Create a matrix with every element set to ``value``.

        Raises:
            ZeroSizeError: If rows or cols is zero
            ValidationError: If value cannot be converted to the element type
        """
        rows, cols = check_dimensions(rows, cols)
        dtype = check_element_dtype(dtype)
        fill = coerce_scalar(value, dtype, "value")
        buffer = np.empty(rows * cols, dtype=dtype)
        buffer.fill(fill)
        return cls._wrap(rows, cols, buffer)

    @classmethod
    def diagonal(
        cls,
        values: ArrayLike,
        dtype: DTypeLike = np.float64,
        zero: Any = None,
    ) -> Matrix:
        """
        Create a square diagonal matrix.

        The side length is len(values). Off-diagonal elements are the
        additive identity of the element type.

        Args:
            values: Diagonal elements, top-left to bottom-right
            dtype: Element type
            zero: Off-diagonal value; defaults to 0 of the element type

        Raises:
            ZeroSizeError: If values is empty
            DimensionError: If values is not a flat sequence
        """
        dtype = check_element_dtype(dtype)
        diag = as_elements(values, dtype, "values")
        if diag.ndim != 1:
            raise DimensionError(
                f"values: expected a flat sequence, got shape {diag.shape}"
            )

        n = diag.shape[0]
        if n == 0:
            raise ZeroSizeError("Cannot create a diagonal matrix from an empty sequence")

        if zero is None:
            zero = _additive_identity(dtype)
        else:
            zero = coerce_scalar(zero, dtype, "zero")

        buffer = np.empty(n * n, dtype=dtype)
        buffer.fill(zero)
        buffer[::n + 1] = diag
        return cls._wrap(n, n, buffer)

    @classmethod
    def from_flat(
        cls,
        rows: int,
        cols: int,
        values: ArrayLike,
        dtype: DTypeLike = np.float64,
    ) -> Matrix:
        """
        Create a matrix from elements given in flattened row-major order.

        Element (i, j) is taken from values[i * cols + j]. For a 2x2
        matrix A the sequence is [A(0, 0), A(0, 1), A(1, 0), A(1, 1)].

        Raises:
            ZeroSizeError: If rows or cols is zero
            InitializerWrongSizeError: If len(values) != rows * cols
        """
        rows, cols = check_dimensions(rows, cols)
        dtype = check_element_dtype(dtype)
        elements = as_elements(values, dtype, "values")
        if elements.ndim != 1:
            raise DimensionError(
                f"values: expected a flat sequence, got shape {elements.shape}"
            )
        check_length(elements.shape[0], rows, cols, "values")
        return cls._wrap(rows, cols, elements)

    @classmethod
    def from_array(cls, data: ArrayLike, dtype: DTypeLike = np.float64) -> Matrix:
        """
        Create a matrix from a 2D array-like (ndarray, nested lists).

        1D input becomes a single column. The data is always copied.

        Raises:
            ZeroSizeError: If data has no rows or no columns
            DimensionError: If data has more than two dimensions or its rows
                differ in length
        """
        dtype = check_element_dtype(dtype)
        if isinstance(data, Matrix):
            data = data.to_numpy()
        check_rectangular(data, "data")

        elements = as_elements(data, dtype, "data")
        if elements.ndim == 1:
            elements = elements.reshape(-1, 1)
        if elements.ndim != 2:
            raise DimensionError(
                f"data: expected 1D or 2D, got {elements.ndim}D with shape {elements.shape}"
            )

        rows, cols = check_dimensions(*elements.shape)
        return cls._wrap(rows, cols, elements.reshape(rows * cols))

    @classmethod
    def from_matrix(cls, other: Matrix) -> Matrix:
        """Copy-construct: a new matrix with its own copy of other's elements."""
        return _require_matrix(other, "other").copy()

    @classmethod
    def moved_from(cls, other: Matrix) -> Matrix:
        """Move-construct: take other's buffer, leaving other empty."""
        return _require_matrix(other, "other").move()

    @classmethod
    def _wrap(cls, rows: int, cols: int, buffer: NDArray[Any]) -> Matrix:
        """Internal constructor around an already-owned buffer."""
        matrix = cls.__new__(cls)
        matrix._adopt(rows, cols, buffer.dtype, buffer)
        return matrix

    def _adopt(
        self,
        rows: int,
        cols: int,
        dtype: np.dtype,
        buffer: NDArray[Any] | None,
    ) -> None:
        self._rows = rows
        self._cols = cols
        self._dtype = dtype
        self._buffer = buffer

    def _release(self) -> None:
        self._rows = 0
        self._cols = 0
        self._buffer = None

    # =====================================================================
    # Ownership
    # =====================================================================

    def copy(self) -> Matrix:
        """Deep copy with an independent buffer."""
        clone = type(self).__new__(type(self))
        buffer = None if self._buffer is None else self._buffer.copy()
        clone._adopt(self._rows, self._cols, self._dtype, buffer)
        return clone

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        clone = type(self).__new__(type(self))
        memo[id(self)] = clone
        clone._adopt(
            self._rows,
            self._cols,
            self._dtype,
            copy.deepcopy(self._buffer, memo),
        )
        return clone

    def move(self) -> Matrix:
        """
        Transfer this matrix's buffer to a new matrix.

        Afterwards this matrix is empty (rows == cols == 0) and must not be
        used for element access until it is reassigned.
        """
        target = type(self).__new__(type(self))
        target._adopt(self._rows, self._cols, self._dtype, self._buffer)
        self._release()
        return target

    def assign(self, other: Matrix) -> Matrix:
        """
        Copy-assign: replace dimensions and elements with a copy of other's.

        Returns:
            self
        """
        other = _require_matrix(other, "other")
        if other is self:
            return self
        buffer = None if other._buffer is None else other._buffer.copy()
        self._adopt(other._rows, other._cols, other._dtype, buffer)
        return self

    def take(self, other: Matrix) -> Matrix:
        """
        Move-assign: take over other's buffer and leave other empty.

        Returns:
            self
        """
        other = _require_matrix(other, "other")
        if other is self:
            return self
        self._adopt(other._rows, other._cols, other._dtype, other._buffer)
        other._release()
        return self

    # =====================================================================
    # Queries
    # =====================================================================

    @property
    def rows(self) -> int:
        """Number of rows (0 after the matrix was moved from)."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns (0 after the matrix was moved from)."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._rows * self._cols

    @property
    def dtype(self) -> np.dtype:
        """Element type. Kept after a move."""
        return self._dtype

    @property
    def is_empty(self) -> bool:
        """Whether the matrix was moved from and owns no buffer."""
        return self._buffer is None

    # =====================================================================
    # Element access
    # =====================================================================

    def __getitem__(self, key: tuple[int, int]) -> T:
        row, col = key
        return self._buffer[self._cols * row + col]

    def __setitem__(self, key: tuple[int, int], value: T) -> None:
        row, col = key
        self._buffer[self._cols * row + col] = value

    def at(self, row: int, col: int) -> T:
        """
        Element (row, col) with range checking.

        Raises:
            IndexOutOfRangeError: If row >= rows or col >= cols
        """
        check_index(row, col, self._rows, self._cols)
        return self._buffer[self._cols * row + col]

    def set_at(self, row: int, col: int, value: Any) -> None:
        """
        Write element (row, col) with range checking.

        The value is converted to the element type first.

        Raises:
            IndexOutOfRangeError: If row >= rows or col >= cols
            ValidationError: If value cannot be converted to the element type
        """
        check_index(row, col, self._rows, self._cols)
        self._buffer[self._cols * row + col] = coerce_scalar(value, self._dtype, "value")

    def to_numpy(self) -> NDArray[Any]:
        """Independent (rows, cols) copy of the elements."""
        if self._buffer is None:
            return np.empty((0, 0), dtype=self._dtype)
        return self._buffer.reshape(self._rows, self._cols).copy()

    def tolist(self) -> list[list[Any]]:
        """Elements as nested Python lists, one list per row."""
        return self.to_numpy().tolist()

    # =====================================================================
    # Output
    # =====================================================================

    @staticmethod
    def set_output_width(width: int, dtype: DTypeLike = np.float64) -> None:
        """Set the element width used when rendering matrices of ``dtype``."""
        formatting.set_output_width(width, dtype)

    def render(self, options: FormatOptions | None = None) -> str:
        """Rendered text; see pymatrix.core.formatting.render."""
        return formatting.render(self, options)

    def write(
        self,
        stream: TextIO | None = None,
        options: FormatOptions | None = None,
    ) -> None:
        """Write the rendering to ``stream`` (sys.stdout by default)."""
        if stream is None:
            stream = sys.stdout
        stream.write(self.render(options))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        empty = ", empty" if self.is_empty else ""
        return f"Matrix(rows={self._rows}, cols={self._cols}, dtype={self._dtype}{empty})"

    # =====================================================================
    # Arithmetic
    # =====================================================================

    def __neg__(self) -> Matrix:
        rows, cols = check_dimensions(self._rows, self._cols)
        return self._wrap(rows, cols, _kernels.negate(self._buffer))

    def __add__(self, other: Any) -> Matrix:
        """
        Elementwise sum.

        Raises:
            IncompatibleSizesAddError: If the shapes differ
        """
        if not isinstance(other, Matrix):
            return NotImplemented
        check_same_shape(self.shape, other.shape, "add")
        rows, cols = check_dimensions(self._rows, self._cols)
        return self._wrap(rows, cols, _kernels.add(self._buffer, other._buffer))

    def __sub__(self, other: Any) -> Matrix:
        """
        Elementwise difference.

        Raises:
            IncompatibleSizesAddError: If the shapes differ
        """
        if not isinstance(other, Matrix):
            return NotImplemented
        check_same_shape(self.shape, other.shape, "subtract")
        rows, cols = check_dimensions(self._rows, self._cols)
        return self._wrap(rows, cols, _kernels.subtract(self._buffer, other._buffer))

    def __iadd__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.take(self + other)

    def __isub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.take(self - other)

    def __mul__(self, other: Any) -> Matrix:
        """
        Matrix product if other is a Matrix, otherwise scalar product.

        A scalar on the right is applied exactly like one on the left: each
        element becomes ``scalar * element``. For element types whose
        multiplication does not commute, m * s is therefore not
        ``element * scalar``.

        Raises:
            IncompatibleSizesMultiplyError: If self.cols != other.rows
        """
        if isinstance(other, Matrix):
            return self._matmul(other)
        return self.__rmul__(other)

    def __rmul__(self, other: Any) -> Matrix:
        """Scalar on the left: each element becomes ``scalar * element``."""
        scalar = coerce_scalar(other, self._dtype, "scalar")
        rows, cols = check_dimensions(self._rows, self._cols)
        return self._wrap(rows, cols, _kernels.scale(scalar, self._buffer))

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._matmul(other)

    def _matmul(self, other: Matrix) -> Matrix:
        check_inner_dimensions(self.shape, other.shape)
        rows, cols = check_dimensions(self._rows, other._cols)
        buffer = _kernels.matmul(
            self._buffer,
            other._buffer,
            rows,
            self._cols,
            cols,
            zero=_additive_identity(self._dtype),
        )
        return self._wrap(rows, cols, buffer)


def _require_matrix(value: Any, name: str) -> Matrix:
    if not isinstance(value, Matrix):
        raise TypeError(f"{name}: expected Matrix, got {type(value).__name__}")
    return value
