"""
Kernels over flat row-major buffers.

Matrices hand these functions their raw one-dimensional buffers plus the
dimensions; every function allocates and returns a new buffer and never
writes to its inputs. Shapes are validated by the caller.

Numeric buffers go through numpy ufuncs and matmul. Object buffers hold
arbitrary Python values, so the product is accumulated element by element
from the additive identity in fixed k order.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


def negate(buffer: NDArray[Any]) -> NDArray[Any]:
    """Elementwise unary negation."""
    return np.negative(buffer)


def add(left: NDArray[Any], right: NDArray[Any]) -> NDArray[Any]:
    """Elementwise sum of two equally sized buffers."""
    return np.add(left, right)


def subtract(left: NDArray[Any], right: NDArray[Any]) -> NDArray[Any]:
    """Elementwise difference of two equally sized buffers."""
    return np.subtract(left, right)


def scale(scalar: Any, buffer: NDArray[Any]) -> NDArray[Any]:
    """Each element becomes ``scalar * element``."""
    return np.multiply(scalar, buffer)


def matmul(
    left: NDArray[Any],
    right: NDArray[Any],
    rows: int,
    inner: int,
    cols: int,
    zero: Any = 0,
) -> NDArray[Any]:
    """
    Matrix product of a rows x inner buffer and an inner x cols buffer.

    Entry (i, j) of the result is
    ``zero + left(i, 0) * right(0, j) + ... + left(i, inner-1) * right(inner-1, j)``.

    Args:
        left: Flat buffer of the left factor
        right: Flat buffer of the right factor
        rows: Rows of the left factor
        inner: Columns of the left factor == rows of the right factor
        cols: Columns of the right factor
        zero: Additive identity used to start each object-dtype sum

    Returns:
        Flat buffer of length rows * cols
    """
    if left.dtype.kind != 'O' and right.dtype.kind != 'O':
        product = left.reshape(rows, inner) @ right.reshape(inner, cols)
        return product.reshape(rows * cols)

    out = np.empty(rows * cols, dtype=object)
    for i in range(rows):
        for j in range(cols):
            total = zero
            for k in range(inner):
                total = total + left[i * inner + k] * right[k * cols + j]
            out[i * cols + j] = total
    return out
