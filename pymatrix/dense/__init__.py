"""
Dense matrix module.

Public API:
    Matrix  - rows x cols container with checked/unchecked access and
              +, -, unary -, matrix and scalar * operators
"""

from pymatrix.dense.matrix import Matrix

__all__ = [
    "Matrix",
]
