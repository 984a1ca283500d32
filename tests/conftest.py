"""
pytest configuration and shared fixtures.
"""

from fractions import Fraction

import pytest
import numpy as np

from pymatrix import Matrix
from pymatrix.core.formatting import reset_output_widths


@pytest.fixture(autouse=True)
def _clean_output_widths():
    """Output widths are global per dtype; isolate every test."""
    reset_output_widths()
    yield
    reset_output_widths()


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def e_matrix():
    """2x3 matrix [[1, 2, 3], [4, 5, 6]]."""
    return Matrix.from_flat(2, 3, [1, 2, 3, 4, 5, 6])


@pytest.fixture
def c_diagonal():
    """3x3 diagonal matrix with 1, 2, 3 on the diagonal."""
    return Matrix.diagonal([1, 2, 3])


@pytest.fixture
def fraction_matrix():
    """2x2 matrix of Fractions stored with object dtype."""
    return Matrix.from_flat(
        2, 2,
        [Fraction(1, 2), Fraction(1, 3), Fraction(2, 3), Fraction(3, 4)],
        dtype=object,
    )
