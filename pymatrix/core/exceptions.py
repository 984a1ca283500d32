"""
Exception hierarchy for PyMatrix.

All exceptions inherit from MatrixError to allow catching any
library-specific error. Each failure kind is its own class without
attributes.
"""


class MatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(MatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs (element type, output width,
    element values) fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Base class for the shape-related failures below.
    """
    pass


class ZeroSizeError(DimensionError):
    """
    A matrix was requested with zero rows or zero columns.

    Raised by every construction form, including the diagonal form when
    given an empty sequence.
    """
    pass


class InitializerWrongSizeError(DimensionError):
    """
    The flat element sequence does not hold exactly rows * cols elements.
    """
    pass


class IncompatibleSizesAddError(DimensionError):
    """
    Two matrices that are added or subtracted do not have the same
    number of rows and columns.
    """
    pass


class IncompatibleSizesMultiplyError(DimensionError):
    """
    The number of columns of the left factor differs from the number
    of rows of the right factor.
    """
    pass


class IndexOutOfRangeError(MatrixError):
    """
    Checked element access addressed a row or column outside the matrix.
    """
    pass
