"""
Custom exceptions for Atlasgrid.

This module defines all custom exceptions used throughout the Atlasgrid package.
All exceptions inherit from AtlasGridError for easy catching of package-specific errors.
"""


class AtlasGridError(Exception):
    """
    Base exception for all Atlasgrid errors.

    All custom exceptions in this package inherit from this class,
    allowing users to catch all Atlasgrid-specific errors with a single except clause.

    Examples
    --------
    >>> try:
    ...     # some atlasgrid operation
    ...     pass
    ... except AtlasGridError as e:
    ...     print(f"Atlasgrid error: {e}")
    """

    pass


class InvalidDimension(AtlasGridError):
    """
    Grid dimensions cannot produce a tessellation.

    Raised when a grating is built with a non-positive row or column count,
    a non-positive cell size, or a degenerate (zero width or height) extent.

    Attributes
    ----------
    rows : int, optional
        Requested row count, if known.
    cols : int, optional
        Requested column count, if known.

    Examples
    --------
    >>> raise InvalidDimension("rows must be >= 1, got 0", rows=0, cols=3)
    """

    def __init__(
        self,
        message: str,
        rows: int | None = None,
        cols: int | None = None,
    ):
        super().__init__(message)
        self.rows = rows
        self.cols = cols


class ValidationError(AtlasGridError):
    """
    Error validating input data.

    Raised when textual input, configuration or options fail validation,
    such as a malformed bbox string or an unknown boundary label rule.

    Examples
    --------
    >>> raise ValidationError("Invalid bbox: '1,2,3'. Expected 4 values")
    """

    pass
