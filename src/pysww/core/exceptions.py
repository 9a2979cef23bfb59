"""Custom exceptions for pysww package."""

from __future__ import annotations


class PySWWError(Exception):
    """Base exception for all pysww errors."""

    pass


class MeshError(PySWWError):
    """Error related to mesh operations."""

    pass


class SWWIOError(PySWWError):
    """Error related to file I/O operations."""

    pass


class FileFormatError(SWWIOError):
    """Error raised when file format is invalid."""

    def __init__(self, message: str, variable: str | None = None) -> None:
        super().__init__(message)
        self.variable = variable


class UnknownFormatError(FileFormatError):
    """Error raised when a file cannot be decoded as an SWW result file.

    Covers files that cannot be opened, are missing a required dimension or
    variable, use non-triangular elements, or fail a bulk array read.
    """

    pass
