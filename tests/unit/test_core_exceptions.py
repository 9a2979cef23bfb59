"""Unit tests for pysww custom exceptions (core/exceptions.py)."""

from __future__ import annotations

import pytest

from pysww.core.exceptions import (
    FileFormatError,
    MeshError,
    PySWWError,
    SWWIOError,
    UnknownFormatError,
)


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_pysww_error_is_exception(self) -> None:
        assert issubclass(PySWWError, Exception)

    def test_mesh_error_inherits(self) -> None:
        assert issubclass(MeshError, PySWWError)

    def test_io_error_inherits(self) -> None:
        assert issubclass(SWWIOError, PySWWError)

    def test_file_format_error_inherits_from_io(self) -> None:
        assert issubclass(FileFormatError, SWWIOError)

    def test_unknown_format_error_inherits_from_file_format(self) -> None:
        assert issubclass(UnknownFormatError, FileFormatError)
        assert issubclass(UnknownFormatError, PySWWError)


class TestExceptionInstantiation:
    """Tests for exception creation and attributes."""

    def test_mesh_error(self) -> None:
        assert str(MeshError("bad mesh")) == "bad mesh"

    def test_file_format_error_with_variable(self) -> None:
        exc = FileFormatError("bad format", variable="stage")
        assert str(exc) == "bad format"
        assert exc.variable == "stage"

    def test_file_format_error_no_variable(self) -> None:
        assert FileFormatError("bad format").variable is None

    def test_unknown_format_error_variable(self) -> None:
        assert UnknownFormatError("Missing variable 'z'", "z").variable == "z"


class TestExceptionRaising:
    """Tests for raising and catching exceptions."""

    def test_catch_as_pysww_error(self) -> None:
        with pytest.raises(PySWWError):
            raise UnknownFormatError("test")

    def test_catch_io_catches_unknown_format(self) -> None:
        with pytest.raises(SWWIOError):
            raise UnknownFormatError("test")
