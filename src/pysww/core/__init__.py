"""Core data structures for pysww."""

from __future__ import annotations

from pysww.core.dataset import DataSet, DataSetType, Output
from pysww.core.exceptions import (
    FileFormatError,
    MeshError,
    PySWWError,
    SWWIOError,
    UnknownFormatError,
)
from pysww.core.mesh import Element, ElementType, Mesh, Node

__all__ = [
    # Mesh classes
    "Node",
    "Element",
    "ElementType",
    "Mesh",
    # Dataset classes
    "Output",
    "DataSet",
    "DataSetType",
    # Exceptions
    "PySWWError",
    "MeshError",
    "SWWIOError",
    "FileFormatError",
    "UnknownFormatError",
]
