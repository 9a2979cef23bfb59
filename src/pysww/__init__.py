"""
pysww - Python package for ANUGA SWW result files.

This package provides tools for:
- Reading SWW files into a triangular mesh with time-varying datasets
- Deriving water depth and wet/dry element state from the stored stage
- Deriving momentum magnitude from the stored momentum components
"""

from __future__ import annotations

__version__ = "0.1.0"

from pysww.core.dataset import DataSet, DataSetType, Output
from pysww.core.exceptions import (
    FileFormatError,
    MeshError,
    PySWWError,
    SWWIOError,
    UnknownFormatError,
)
from pysww.core.mesh import Element, ElementType, Mesh, Node
from pysww.io.base import LoadError, LoadStatus
from pysww.io.config import SWWReadConfig
from pysww.io.sww import SWWReader, inspect_sww, load_sww, read_sww

__all__ = [
    "__version__",
    # Core mesh classes
    "Node",
    "Element",
    "ElementType",
    "Mesh",
    # Datasets
    "Output",
    "DataSet",
    "DataSetType",
    # Reading
    "SWWReader",
    "SWWReadConfig",
    "LoadStatus",
    "LoadError",
    "read_sww",
    "load_sww",
    "inspect_sww",
    # Exceptions
    "PySWWError",
    "MeshError",
    "SWWIOError",
    "FileFormatError",
    "UnknownFormatError",
]
