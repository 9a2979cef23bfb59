"""I/O handlers for SWW result files."""

from __future__ import annotations

from pysww.io.base import BaseReader, LoadError, LoadState, LoadStatus
from pysww.io.config import DEPTH_THRESHOLD, SWWReadConfig, SWWSchema
from pysww.io.sww import (
    SWWDimensions,
    SWWFileInfo,
    SWWReader,
    decode_depth,
    decode_momentum,
    extract_bed_elevation,
    inspect_sww,
    load_geometry,
    load_sww,
    read_sww,
    validate_schema,
)

__all__ = [
    # Base classes and status
    "BaseReader",
    "LoadError",
    "LoadState",
    "LoadStatus",
    # Config
    "DEPTH_THRESHOLD",
    "SWWReadConfig",
    "SWWSchema",
    # SWW reader
    "SWWDimensions",
    "SWWFileInfo",
    "SWWReader",
    "validate_schema",
    "load_geometry",
    "extract_bed_elevation",
    "decode_depth",
    "decode_momentum",
    "read_sww",
    "load_sww",
    "inspect_sww",
]
