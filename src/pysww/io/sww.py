"""
Reader for ANUGA SWW result files.

An SWW file is a NetCDF container holding a triangular mesh and the
simulated water surface (``stage``) at every node for every timestep,
optionally with the two momentum components. Loading produces a
:class:`~pysww.core.mesh.Mesh` carrying up to three datasets:

- ``Bed Elevation``: static bed elevation ``z``
- ``Depth``: ``stage - z`` per timestep, with wet elements flagged active
- ``Momentum``: momentum vectors and their magnitude, when present

The file stores neither depth nor wet/dry state, so both are derived
while reading.

Example
-------
>>> from pysww.io.sww import read_sww
>>> mesh = read_sww("run.sww")
>>> depth = mesh.get_dataset("Depth")
>>> depth.output(0).active.sum()  # number of wet elements at the first step
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import netCDF4
import numpy as np
from numpy.typing import NDArray

from pysww.core.dataset import DataSet, DataSetType, Output
from pysww.core.exceptions import UnknownFormatError
from pysww.core.mesh import Element, Mesh, Node
from pysww.io.base import BaseReader, LoadError, LoadState, LoadStatus
from pysww.io.config import SWWReadConfig, SWWSchema

logger = logging.getLogger(__name__)

# Errors the NetCDF layer raises for missing names, bad slices and failed reads
_READ_ERRORS = (OSError, RuntimeError, KeyError, IndexError, ValueError, TypeError)


@dataclass(frozen=True)
class SWWDimensions:
    """Dimension lengths of an SWW file, as confirmed by :func:`validate_schema`."""

    n_volumes: int
    n_vertices: int
    n_points: int
    n_timesteps: int
    has_momentum: bool = False


@dataclass(frozen=True)
class SWWFileInfo:
    """Summary of an SWW file, gathered without reading the result arrays."""

    path: Path
    data_model: str
    dimensions: SWWDimensions
    xllcorner: float
    yllcorner: float
    time_start: float | None
    time_end: float | None

    @property
    def has_momentum(self) -> bool:
        return self.dimensions.has_momentum


# ---------------------------------------------------------------------------
# Low-level reads
# ---------------------------------------------------------------------------


def _read_array(
    nc: netCDF4.Dataset, name: str, size: int, dtype: Any = np.float64
) -> NDArray:
    """Read a whole variable as a flat array of exactly ``size`` values."""
    try:
        data = np.asarray(nc.variables[name][:], dtype=dtype).reshape(-1)
    except _READ_ERRORS as exc:
        raise UnknownFormatError(f"Failed to read variable '{name}': {exc}", name) from exc
    if data.size != size:
        raise UnknownFormatError(
            f"Variable '{name}' has {data.size} values, expected {size}", name
        )
    return data


def _read_row(nc: netCDF4.Dataset, name: str, t: int, n_points: int) -> NDArray[np.float64]:
    """Read timestep ``t`` of a ``[timesteps, points]`` variable."""
    try:
        row = np.asarray(nc.variables[name][t, :], dtype=np.float64).reshape(-1)
    except _READ_ERRORS as exc:
        raise UnknownFormatError(
            f"Failed to read timestep {t} of '{name}': {exc}", name
        ) from exc
    if row.size != n_points:
        raise UnknownFormatError(
            f"Timestep {t} of '{name}' has {row.size} values, expected {n_points}", name
        )
    return row


def _read_offset(nc: netCDF4.Dataset, name: str, default: float = 0.0) -> float:
    """Read an optional numeric global attribute, falling back to ``default``."""
    if name not in nc.ncattrs():
        return default
    value = nc.getncattr(name)
    data = np.asarray(value).reshape(-1)
    # Text attributes never count, even when they spell a number
    if data.size == 0 or not np.issubdtype(data.dtype, np.number):
        logger.warning("Ignoring non-numeric attribute %s=%r", name, value)
        return default
    return float(data[0])


def _has_momentum(nc: netCDF4.Dataset, schema: SWWSchema) -> bool:
    return all(name in nc.variables for name in schema.momentum_variables)


# ---------------------------------------------------------------------------
# Decode pipeline
# ---------------------------------------------------------------------------


def validate_schema(nc: netCDF4.Dataset, schema: SWWSchema | None = None) -> SWWDimensions:
    """
    Check that an open file has the SWW dimensions and variables.

    Only names and dimension lengths are looked up; no bulk data is read.

    Parameters
    ----------
    nc : netCDF4.Dataset
        Open file handle.
    schema : SWWSchema, optional
        Names to look up. Defaults to the standard SWW names.

    Returns
    -------
    SWWDimensions
        Dimension lengths and whether both momentum variables exist.

    Raises
    ------
    UnknownFormatError
        If a dimension or variable is missing, or elements are not triangles.
    """
    schema = schema or SWWSchema()

    lengths: dict[str, int] = {}
    for name in schema.required_dimensions:
        if name not in nc.dimensions:
            raise UnknownFormatError(f"Missing dimension '{name}'", name)
        lengths[name] = len(nc.dimensions[name])

    n_vertices = lengths[schema.vertices_dim]
    if n_vertices != 3:
        raise UnknownFormatError(
            f"Expecting triangular elements, got {n_vertices} vertices per element",
            schema.vertices_dim,
        )

    for name in schema.required_variables:
        if name not in nc.variables:
            raise UnknownFormatError(f"Missing variable '{name}'", name)

    dims = SWWDimensions(
        n_volumes=lengths[schema.volumes_dim],
        n_vertices=n_vertices,
        n_points=lengths[schema.points_dim],
        n_timesteps=lengths[schema.timesteps_dim],
        has_momentum=_has_momentum(nc, schema),
    )
    logger.debug(
        "SWW schema ok: %d points, %d volumes, %d timesteps, momentum=%s",
        dims.n_points,
        dims.n_volumes,
        dims.n_timesteps,
        dims.has_momentum,
    )
    return dims


def load_geometry(
    nc: netCDF4.Dataset,
    dims: SWWDimensions,
    schema: SWWSchema | None = None,
    check_indices: bool = True,
) -> tuple[Mesh, NDArray[np.float64]]:
    """
    Build the mesh from node coordinates and triangle connectivity.

    The ``xllcorner``/``yllcorner`` global attributes, when present, are
    added to every node's coordinates.

    Parameters
    ----------
    nc : netCDF4.Dataset
        Open file handle.
    dims : SWWDimensions
        Dimensions returned by :func:`validate_schema`.
    schema : SWWSchema, optional
        Names to read.
    check_indices : bool, optional
        Reject connectivity referencing nodes outside ``[0, n_points)``.

    Returns
    -------
    tuple of (Mesh, ndarray)
        The mesh (without datasets) and the raw per-node bed elevation.
    """
    schema = schema or SWWSchema()
    n_points = dims.n_points
    n_volumes = dims.n_volumes

    px = _read_array(nc, schema.x_var, n_points)
    py = _read_array(nc, schema.y_var, n_points)
    pz = _read_array(nc, schema.z_var, n_points)
    volumes = _read_array(nc, schema.volumes_var, 3 * n_volumes, dtype=np.int64)
    triangles = volumes.reshape(n_volumes, 3)

    if check_indices and n_volumes > 0:
        lo = int(triangles.min())
        hi = int(triangles.max())
        if lo < 0 or hi >= n_points:
            raise UnknownFormatError(
                f"Connectivity references node {lo if lo < 0 else hi}, "
                f"valid range is [0, {n_points})",
                schema.volumes_var,
            )

    xll = _read_offset(nc, schema.xllcorner_attr)
    yll = _read_offset(nc, schema.yllcorner_attr)
    if xll or yll:
        logger.debug("Applying origin offset (%s, %s)", xll, yll)

    x = px + xll
    y = py + yll
    nodes = [Node(id=i, x=float(x[i]), y=float(y[i])) for i in range(n_points)]
    elements = [
        Element(id=i, vertices=(int(a), int(b), int(c)))
        for i, (a, b, c) in enumerate(triangles)
    ]

    return Mesh(nodes=nodes, elements=elements), pz


def extract_bed_elevation(
    elevation: NDArray[np.float64], n_elements: int, file_name: str = ""
) -> DataSet:
    """
    Build the static bed elevation dataset.

    The single output holds ``elevation`` unmodified and marks every element
    active, since a bed surface has no wet/dry state.
    """
    output = Output(
        time=0.0,
        values=np.array(elevation, dtype=np.float64),
        active=np.ones(n_elements, dtype=bool),
    )
    ds = DataSet(
        file_name=file_name,
        name=SWWSchema.BED_NAME,
        type=DataSetType.BED,
        is_time_varying=False,
    )
    ds.add_output(output)
    ds.update_value_range()
    return ds


def decode_depth(
    nc: netCDF4.Dataset,
    dims: SWWDimensions,
    mesh: Mesh,
    elevation: NDArray[np.float64],
    times: NDArray[np.float64],
    config: SWWReadConfig | None = None,
    file_name: str = "",
) -> tuple[DataSet, list[NDArray[np.bool_]]]:
    """
    Decode water depth for every timestep.

    For timestep ``t``, ``depth = stage[t] - elevation`` and an element is
    active when any of its three nodes has ``depth > depth_threshold``.

    Parameters
    ----------
    nc : netCDF4.Dataset
        Open file handle.
    dims : SWWDimensions
        Dimensions returned by :func:`validate_schema`.
    mesh : Mesh
        Mesh returned by :func:`load_geometry`.
    elevation : ndarray
        Per-node bed elevation.
    times : ndarray
        Output times in hours, one per timestep.
    config : SWWReadConfig, optional
        Threshold and variable names.
    file_name : str, optional
        Source file recorded on the dataset.

    Returns
    -------
    tuple of (DataSet, list of ndarray)
        The ``Depth`` dataset and the active mask of each timestep, in order.
    """
    config = config or SWWReadConfig()
    threshold = config.depth_threshold
    triangles = mesh.connectivity

    ds = DataSet(
        file_name=file_name,
        name=SWWSchema.DEPTH_NAME,
        type=DataSetType.SCALAR,
        is_time_varying=True,
    )
    active_per_step: list[NDArray[np.bool_]] = []

    for t in range(dims.n_timesteps):
        stage = _read_row(nc, config.schema.stage_var, t, dims.n_points)
        depth = stage - elevation

        wet = depth > threshold
        try:
            active = wet[triangles].any(axis=1)
        except IndexError as exc:
            raise UnknownFormatError(f"Connectivity out of range: {exc}") from exc

        ds.add_output(
            Output(time=float(times[t]), values=depth, active=active), check_order=False
        )
        active_per_step.append(active)

    ds.update_value_range()
    logger.debug("Decoded %d depth outputs", ds.n_outputs)
    return ds, active_per_step


def decode_momentum(
    nc: netCDF4.Dataset,
    dims: SWWDimensions,
    times: NDArray[np.float64],
    active_per_step: list[NDArray[np.bool_]],
    config: SWWReadConfig | None = None,
    file_name: str = "",
) -> DataSet:
    """
    Decode the momentum vectors for every timestep.

    Each output's scalar values are the vector magnitudes. Wet/dry state
    comes from the depth field, so ``active_per_step[t]`` (as returned by
    :func:`decode_depth`) is used as-is for timestep ``t``.
    """
    config = config or SWWReadConfig()
    schema = config.schema
    if len(active_per_step) != dims.n_timesteps:
        raise ValueError(
            f"Got {len(active_per_step)} active masks for {dims.n_timesteps} timesteps"
        )

    ds = DataSet(
        file_name=file_name,
        name=SWWSchema.MOMENTUM_NAME,
        type=DataSetType.VECTOR,
        is_time_varying=True,
    )

    for t in range(dims.n_timesteps):
        vx = _read_row(nc, schema.xmomentum_var, t, dims.n_points)
        vy = _read_row(nc, schema.ymomentum_var, t, dims.n_points)

        output = Output(
            time=float(times[t]),
            values=np.sqrt(vx * vx + vy * vy),
            active=active_per_step[t].copy(),
            values_v=np.column_stack((vx, vy)),
        )
        ds.add_output(output, check_order=False)

    ds.update_value_range()
    logger.debug("Decoded %d momentum outputs", ds.n_outputs)
    return ds


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


def _open(filepath: Path) -> netCDF4.Dataset:
    try:
        nc = netCDF4.Dataset(str(filepath), "r")
    except OSError as exc:
        raise UnknownFormatError(f"Cannot open {filepath}: {exc}") from exc
    nc.set_auto_mask(False)
    return nc


class SWWReader(BaseReader):
    """
    Reader for ANUGA SWW result files.

    A reader performs a single load; create a new reader to load again.

    Parameters
    ----------
    filepath : Path or str
        Path to the ``.sww`` file.
    config : SWWReadConfig, optional
        Read options. Defaults to :class:`SWWReadConfig()`.

    Examples
    --------
    >>> reader = SWWReader("run.sww")
    >>> mesh = reader.read()
    >>> [ds.name for ds in mesh.datasets]
    ['Bed Elevation', 'Depth', 'Momentum']
    """

    def __init__(self, filepath: Path | str, config: SWWReadConfig | None = None) -> None:
        super().__init__(filepath)
        self.config = config or SWWReadConfig()
        self._state = LoadState.NOT_STARTED

    @property
    def format(self) -> str:
        return "sww"

    @property
    def state(self) -> LoadState:
        """Progress of this reader's load."""
        return self._state

    def read(self) -> Mesh:
        """
        Load the mesh and its datasets.

        Returns:
            Mesh with the bed elevation, depth and (if present) momentum datasets

        Raises:
            UnknownFormatError: If the file is not a readable SWW file
            RuntimeError: If this reader has already been used
        """
        if self._state is not LoadState.NOT_STARTED:
            raise RuntimeError(f"Reader already used (state: {self._state.value})")

        logger.info("Loading SWW file %s", self.filepath)
        try:
            mesh = self._read()
        except Exception:
            self._state = LoadState.FAILED
            raise
        self._state = LoadState.DONE

        logger.info(
            "Loaded %s: %d nodes, %d elements, %d datasets",
            self.filepath.name,
            mesh.n_nodes,
            mesh.n_elements,
            mesh.n_datasets,
        )
        return mesh

    def _read(self) -> Mesh:
        config = self.config
        schema = config.schema
        file_name = str(self.filepath)

        with _open(self.filepath) as nc:
            self._state = LoadState.VALIDATING
            dims = validate_schema(nc, schema)

            self._state = LoadState.READING
            mesh, elevation = load_geometry(nc, dims, schema, config.check_indices)
            raw_times = _read_array(nc, schema.time_var, dims.n_timesteps)
            times = raw_times / config.seconds_per_hour

            bed = extract_bed_elevation(elevation, mesh.n_elements, file_name)
            depth, active_per_step = decode_depth(
                nc, dims, mesh, elevation, times, config, file_name
            )

            momentum = None
            if dims.has_momentum and config.load_momentum:
                momentum = decode_momentum(
                    nc, dims, times, active_per_step, config, file_name
                )
            else:
                logger.debug("Skipping momentum (present=%s)", dims.has_momentum)

        mesh.add_dataset(bed)
        mesh.add_dataset(depth)
        if momentum is not None:
            mesh.add_dataset(momentum)
        return mesh


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------


def read_sww(filepath: Path | str, config: SWWReadConfig | None = None) -> Mesh:
    """
    Read an SWW file.

    Args:
        filepath: Path to the ``.sww`` file
        config: Read options

    Returns:
        Mesh with its datasets attached

    Raises:
        UnknownFormatError: If the file is missing or is not a readable SWW
            file
    """
    try:
        reader = SWWReader(filepath, config)
    except FileNotFoundError as exc:
        raise UnknownFormatError(f"Cannot open {filepath}: {exc}") from exc
    return reader.read()


def load_sww(
    filepath: Path | str,
    status: LoadStatus | None = None,
    config: SWWReadConfig | None = None,
) -> Mesh | None:
    """
    Read an SWW file, reporting failure through ``status`` instead of raising.

    Args:
        filepath: Path to the ``.sww`` file
        status: Cleared on entry; set to ``LoadError.UNKNOWN_FORMAT`` on failure
        config: Read options

    Returns:
        The mesh, or None if the file could not be loaded
    """
    if status is not None:
        status.clear()

    try:
        return SWWReader(filepath, config).read()
    except (UnknownFormatError, FileNotFoundError, ValueError) as exc:
        logger.warning("Failed to load %s: %s", filepath, exc)
        if status is not None:
            status.last_error = LoadError.UNKNOWN_FORMAT
            status.message = str(exc)
        return None


def inspect_sww(filepath: Path | str, config: SWWReadConfig | None = None) -> SWWFileInfo:
    """
    Summarize an SWW file without decoding its results.

    Only the schema, the offset attributes and the time axis are read.

    Raises:
        UnknownFormatError: If the file is missing or is not a readable SWW
            file
    """
    config = config or SWWReadConfig()
    schema = config.schema
    path = Path(filepath)

    with _open(path) as nc:
        dims = validate_schema(nc, schema)
        times = _read_array(nc, schema.time_var, dims.n_timesteps) / config.seconds_per_hour
        info = SWWFileInfo(
            path=path,
            data_model=nc.data_model,
            dimensions=dims,
            xllcorner=_read_offset(nc, schema.xllcorner_attr),
            yllcorner=_read_offset(nc, schema.yllcorner_attr),
            time_start=float(times[0]) if times.size else None,
            time_end=float(times[-1]) if times.size else None,
        )
    return info
