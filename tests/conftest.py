"""Pytest configuration and fixtures for pysww tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from pysww.core.mesh import Element, Mesh, Node


@pytest.fixture
def triangular_mesh() -> Mesh:
    """
    A 4-node, 2-triangle mesh.

    Layout:
        3---2
        |  /|
        | / |
        |/  |
        0---1
    """
    nodes = [
        Node(id=0, x=0.0, y=0.0),
        Node(id=1, x=100.0, y=0.0),
        Node(id=2, x=100.0, y=100.0),
        Node(id=3, x=0.0, y=100.0),
    ]
    elements = [
        Element(id=0, vertices=(0, 1, 2)),
        Element(id=1, vertices=(0, 2, 3)),
    ]
    return Mesh(nodes=nodes, elements=elements)


@pytest.fixture
def sww_data() -> dict:
    """
    Arrays for a small SWW file: the 4-node, 2-triangle mesh over 3 timesteps.

    Node 3 stays dry throughout, node 0 is flooded from the second step.
    """
    z = np.array([1.0, 0.5, 0.0, 2.0])
    stage = np.array(
        [
            [1.0, 0.5, 0.00005, 2.0],
            [1.5, 0.6, 0.2, 2.00001],
            [1.2, 0.5, 0.3, 2.0],
        ]
    )
    return {
        "x": np.array([0.0, 100.0, 100.0, 0.0]),
        "y": np.array([0.0, 0.0, 100.0, 100.0]),
        "z": z,
        "volumes": np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int32),
        "time": np.array([0.0, 1800.0, 7200.0]),
        "stage": stage,
        "xmomentum": np.array(
            [
                [0.0, 0.0, 0.0, 0.0],
                [3.0, 0.1, -0.5, 0.0],
                [0.6, 0.0, 1.0, 0.0],
            ]
        ),
        "ymomentum": np.array(
            [
                [0.0, 0.0, 0.0, 0.0],
                [4.0, -0.2, 0.5, 0.0],
                [0.8, 0.0, -2.0, 0.0],
            ]
        ),
    }


def write_sww(
    path: Path,
    *,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    volumes: np.ndarray,
    time: np.ndarray,
    stage: np.ndarray,
    xmomentum: np.ndarray | None = None,
    ymomentum: np.ndarray | None = None,
    xllcorner: float | str | None = None,
    yllcorner: float | str | None = None,
    omit: tuple[str, ...] = (),
    flat_volumes: bool = False,
    file_format: str = "NETCDF3_64BIT_OFFSET",
) -> Path:
    """Write an SWW file laid out the way ANUGA writes it."""
    netCDF4 = pytest.importorskip("netCDF4")

    volumes = np.asarray(volumes)
    n_volumes, n_vertices = volumes.shape
    n_points = len(x)

    with netCDF4.Dataset(str(path), "w", format=file_format) as nc:
        dims = {
            "number_of_volumes": n_volumes,
            "number_of_vertices": n_vertices,
            "number_of_points": n_points,
            "number_of_timesteps": None,
        }
        for name, size in dims.items():
            if name not in omit:
                nc.createDimension(name, size)

        if xllcorner is not None:
            nc.xllcorner = xllcorner
        if yllcorner is not None:
            nc.yllcorner = yllcorner

        def add(name: str, dtype: str, dimensions: tuple[str, ...], data: np.ndarray) -> None:
            if name in omit or any(d in omit for d in dimensions):
                return
            var = nc.createVariable(name, dtype, dimensions)
            if np.asarray(data).size:
                var[:] = data

        add("x", "f8", ("number_of_points",), x)
        add("y", "f8", ("number_of_points",), y)
        add("z", "f8", ("number_of_points",), z)
        if flat_volumes:
            nc.createDimension("number_of_triplet_values", volumes.size)
            add("volumes", "i4", ("number_of_triplet_values",), volumes.reshape(-1))
        else:
            add("volumes", "i4", ("number_of_volumes", "number_of_vertices"), volumes)
        add("time", "f8", ("number_of_timesteps",), time)

        series_dims = ("number_of_timesteps", "number_of_points")
        add("stage", "f8", series_dims, stage)
        if xmomentum is not None:
            add("xmomentum", "f8", series_dims, xmomentum)
        if ymomentum is not None:
            add("ymomentum", "f8", series_dims, ymomentum)

    return path


@pytest.fixture
def sww_factory(tmp_path: Path) -> Callable[..., Path]:
    """Return a function writing an SWW file into ``tmp_path``."""
    counter = [0]

    def factory(**kwargs) -> Path:
        counter[0] += 1
        name = kwargs.pop("name", f"run_{counter[0]}.sww")
        return write_sww(tmp_path / name, **kwargs)

    return factory


@pytest.fixture
def sww_file(sww_factory: Callable[..., Path], sww_data: dict) -> Path:
    """An SWW file with stage only (no momentum)."""
    data = {k: v for k, v in sww_data.items() if k not in ("xmomentum", "ymomentum")}
    return sww_factory(**data)


@pytest.fixture
def sww_momentum_file(sww_factory: Callable[..., Path], sww_data: dict) -> Path:
    """An SWW file with stage and both momentum components."""
    return sww_factory(**sww_data)
