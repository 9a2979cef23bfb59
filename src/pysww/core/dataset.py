"""
Dataset classes for time-varying results on a mesh.

A :class:`DataSet` is a named sequence of :class:`Output` snapshots sharing
one mesh. Each output holds per-node values (and optional per-node vectors)
plus a per-element ``active`` mask marking wet elements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class DataSetType(Enum):
    """Kinds of datasets produced by the SWW reader."""

    BED = "bed"
    SCALAR = "scalar"
    VECTOR = "vector"


@dataclass
class Output:
    """
    A single timestep snapshot of a dataset.

    Attributes:
        time: Time of the snapshot in hours
        values: Per-node scalar values, shape (n_nodes,)
        active: Per-element wet/dry flags, shape (n_elements,)
        values_v: Per-node vectors, shape (n_nodes, 2), or None for scalar outputs
    """

    time: float
    values: NDArray[np.float64]
    active: NDArray[np.bool_]
    values_v: NDArray[np.float64] | None = None

    def __post_init__(self) -> None:
        """Validate array shapes."""
        if self.values.ndim != 1:
            raise ValueError(f"values must be 1-D, got shape {self.values.shape}")
        if self.active.ndim != 1:
            raise ValueError(f"active must be 1-D, got shape {self.active.shape}")
        if self.values_v is not None and self.values_v.shape != (len(self.values), 2):
            raise ValueError(
                f"values_v shape {self.values_v.shape} doesn't match "
                f"({len(self.values)}, 2)"
            )

    @classmethod
    def create(cls, n_nodes: int, n_elements: int, is_vector: bool = False) -> Output:
        """
        Allocate a zeroed output for a mesh of the given size.

        Args:
            n_nodes: Number of mesh nodes
            n_elements: Number of mesh elements
            is_vector: Also allocate the per-node vector array
        """
        return cls(
            time=0.0,
            values=np.zeros(n_nodes, dtype=np.float64),
            active=np.zeros(n_elements, dtype=bool),
            values_v=np.zeros((n_nodes, 2), dtype=np.float64) if is_vector else None,
        )

    @property
    def is_vector(self) -> bool:
        """Return True if the output carries vector values."""
        return self.values_v is not None

    @property
    def n_nodes(self) -> int:
        return len(self.values)

    @property
    def n_elements(self) -> int:
        return len(self.active)

    def __repr__(self) -> str:
        kind = "vector" if self.is_vector else "scalar"
        return f"Output(time={self.time}, n_nodes={self.n_nodes}, {kind})"


@dataclass
class DataSet:
    """
    A named, typed sequence of outputs.

    Attributes:
        file_name: Path of the file the dataset was read from
        name: Display name (e.g. "Depth")
        type: Kind of dataset
        is_time_varying: False for static fields holding a single output
        outputs: Outputs in the order they were added
        value_min: Smallest finite value over all outputs, set by
            :meth:`update_value_range`
        value_max: Largest finite value over all outputs
    """

    file_name: str
    name: str = ""
    type: DataSetType = DataSetType.SCALAR
    is_time_varying: bool = True
    outputs: list[Output] = field(default_factory=list)
    value_min: float | None = None
    value_max: float | None = None

    @property
    def n_outputs(self) -> int:
        """Return number of outputs."""
        return len(self.outputs)

    @property
    def times(self) -> NDArray[np.float64]:
        """Return output times (hours) as numpy array."""
        return np.array([o.time for o in self.outputs], dtype=np.float64)

    def output(self, index: int) -> Output:
        """Get an output by timestep index. Raises IndexError if not found."""
        return self.outputs[index]

    def add_output(self, output: Output, check_order: bool = True) -> None:
        """
        Append an output; the dataset takes ownership of it.

        Args:
            output: Output to append
            check_order: Reject an output whose time precedes the last one.
                Readers that keep outputs in file order pass False.

        Raises:
            ValueError: If a static dataset already has its output, or
                ``check_order`` is set and the output's time precedes the
                last one
        """
        if not self.is_time_varying and self.outputs:
            raise ValueError(f"Dataset '{self.name}' is not time-varying")
        if check_order and self.outputs and output.time < self.outputs[-1].time:
            raise ValueError(
                f"Dataset '{self.name}': output time {output.time} precedes "
                f"{self.outputs[-1].time}"
            )
        self.outputs.append(output)

    def update_value_range(self) -> None:
        """Compute the value range over all outputs, ignoring NaNs."""
        self.value_min = None
        self.value_max = None
        for o in self.outputs:
            finite = o.values[np.isfinite(o.values)]
            if finite.size == 0:
                continue
            lo = float(finite.min())
            hi = float(finite.max())
            if self.value_min is None or lo < self.value_min:
                self.value_min = lo
            if self.value_max is None or hi > self.value_max:
                self.value_max = hi

    def to_dataframe(self):
        """
        Convert the scalar values to a pandas DataFrame.

        Returns:
            DataFrame indexed by time in hours, one column per node
        """
        import pandas as pd

        if not self.outputs:
            return pd.DataFrame()
        data = np.vstack([o.values for o in self.outputs])
        return pd.DataFrame(
            data,
            index=pd.Index(self.times, name="time_hours"),
            columns=[f"node_{i}" for i in range(data.shape[1])],
        )

    def __repr__(self) -> str:
        return (
            f"DataSet(name='{self.name}', type={self.type.value}, "
            f"n_outputs={self.n_outputs})"
        )
