"""
Configuration classes for SWW file reading.

These dataclasses name the dimensions, variables and attributes of the
SWW layout and hold the options that control how results are derived.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

# Threshold for determining whether an element is active (wet). The format
# does not store wet/dry state, and water at rest keeps a small residue.
DEPTH_THRESHOLD = 0.0001  # in meters


@dataclass(frozen=True)
class SWWSchema:
    """Names of the dimensions, variables and attributes in an SWW file."""

    # Dimensions
    volumes_dim: str = "number_of_volumes"
    vertices_dim: str = "number_of_vertices"
    points_dim: str = "number_of_points"
    timesteps_dim: str = "number_of_timesteps"

    # Variables
    x_var: str = "x"
    y_var: str = "y"
    z_var: str = "z"
    volumes_var: str = "volumes"
    time_var: str = "time"
    stage_var: str = "stage"
    xmomentum_var: str = "xmomentum"
    ymomentum_var: str = "ymomentum"

    # Global attributes
    xllcorner_attr: str = "xllcorner"
    yllcorner_attr: str = "yllcorner"

    # Names of the produced datasets
    BED_NAME: ClassVar[str] = "Bed Elevation"
    DEPTH_NAME: ClassVar[str] = "Depth"
    MOMENTUM_NAME: ClassVar[str] = "Momentum"

    @property
    def required_dimensions(self) -> tuple[str, ...]:
        return (self.volumes_dim, self.vertices_dim, self.points_dim, self.timesteps_dim)

    @property
    def required_variables(self) -> tuple[str, ...]:
        return (
            self.x_var,
            self.y_var,
            self.z_var,
            self.volumes_var,
            self.time_var,
            self.stage_var,
        )

    @property
    def momentum_variables(self) -> tuple[str, str]:
        return (self.xmomentum_var, self.ymomentum_var)


@dataclass
class SWWReadConfig:
    """
    Options for reading an SWW file.

    Attributes:
        depth_threshold: Depth above which a node counts as wet
        seconds_per_hour: Divisor converting the stored time axis to hours
        load_momentum: Decode the momentum dataset when the file has one
        check_indices: Reject connectivity referencing nodes out of range
        schema: Names of the dimensions, variables and attributes
    """

    depth_threshold: float = DEPTH_THRESHOLD
    seconds_per_hour: float = 3600.0
    load_momentum: bool = True
    check_indices: bool = True
    schema: SWWSchema = field(default_factory=SWWSchema)

    def __post_init__(self) -> None:
        if self.depth_threshold < 0:
            raise ValueError(f"depth_threshold must be >= 0, got {self.depth_threshold}")
        if self.seconds_per_hour <= 0:
            raise ValueError(f"seconds_per_hour must be > 0, got {self.seconds_per_hour}")
