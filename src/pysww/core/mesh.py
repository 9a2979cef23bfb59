"""
Mesh classes for SWW result representation.

This module provides the core mesh data structures including:

- :class:`Node`: Mesh vertices with world coordinates
- :class:`Element`: Triangular elements referencing nodes by index
- :class:`Mesh`: The complete mesh container with its attached datasets

Nodes and elements are identified by their 0-based position in the file,
so ``mesh.nodes[i].id == i`` and element vertices index straight into
``mesh.nodes``.

Example
-------
Create a simple triangular mesh:

>>> from pysww.core.mesh import Element, Mesh, Node
>>> nodes = [Node(id=0, x=0.0, y=0.0), Node(id=1, x=100.0, y=0.0),
...          Node(id=2, x=50.0, y=100.0)]
>>> elements = [Element(id=0, vertices=(0, 1, 2))]
>>> mesh = Mesh(nodes=nodes, elements=elements)
>>> print(f"Mesh: {mesh.n_nodes} nodes, {mesh.n_elements} elements")
Mesh: 3 nodes, 1 elements
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

import numpy as np
from numpy.typing import NDArray

from pysww.core.exceptions import MeshError

if TYPE_CHECKING:
    from pysww.core.dataset import DataSet


class ElementType(Enum):
    """Element topologies understood by pysww."""

    TRIANGLE = "E3T"


@dataclass(frozen=True)
class Node:
    """
    A mesh node (vertex).

    Parameters
    ----------
    id : int
        Node index (0-based position in the file).
    x : float
        X coordinate in world units, origin offset already applied.
    y : float
        Y coordinate in world units, origin offset already applied.

    Examples
    --------
    >>> n1 = Node(id=0, x=0.0, y=0.0)
    >>> n2 = Node(id=1, x=3.0, y=4.0)
    >>> n1.distance_to(n2)
    5.0
    """

    id: int
    x: float
    y: float

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (x, y) coordinate tuple."""
        return (self.x, self.y)

    def distance_to(self, other: Node) -> float:
        """Calculate Euclidean distance to another node."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def __repr__(self) -> str:
        return f"Node(id={self.id}, x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Element:
    """
    A triangular finite element.

    Parameters
    ----------
    id : int
        Element index (0-based position in the file).
    vertices : tuple of int
        The three node indices, in file order.
    etype : ElementType, optional
        Element topology. Only :attr:`ElementType.TRIANGLE` exists.

    Raises
    ------
    MeshError
        If the number of vertices is not 3.
    """

    id: int
    vertices: tuple[int, int, int]
    etype: ElementType = ElementType.TRIANGLE

    def __post_init__(self) -> None:
        """Validate element after initialization."""
        n = len(self.vertices)
        if n != 3:
            raise MeshError(f"Element {self.id}: expected 3 vertices, got {n}")

    @property
    def n_vertices(self) -> int:
        """Return number of vertices."""
        return len(self.vertices)

    @property
    def edges(self) -> list[tuple[int, int]]:
        """
        Return list of edge tuples (node1_index, node2_index).

        Edges are returned in order around the element, closing back to first vertex.
        """
        n = len(self.vertices)
        return [(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def __repr__(self) -> str:
        return f"Element(id={self.id}, vertices={self.vertices})"


@dataclass
class Mesh:
    """
    A triangular mesh together with the datasets defined on it.

    Parameters
    ----------
    nodes : list of Node
        Nodes in file order; ``nodes[i].id == i``.
    elements : list of Element
        Elements in file order; ``elements[i].id == i``.
    datasets : list of DataSet, optional
        Datasets in the order they were added.

    Examples
    --------
    >>> mesh = Mesh(
    ...     nodes=[Node(0, 0.0, 0.0), Node(1, 200.0, 0.0), Node(2, 0.0, 100.0)],
    ...     elements=[Element(0, (0, 1, 2))],
    ... )
    >>> mesh.bounding_box
    (0.0, 0.0, 200.0, 100.0)
    """

    nodes: list[Node]
    elements: list[Element] = field(default_factory=list)
    datasets: list[DataSet] = field(default_factory=list)

    # Cached numpy arrays for efficient computation
    _x_cache: NDArray[np.float64] | None = field(default=None, repr=False)
    _y_cache: NDArray[np.float64] | None = field(default=None, repr=False)
    _connectivity_cache: NDArray[np.int64] | None = field(default=None, repr=False)

    @property
    def n_nodes(self) -> int:
        """Return number of nodes in the mesh."""
        return len(self.nodes)

    @property
    def n_elements(self) -> int:
        """Return number of elements in the mesh."""
        return len(self.elements)

    @property
    def n_datasets(self) -> int:
        """Return number of datasets attached to the mesh."""
        return len(self.datasets)

    @property
    def x(self) -> NDArray[np.float64]:
        """Return x coordinates as numpy array, in node order."""
        if self._x_cache is None:
            self._x_cache = np.array([node.x for node in self.nodes], dtype=np.float64)
        return self._x_cache

    @property
    def y(self) -> NDArray[np.float64]:
        """Return y coordinates as numpy array, in node order."""
        if self._y_cache is None:
            self._y_cache = np.array([node.y for node in self.nodes], dtype=np.float64)
        return self._y_cache

    @property
    def connectivity(self) -> NDArray[np.int64]:
        """
        Return vertex connectivity array.

        Returns array of shape (n_elements, 3) holding 0-based node indices.
        """
        if self._connectivity_cache is None:
            conn = np.zeros((self.n_elements, 3), dtype=np.int64)
            for i, elem in enumerate(self.elements):
                conn[i, :] = elem.vertices
            self._connectivity_cache = conn
        return self._connectivity_cache

    @property
    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return bounding box as (xmin, ymin, xmax, ymax)."""
        if not self.nodes:
            raise MeshError("Mesh has no nodes")
        x = self.x
        y = self.y
        return (float(x.min()), float(y.min()), float(x.max()), float(y.max()))

    def get_node(self, node_id: int) -> Node:
        """Get a node by index. Raises IndexError if not found."""
        return self.nodes[node_id]

    def get_element(self, element_id: int) -> Element:
        """Get an element by index. Raises IndexError if not found."""
        return self.elements[element_id]

    def get_element_centroid(self, element_id: int) -> tuple[float, float]:
        """Calculate centroid of an element."""
        elem = self.elements[element_id]
        x_sum = 0.0
        y_sum = 0.0
        for vid in elem.vertices:
            node = self.nodes[vid]
            x_sum += node.x
            y_sum += node.y
        n = len(elem.vertices)
        return (x_sum / n, y_sum / n)

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over nodes in index order."""
        yield from self.nodes

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over elements in index order."""
        yield from self.elements

    def add_dataset(self, dataset: DataSet) -> None:
        """Attach a dataset; the mesh takes ownership of it."""
        self.datasets.append(dataset)

    def get_dataset(self, name: str) -> DataSet:
        """Get a dataset by name. Raises KeyError if not found."""
        for ds in self.datasets:
            if ds.name == name:
                return ds
        raise KeyError(name)

    def validate(self) -> None:
        """
        Validate mesh integrity.

        Raises:
            MeshError: If mesh is invalid
        """
        if not self.nodes:
            raise MeshError("Mesh has no nodes")

        n_nodes = self.n_nodes
        for elem in self.elements:
            for vid in elem.vertices:
                if vid < 0 or vid >= n_nodes:
                    raise MeshError(
                        f"Element {elem.id} has invalid vertex reference: {vid}"
                    )

    def __repr__(self) -> str:
        return (
            f"Mesh(n_nodes={self.n_nodes}, n_elements={self.n_elements}, "
            f"n_datasets={self.n_datasets})"
        )
