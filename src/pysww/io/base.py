"""
Base classes for SWW file I/O.

This module provides the abstract reader base class and the status
objects reported by the loaders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class LoadError(Enum):
    """Error kinds reported through :class:`LoadStatus`."""

    UNKNOWN_FORMAT = "unknown_format"


class LoadState(Enum):
    """Progress of a single load."""

    NOT_STARTED = "not_started"
    VALIDATING = "validating"
    READING = "reading"
    DONE = "done"
    FAILED = "failed"


@dataclass
class LoadStatus:
    """
    Outcome of a load, for callers that check a status instead of catching.

    Attributes:
        last_error: Error kind of the failed load, None on success
        message: Human readable description of the failure
    """

    last_error: LoadError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.last_error is None

    def clear(self) -> None:
        """Reset the status before a new load."""
        self.last_error = None
        self.message = ""


class BaseReader(ABC):
    """Abstract base class for file readers."""

    def __init__(self, filepath: Path | str) -> None:
        """
        Initialize the reader.

        Args:
            filepath: Path to the file to read
        """
        self.filepath = Path(filepath)
        self._validate_file()

    def _validate_file(self) -> None:
        """Validate that the file exists and is readable."""
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")
        if not self.filepath.is_file():
            raise ValueError(f"Path is not a file: {self.filepath}")

    @abstractmethod
    def read(self) -> Any:
        """
        Read the file and return the parsed data.

        Returns:
            Parsed data (type depends on subclass)
        """
        pass

    @property
    @abstractmethod
    def format(self) -> str:
        """Return the file format identifier."""
        pass
