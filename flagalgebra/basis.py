"""Types and bases of flags, and on-disk memoization of computed operators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import gzip
import logging
from pathlib import Path
import pickle
from typing import Generic, TypeVar

__all__ = ["Savable", "Type", "Basis"]

log = logging.getLogger(__name__)

T = TypeVar("T")

_DATA_DIR = Path("data")


class Savable(ABC, Generic[T]):
    """An object computed once, then stored in a compressed file and reloaded."""

    @abstractmethod
    def filename(self) -> str:
        """Name of the file where the object is saved, without extension."""

    @abstractmethod
    def create(self) -> T:
        """Compute the object."""

    def file_path(self, flag_name: str) -> Path:
        """Path of the file holding the object for flags of kind ``flag_name``."""
        return (_DATA_DIR / flag_name / self.filename()).with_suffix(".dat")

    def create_and_save(self, path: Path | str) -> T:
        """(Re)compute the object, save it at ``path`` and return it."""
        path = Path(path)
        log.info("Creating %s", path)
        value = self.create()
        with gzip.open(path, "wb") as f:
            pickle.dump(value, f)
        return value

    def load(self, path: Path | str) -> T:
        """Read the object stored at ``path``."""
        with gzip.open(Path(path), "rb") as f:
            return pickle.load(f)

    def get(self, flag_name: str) -> T:
        """Load the object if its file is valid, otherwise compute and save it."""
        path = self.file_path(flag_name)
        if path.exists():
            log.debug("Loading %s", path)
            try:
                value = self.load(path)
            except Exception as e:  # any unreadable file is recomputed
                log.error("Failed to load %s: %s", path, e)
                return self.create_and_save(path)
            log.debug("Done")
            return value
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            log.error("Cannot create %s.", path.parent)
            raise
        return self.create_and_save(path)


@dataclass(frozen=True, order=True)
class Type:
    """A type (root) of flags: its size and its index among flags of that size."""

    size: int = 0
    id: int = 0

    @classmethod
    def empty(cls) -> Type:
        """The type of size zero."""
        return cls(0, 0)

    def is_empty(self) -> bool:
        """Whether this is the type of size zero."""
        return self == Type.empty()

    def suffix(self) -> str:
        """File name suffix identifying the type; empty for the empty type."""
        if self.is_empty():
            return ""
        return f"_type_{self.size}_id_{self.id}"

    def print_concise(self) -> str:
        """Short identifier of the type."""
        if self.is_empty():
            return ""
        return f"{self.size},id{self.id}"

    def __str__(self) -> str:
        if self.is_empty():
            return "Empty type"
        return f"Type of size {self.size} (id {self.id})"


@dataclass(frozen=True, order=True)
class Basis:
    """The set of flags of a given size and type."""

    size: int
    t: Type = field(default_factory=Type.empty)

    def __post_init__(self) -> None:
        if self.t.size > self.size:
            raise ValueError(
                f"type of size {self.t.size} does not fit in flags of size {self.size}"
            )

    def with_type(self, t: Type) -> Basis:
        """Same size, type ``t``."""
        return Basis(self.size, t)

    def without_type(self) -> Basis:
        """Same size, empty type."""
        return Basis(self.size, Type.empty())

    def with_size(self, size: int) -> Basis:
        """Same type, ``size`` vertices."""
        return Basis(size, self.t)

    def print_concise(self) -> str:
        """Short identifier of the basis."""
        if self.t.is_empty():
            return f"{self.size}"
        return f"{self.size},{self.t.size},id{self.t.id}"

    def __str__(self) -> str:
        if self.t.is_empty():
            return f"Flags of size {self.size} without type"
        return f"Flags of size {self.size} with type {self.t})"

    def _same_type(self, other: Basis) -> None:
        if self.t != other.t:
            raise ValueError(f"bases have different types: {self.t} and {other.t}")

    def __mul__(self, other: Basis) -> Basis:
        if not isinstance(other, Basis):
            return NotImplemented
        self._same_type(other)
        return self.with_size(self.size + other.size - self.t.size)

    def __truediv__(self, other: Basis) -> Basis:
        if not isinstance(other, Basis):
            return NotImplemented
        self._same_type(other)
        if self.size < other.size:
            raise ValueError(f"cannot divide size {self.size} by size {other.size}")
        return self.with_size(self.size - other.size + self.t.size)

    def filename(self) -> str:
        """Name of the file listing the flags of this basis."""
        return f"flags_{self.size}{self.t.suffix()}"