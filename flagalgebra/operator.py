"""Identifiers of the flag algebra operators: products, subflag counts, unlabelings."""

from __future__ import annotations

from dataclasses import dataclass
import math

from flagalgebra.basis import Basis, Type

__all__ = ["SplitCount", "SubflagCount", "Unlabeling", "Unlabel", "MulAndUnlabel"]


@dataclass(frozen=True)
class SplitCount:
    """Operator counting the ways to split a flag into a left and a right flag of type ``t``."""

    left_size: int
    right_size: int
    t: Type

    def __post_init__(self) -> None:
        if self.t.size > self.left_size or self.t.size > self.right_size:
            raise ValueError(
                f"type of size {self.t.size} does not fit in sizes "
                f"{self.left_size} and {self.right_size}"
            )

    @classmethod
    def from_input(cls, left: Basis, right: Basis) -> SplitCount:
        """Split operator for the product of a flag of ``left`` with one of ``right``."""
        if left.t != right.t:
            raise ValueError(f"bases have different types: {left.t} and {right.t}")
        return cls(left.size, right.size, left.t)

    def left_basis(self) -> Basis:
        """Basis of the left factor."""
        return Basis(self.left_size, self.t)

    def right_basis(self) -> Basis:
        """Basis of the right factor."""
        return Basis(self.right_size, self.t)

    def output_basis(self) -> Basis:
        """Basis of the product."""
        return Basis(self.left_size + self.right_size - self.t.size, self.t)

    def denom(self) -> int:
        """Number of ways to choose the left free vertices among all free vertices."""
        left_choice = self.left_size - self.t.size
        right_choice = self.right_size - self.t.size
        return math.comb(left_choice + right_choice, left_choice)

    def filename(self) -> str:
        """Name of the file where the operator is stored."""
        return f"split_{self.left_size}_{self.right_size}{self.t.suffix()}"


@dataclass(frozen=True)
class SubflagCount:
    """Operator counting copies of flags of size ``k`` in flags of size ``n``, both of type ``t``."""

    k: int
    n: int
    t: Type

    def __post_init__(self) -> None:
        if not self.t.size <= self.k <= self.n:
            raise ValueError(
                f"subflag count needs type size <= k <= n, got "
                f"{self.t.size}, {self.k}, {self.n}"
            )

    @classmethod
    def from_to(cls, inner: Basis, outer: Basis) -> SubflagCount:
        """Count flags of ``inner`` inside flags of ``outer``."""
        if inner.t != outer.t:
            raise ValueError(f"bases have different types: {inner.t} and {outer.t}")
        return cls(inner.size, outer.size, inner.t)

    def inner_basis(self) -> Basis:
        """Basis of the counted flags."""
        return Basis(self.k, self.t)

    def outer_basis(self) -> Basis:
        """Basis of the host flags."""
        return Basis(self.n, self.t)

    def denom(self) -> int:
        """Number of ways to choose the free vertices of the subflag."""
        return math.comb(self.n - self.t.size, self.k - self.t.size)

    def filename(self) -> str:
        """Name of the file where the operator is stored."""
        return f"subflag_{self.n}_to_{self.k}{self.t.suffix()}"


@dataclass(frozen=True)
class Unlabeling:
    """Unlabeling sending the fully labeled version of flag ``flag`` of ``basis`` to that flag."""

    basis: Basis
    flag: int

    @classmethod
    def total(cls, t: Type) -> Unlabeling:
        """Unlabeling that forgets every label of the type ``t``."""
        return cls(Basis(t.size), t.id)

    def output_type(self) -> Type:
        """Type left after unlabeling."""
        return self.basis.t


@dataclass(frozen=True)
class Unlabel:
    """An unlabeling applied to flags of ``size`` vertices."""

    unlabeling: Unlabeling
    size: int

    @classmethod
    def total(cls, basis: Basis) -> Unlabel:
        """Forget the whole type of the flags of ``basis``."""
        return cls(Unlabeling.total(basis.t), basis.size)

    def denom(self) -> int:
        """Number of ordered choices of the newly unlabeled vertices among the free ones."""
        new_type_size = self.unlabeling.basis.t.size
        old_type_size = self.unlabeling.basis.size
        choices = old_type_size - new_type_size
        free_vertices = self.size - new_type_size
        if choices < 0 or free_vertices < 0:
            raise ValueError("unlabeling does not fit the flag size")
        return math.perm(free_vertices, choices)

    def output_basis(self) -> Basis:
        """Basis of the unlabeled flags."""
        return Basis(self.size).with_type(self.unlabeling.output_type())

    def filename(self) -> str:
        """Name of the file where the operator is stored."""
        basis = self.unlabeling.basis
        return (
            f"unlabel_{self.size}_id_{self.unlabeling.flag}"
            f"_basis_{basis.size}{basis.t.suffix()}"
        )


@dataclass(frozen=True)
class MulAndUnlabel:
    """A product followed by an unlabeling, as used in Cauchy-Schwarz inequalities."""

    split: SplitCount
    unlabeling: Unlabeling

    def _unlabel(self) -> Unlabel:
        return Unlabel(self.unlabeling, self.split.output_basis().size)

    def output_basis(self) -> Basis:
        """Basis of the result."""
        return Basis(self.split.output_basis().size).with_type(
            self.unlabeling.output_type()
        )

    def denom(self) -> int:
        """Common denominator of the product and of the unlabeling."""
        return self.split.denom() * self._unlabel().denom()

    def filename(self) -> str:
        """Name of the file where the operator is stored."""
        return (
            f"{self.split.filename()}_then_unlab_id_{self.unlabeling.flag}"
            f"{self.unlabeling.basis.t.suffix()}"
        )

    def __str__(self) -> str:
        return (
            f"Mul. and unlabel: {self.split.left_size}x{self.split.right_size}; "
            f"{self.split.t} -> {self.unlabeling.basis.t} (id {self.unlabeling.flag})"
        )