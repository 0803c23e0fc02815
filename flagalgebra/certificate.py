"""Solutions of semi-definite flag problems as returned by the CSDP solver."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from flagalgebra.sdpa import SdpaCoeff, SdpaParseError, _format_float

__all__ = ["CSMode", "Certificate"]

Block = dict[tuple[int, int], float]


class CSMode(Enum):
    """Symmetry reduction applied to a product-and-unlabel matrix."""

    SIMPLE = "simple"
    INVARIANT = "invariant"
    ANTI_INVARIANT = "anti-invariant"


def _parse_y(line: str) -> list[float]:
    try:
        return [float(tok) for tok in line.split()]
    except ValueError:
        raise SdpaParseError(f"invalid number in {line.strip()!r}") from None


def _add(block: Block, key: tuple[int, int], value: float) -> None:
    block[key] = block.get(key, 0.0) + value


def _condense(block: Block) -> Block:
    """Fold a doubled equality block: entry 2i minus entry 2i+1 goes to i."""
    folded: Block = {}
    for (i, j), value in block.items():
        if i != j:
            raise SdpaParseError(
                f"off-diagonal coefficient ({i + 1}, {j + 1}) in an equality block"
            )
        _add(folded, (i // 2, i // 2), value if i % 2 == 0 else -value)
    return folded


@dataclass
class Certificate:
    """The vector ``y`` and the block matrices Z (matrix 1) and X (matrix 2).

    Each block is a sparse matrix mapping 0-based ``(row, column)`` to a value;
    ``sizes`` gives the dimension of every block.
    """

    y: list[float] = field(default_factory=list)
    z: list[Block] = field(default_factory=list)
    x: list[Block] = field(default_factory=list)
    sizes: list[int] = field(default_factory=list)

    @classmethod
    def from_file(
        cls,
        name: str | Path,
        ineq_blocks: Iterable[tuple[int, bool]],
        cs_sizes: Iterable[int],
    ) -> Certificate:
        """Read a certificate written by CSDP.

        ``ineq_blocks`` gives, for each group of inequalities, its number of
        inequalities and whether they are equalities; an equality group takes a
        block twice as large in the file and is folded back on reading.
        ``cs_sizes`` gives the size of each Cauchy-Schwarz block.
        """
        specs = [(int(length), bool(equality)) for length, equality in ineq_blocks]
        cs = [int(size) for size in cs_sizes]
        for length, _ in specs:
            if length <= 0:
                raise ValueError("a group of inequalities must not be empty")
        read_sizes = [2 * length if eq else length for length, eq in specs] + cs
        matrices: tuple[list[Block], list[Block]] = (
            [{} for _ in read_sizes],
            [{} for _ in read_sizes],
        )
        with open(name) as f:
            first = f.readline()
            if not first:
                raise SdpaParseError("missing vector y")
            y = _parse_y(first)
            for line in f:
                coeff = SdpaCoeff.parse(line)
                if not 1 <= coeff.mat <= 2:
                    raise SdpaParseError(f"no matrix number {coeff.mat}")
                if not 1 <= coeff.block <= len(read_sizes):
                    raise SdpaParseError(f"no block number {coeff.block}")
                size = read_sizes[coeff.block - 1]
                if not (1 <= coeff.i <= size and 1 <= coeff.j <= size):
                    raise SdpaParseError(
                        f"position ({coeff.i}, {coeff.j}) outside a block of size {size}"
                    )
                block = matrices[coeff.mat - 1][coeff.block - 1]
                _add(block, (coeff.i - 1, coeff.j - 1), coeff.val)
                if coeff.i != coeff.j:
                    _add(block, (coeff.j - 1, coeff.i - 1), coeff.val)
        for k, (_, equality) in enumerate(specs):
            if equality:
                for blocks in matrices:
                    blocks[k] = _condense(blocks[k])
        sizes = [length for length, _ in specs] + cs
        return cls(y, matrices[0], matrices[1], sizes)

    def to_file(self, name: str | Path) -> None:
        """Write the certificate in the format CSDP reads and writes."""
        with open(name, "w") as w:
            w.write("".join(f"{_format_float(v)} " for v in self.y) + "\n")
            for num_mat, blocks in enumerate((self.z, self.x), start=1):
                for num_block, block in enumerate(blocks, start=1):
                    entries = sorted(block.items(), key=lambda e: (e[0][1], e[0][0]))
                    for (i, j), value in entries:
                        if i <= j:
                            w.write(
                                f"{num_mat} {num_block} {i + 1} {j + 1} "
                                f"{_format_float(value)}\n"
                            )

    def value_primal(self, objective: Sequence[float]) -> float:
        """Scalar product of ``y`` with the objective vector."""
        if len(objective) != len(self.y):
            raise ValueError(
                f"objective has {len(objective)} entries, y has {len(self.y)}"
            )
        return sum((yi * float(ai) for ai, yi in zip(objective, self.y)), 0.0)

    def value_dual(self, bounds: Sequence[Sequence[float]]) -> float:
        """Sum over the inequality blocks of X weighted by the inequality bounds."""
        total = 0.0
        for block, block_bounds in enumerate(bounds):
            for (i, j), value in self.x[block].items():
                if i != j:
                    raise ValueError(
                        f"off-diagonal coefficient ({i}, {j}) in inequality block {block}"
                    )
                total += value * float(block_bounds[i])
        return total

    def values(
        self, objective: Sequence[float], bounds: Sequence[Sequence[float]]
    ) -> tuple[float, float]:
        """Primal and dual values."""
        return (self.value_primal(objective), self.value_dual(bounds))

    def thresholded_y(self, threshold: float) -> list[float]:
        """The vector ``y`` with entries of absolute value below ``threshold`` set to 0."""
        return [0.0 if abs(v) < threshold else v for v in self.y]

    def with_threshold(self, threshold: float) -> Certificate:
        """Copy of the certificate whose ``y`` is thresholded."""
        return Certificate(
            self.thresholded_y(threshold),
            [dict(b) for b in self.z],
            [dict(b) for b in self.x],
            list(self.sizes),
        )

    def diag_coeffs(self, block: int, n: int) -> list[float]:
        """Diagonal of the diagonal block ``block`` of X, which must have size ``n``."""
        if self.sizes[block] != n:
            raise ValueError(f"block {block} has size {self.sizes[block]}, not {n}")
        result = [0.0] * n
        for (i, j), value in self.x[block].items():
            if i != j:
                raise ValueError(
                    f"off-diagonal coefficient ({i}, {j}) in diagonal block {block}"
                )
            result[i] += value
        return result