"""SDPA problem and certificate files, and calls to the CSDP solver."""

from dataclasses import dataclass, field, replace
from itertools import groupby
import logging
from pathlib import Path
import subprocess
import time
from collections.abc import Iterable, Iterator

from flagalgebra.sdpa import (
    SdpaCoeff,
    SdpaError,
    SdpaParseError,
    SdpNotSolved,
    _format_float,
)

__all__ = [
    "SdpaProblem",
    "SdpaCertificate",
    "certificate_filename",
    "sum_duplicates",
    "push_identities",
    "csdp",
    "csdp_minimize_certificate",
]

log = logging.getLogger(__name__)

_CS_COST = 100.0
_INEQ_COST = 1.0
_TIME_BEFORE_STREAM = 2.0


def certificate_filename(filename: str) -> str:
    """Name of the certificate file the solver writes for ``filename``."""
    return f"{filename}.cert.sdpa"


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise SdpaParseError(f"missing {what}") from None


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise SdpaParseError(f"invalid integer {token!r}") from None


def _parse_floats(line: str) -> list[float]:
    try:
        return [float(x) for x in line.split()]
    except ValueError:
        raise SdpaParseError(f"invalid number in {line!r}") from None


@dataclass
class SdpaProblem:
    """A problem in SDPA format: block sizes, objective vector ``b`` and coefficients."""

    block_sizes: list[int] = field(default_factory=list)
    b: list[float] = field(default_factory=list)
    coeffs: list[SdpaCoeff] = field(default_factory=list)

    def write(self, filename: str) -> None:
        """Write the problem to ``filename``."""
        with open(filename, "w") as w:
            w.write(f"{len(self.b)}\n")
            w.write(f"{len(self.block_sizes)}\n")
            w.write("".join(f"{size} " for size in self.block_sizes) + "\n")
            w.write("".join(f"{_format_float(x)} " for x in self.b) + "\n")
            w.writelines(f"{coeff} \n" for coeff in self.coeffs)

    @classmethod
    def load(cls, filename: str) -> "SdpaProblem":
        """Read a problem, with extension ``.sdpa``; comment lines start with ``*``."""
        path = Path(filename).with_suffix(".sdpa")
        with open(path) as f:
            lines = iter(
                [
                    line.rstrip("\n")
                    for line in f
                    if line.strip() and not line.lstrip().startswith("*")
                ]
            )
        dim = _parse_int(_next_line(lines, "dimension").strip())
        nblock = _parse_int(_next_line(lines, "number of blocks").strip())
        block_sizes = [_parse_int(x) for x in _next_line(lines, "block sizes").split()]
        if len(block_sizes) != nblock:
            raise SdpaParseError(
                f"expected {nblock} block sizes, found {len(block_sizes)}"
            )
        b = _parse_floats(_next_line(lines, "objective vector"))
        if len(b) != dim:
            raise SdpaParseError(f"expected {dim} objective values, found {len(b)}")
        coeffs = [SdpaCoeff.parse(line) for line in lines]
        return cls(block_sizes, b, coeffs)

    def to_certificate_minimization(self, target_value: float) -> "SdpaProblem":
        """Problem of minimizing the certificate weight while keeping the objective at ``target_value``."""
        b = [*self.b, target_value]
        new_mat = len(b)
        coeffs = [replace(c, mat=new_mat) if c.mat == 0 else c for c in self.coeffs]
        coeffs = push_identities(
            coeffs, 0, self.block_sizes, -_INEQ_COST, -_CS_COST
        )
        return SdpaProblem(list(self.block_sizes), b, coeffs)


@dataclass
class SdpaCertificate:
    """A solution as written by CSDP: the vector ``y``, then Z (matrix 1) and X (matrix 2)."""

    y: list[float] = field(default_factory=list)
    coeffs: list[SdpaCoeff] = field(default_factory=list)

    def write(self, filename: str) -> None:
        """Write the certificate to ``filename``."""
        with open(filename, "w") as w:
            w.write("".join(f"{_format_float(v)} " for v in self.y) + "\n")
            w.writelines(f"{coeff} \n" for coeff in self.coeffs)

    @classmethod
    def load(cls, filename: str) -> "SdpaCertificate":
        """Read a certificate file; blank lines are ignored."""
        with open(filename) as f:
            lines = iter([line.rstrip("\n") for line in f if line.strip()])
        y = _parse_floats(_next_line(lines, "vector y"))
        coeffs = [SdpaCoeff.parse(line) for line in lines]
        return cls(y, coeffs)

    def to_certificate_minimization(self, problem: SdpaProblem) -> "SdpaCertificate":
        """Starting point for the problem built by ``SdpaProblem.to_certificate_minimization``."""
        y = [*self.y, -1.0]
        extra = [
            replace(c, mat=1, val=-c.val) for c in problem.coeffs if c.mat == 0
        ]
        return SdpaCertificate(y, sum_duplicates([*self.coeffs, *extra]))

    def from_certificate_minimization(self) -> "SdpaCertificate":
        """Keep only the primal matrix X; the dual values are no longer valid and are zeroed."""
        return SdpaCertificate(
            [0.0] * len(self.y), [c for c in self.coeffs if c.mat == 2]
        )


def sum_duplicates(coeffs: Iterable[SdpaCoeff]) -> list[SdpaCoeff]:
    """Sort coefficients by position and add up those at the same position."""
    ordered = sorted(coeffs, key=SdpaCoeff.indices)
    merged = []
    for _, group in groupby(ordered, key=SdpaCoeff.indices):
        first, *rest = group
        total = first.val
        for c in rest:
            total += c.val
        merged.append(replace(first, val=total))
    return merged


def push_identities(
    coeffs: Iterable[SdpaCoeff],
    matrix_number: int,
    block_sizes: Iterable[int],
    scale_diag: float,
    scale_nondiag: float,
) -> list[SdpaCoeff]:
    """Return ``coeffs`` followed by a scaled identity of matrix ``matrix_number`` on every block.

    Diagonal blocks (negative size) use ``scale_diag``, the others ``scale_nondiag``.
    """
    result = list(coeffs)
    for block, size in enumerate(block_sizes, start=1):
        val = scale_diag if size < 0 else scale_nondiag
        result.extend(
            SdpaCoeff(matrix_number, block, i, i, val) for i in range(1, abs(size) + 1)
        )
    return result


def csdp(filename: str, initial_solution: str | None = None) -> float:
    """Run CSDP on ``filename`` and return the primal objective value.

    Raises ``SdpNotSolved`` when the solver ends with a small nonzero code.
    """
    command = ["csdp", filename, certificate_filename(filename)]
    if initial_solution is not None:
        command.append(initial_solution)
    log.info("Calling CSDP")
    log.debug("command: %s", command)
    proc = subprocess.Popen(command, stdout=subprocess.PIPE, text=True)
    start = time.monotonic()
    streaming = False
    try:
        lines = iter(proc.stdout)
        for raw in lines:
            line = raw.rstrip("\n")
            if line.startswith("CSDP"):
                continue
            if line.startswith("Iter"):
                if not streaming and time.monotonic() - start > _TIME_BEFORE_STREAM:
                    streaming = True
                    log.info(
                        "csdp is taking more than %ss, start streaming output",
                        _TIME_BEFORE_STREAM,
                    )
                log.log(logging.INFO if streaming else logging.DEBUG, "%s", line)
                continue
            code = proc.wait()
            if code == 0:
                fields = next(lines, "").split()
                if len(fields) < 4:
                    raise RuntimeError("CSDP output incorrectly parsed")
                value = float(fields[3])
                log.info("%s with primal value %s", line, value)
                return value
            log.info("%s", line)
            if code < 0 or code > 10:
                raise RuntimeError(f"{command} aborted with code {code}")
            raise SdpNotSolved(code)
        proc.wait()
        raise RuntimeError("CSDP output incorrectly parsed")
    finally:
        proc.stdout.close()


def csdp_minimize_certificate(
    filename: str, initial_solution: str | None = None
) -> float:
    """Solve with CSDP, then try to replace the certificate by one of smaller weight."""
    val = csdp(filename, initial_solution)
    problem = SdpaProblem.load(filename).to_certificate_minimization(val)
    cert = SdpaCertificate.load(certificate_filename(filename)).to_certificate_minimization(
        problem
    )
    filename_minimize = f"{filename}.minimize"
    filename_certificate_minimize = f"{filename}.minimize.certificate"
    problem.write(filename_minimize)
    cert.write(filename_certificate_minimize)
    log.info("Try to minimize certificate")
    try:
        csdp(filename_minimize, filename_certificate_minimize)
    except (SdpaError, OSError):
        log.warning("Cannot minimize certificate")
    else:
        log.info("Certificate minimized")
        SdpaCertificate.load(
            filename_certificate_minimize
        ).from_certificate_minimization().write(certificate_filename(filename))
    return val