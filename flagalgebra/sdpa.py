"""Coefficient lines of the SDPA sparse format and the errors around it."""

from dataclasses import dataclass
from decimal import Decimal
import math

__all__ = ["SdpaError", "SdpaParseError", "SdpNotSolved", "SdpaCoeff"]


class SdpaError(Exception):
    """Base class of the errors met while handling SDPA files or the solver."""


class SdpaParseError(SdpaError):
    """A line of an SDPA file could not be read."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Error while parsing matrix coefficient: {self.message}"


class SdpNotSolved(SdpaError):
    """The solver stopped with a nonzero return code."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Solver returned with code {self.code}"


def _format_float(value: float) -> str:
    """Shortest decimal form of a number, without exponent."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _parse_index(token: str) -> int:
    digits = token[1:] if token.startswith("+") else token
    if not digits or not digits.isascii() or not digits.isdigit():
        raise SdpaParseError(f"invalid digit found in string {token!r}")
    return int(digits)


def _parse_float(token: str) -> float:
    if "_" in token:
        raise SdpaParseError(f"invalid float literal {token!r}")
    try:
        return float(token)
    except ValueError:
        raise SdpaParseError(f"invalid float literal {token!r}") from None


@dataclass(frozen=True)
class SdpaCoeff:
    """One coefficient line: matrix, block, row, column (all 1-based) and value."""

    mat: int
    block: int
    i: int
    j: int
    val: float

    @classmethod
    def parse(cls, text: str) -> "SdpaCoeff":
        """Read a coefficient from a whitespace separated line of five fields."""
        tokens = text.split()
        if len(tokens) != 5:
            raise SdpaParseError("Less than 5 elements")
        mat, block, i, j = (_parse_index(t) for t in tokens[:4])
        return cls(mat, block, i, j, _parse_float(tokens[4]))

    def indices(self) -> tuple[int, int, int, int]:
        """The position of the coefficient, used as a sort key."""
        return (self.mat, self.block, self.i, self.j)

    def __str__(self) -> str:
        return f"{self.mat} {self.block} {self.i} {self.j} {_format_float(self.val)}"