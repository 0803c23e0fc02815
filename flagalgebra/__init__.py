"""Flag algebra building blocks: iterators, operator identifiers, SDPA files, certificates and drawings."""

__version__ = "0.4.0"

__all__ = [
    "basis",
    "certificate",
    "draw",
    "iterators",
    "operator",
    "sdpa",
    "sdpa_problem",
]