"""Generators over small combinatorial objects: subsets, functions, injections.

Every generator yields tuples of integers. The enumeration order is fixed
and the same on every run.
"""

from collections.abc import Iterator

__all__ = ["subsets", "functions", "choose", "split", "injections", "permutations"]


def subsets(n: int) -> Iterator[tuple[int, ...]]:
    """Yield every subset of ``range(n)`` as an increasing tuple."""
    data: list[int] = []
    yield ()
    while True:
        k = n
        while True:
            if k == 0:
                return
            k -= 1
            if not data or data[-1] != k:
                break
            data.pop()
        data.append(k)
        yield tuple(data)


def functions(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Yield every function from ``range(n)`` to ``range(k)`` as a tuple of images."""
    if n > 0 and k == 0:
        return
    data = [0] * n
    yield tuple(data)
    while True:
        i = 0
        while i < n and data[i] == k - 1:
            i += 1
        if i == n:
            return
        data[i] += 1
        data[:i] = [0] * i
        yield tuple(data)


def choose(n: int, k: int, fixed: int = 0) -> Iterator[tuple[int, ...]]:
    """Yield the ``k``-subsets of ``range(n)`` containing ``range(fixed)``.

    Subsets are increasing tuples, listed in lexicographic order.
    """
    if not fixed <= k <= n:
        raise ValueError(f"choose needs fixed <= k <= n, got n={n}, k={k}, fixed={fixed}")
    return _choose(n, k, fixed)


def _choose(n: int, k: int, fixed: int) -> Iterator[tuple[int, ...]]:
    data = list(range(k))
    yield tuple(data)
    while True:
        i = k
        while True:
            if i <= fixed:
                return
            i -= 1
            if data[i] != n - k + i:
                break
        data[i] += 1
        data[i + 1 :] = range(data[i] + 1, data[i] + k - i)
        yield tuple(data)


def split(
    n: int, k: int, fixed: int = 0
) -> Iterator[tuple[tuple[int, ...], tuple[int, ...]]]:
    """Yield the splits of ``range(n)`` into two parts that both contain ``range(fixed)``.

    The first part has ``k`` elements, the second ``n - k + fixed``.
    """
    return _split(choose(n, k, fixed), n, fixed)


def _split(
    chosen: Iterator[tuple[int, ...]], n: int, fixed: int
) -> Iterator[tuple[tuple[int, ...], tuple[int, ...]]]:
    shared = tuple(range(fixed))
    for part in chosen:
        taken = set(part)
        rest = tuple(v for v in range(fixed, n) if v not in taken)
        yield part, shared + rest


def injections(n: int, k: int, fixed: int = 0) -> Iterator[tuple[int, ...]]:
    """Yield the injections from ``range(k)`` to ``range(n)`` that fix ``range(fixed)``."""
    if k > n:
        raise ValueError(f"no injection from {k} elements into {n}")
    if fixed > k:
        raise ValueError(f"cannot fix {fixed} elements of a domain of size {k}")
    return _injections(n, k, fixed)


def _injections(n: int, k: int, fixed: int) -> Iterator[tuple[int, ...]]:
    data = list(range(n))
    index = list(range(k))

    def set_index(i: int, value: int) -> None:
        old = index[i]
        index[i] = value
        data[i], data[old] = data[old], data[i]
        data[i], data[value] = data[value], data[i]

    yield tuple(data[:k])
    while True:
        if k == fixed:
            return
        i = k - 1
        while index[i] == n - 1:
            if i == fixed:
                return
            i -= 1
        set_index(i, index[i] + 1)
        for j in range(i + 1, k):
            set_index(j, j)
        yield tuple(data[:k])


def permutations(n: int) -> Iterator[tuple[int, ...]]:
    """Yield every permutation of ``range(n)``."""
    return injections(n, n)