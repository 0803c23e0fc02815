import pytest

from flagalgebra.iterators import (
    choose,
    functions,
    injections,
    permutations,
    split,
    subsets,
)


@pytest.mark.parametrize("n, expected", [(0, 1), (1, 2), (4, 16)])
def test_subsets_count(n, expected):
    assert sum(1 for _ in subsets(n)) == expected


def test_subsets_are_distinct_and_increasing():
    found = list(subsets(5))
    assert len(set(found)) == 32
    assert all(list(s) == sorted(s) and all(v < 5 for v in s) for s in found)
    assert found[0] == ()


@pytest.mark.parametrize(
    "n, k, fixed, expected",
    [
        (10, 3, 0, 120),
        (3, 1, 0, 3),
        (0, 0, 0, 1),
        (2, 2, 0, 1),
        (11, 4, 1, 120),
        (5, 5, 4, 1),
        (4, 4, 4, 1),
        (6, 2, 2, 1),
        (0, 0, 0, 1),
    ],
)
def test_choose_count(n, k, fixed, expected):
    assert sum(1 for _ in choose(n, k, fixed)) == expected


def test_choose_contains_fixed_part():
    found = list(choose(7, 4, 2))
    assert all(c[:2] == (0, 1) and len(c) == 4 for c in found)
    assert found == sorted(found)
    assert len(set(found)) == len(found)


@pytest.mark.parametrize("args", [(3, 4, 0), (5, 2, 3)])
def test_choose_rejects_bad_sizes(args):
    with pytest.raises(ValueError):
        choose(*args)


def test_split_count():
    assert sum(1 for _ in split(12, 5, 2)) == 120


def test_split_parts_cover_range():
    for first, second in split(8, 4, 2):
        assert first[:2] == (0, 1)
        assert second[:2] == (0, 1)
        assert len(second) == 8 - 4 + 2
        assert sorted(set(first) | set(second)) == list(range(8))
        assert set(first) & set(second) == {0, 1}


@pytest.mark.parametrize(
    "n, k, fixed, expected",
    [(5, 3, 0, 60), (42, 0, 0, 1), (8, 5, 3, 20), (6, 2, 2, 1), (0, 0, 0, 1)],
)
def test_injection_count(n, k, fixed, expected):
    assert sum(1 for _ in injections(n, k, fixed)) == expected


def test_permutation_count():
    assert sum(1 for _ in permutations(6)) == 720


def test_permutations_are_distinct_permutations():
    found = list(permutations(4))
    assert len(set(found)) == 24
    assert all(sorted(p) == [0, 1, 2, 3] for p in found)


def test_injections_respect_fixed_part():
    for inj in injections(7, 4, 2):
        assert inj[:2] == (0, 1)
        assert len(set(inj)) == 4


def test_injection_rejects_bad_sizes():
    with pytest.raises(ValueError):
        injections(2, 3)
    with pytest.raises(ValueError):
        injections(5, 2, 3)


def test_functions_count_and_range():
    found = list(functions(3, 4))
    assert len(found) == 64
    assert len(set(found)) == 64
    assert all(all(0 <= v < 4 for v in f) for f in found)


def test_functions_from_empty_domain():
    assert list(functions(0, 3)) == [()]