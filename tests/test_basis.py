import gzip
from pathlib import Path

import pytest

from flagalgebra.basis import Basis, Savable, Type


class _Counter(Savable[list[int]]):
    def __init__(self, name: str, value: list[int]) -> None:
        self.name = name
        self.value = value
        self.calls = 0

    def filename(self) -> str:
        return self.name

    def create(self) -> list[int]:
        self.calls += 1
        return list(self.value)


def test_empty_type():
    assert Type.empty() == Type(0, 0)
    assert Type.empty().is_empty()
    assert not Type(1, 0).is_empty()


def test_type_strings():
    assert str(Type.empty()) == "Empty type"
    assert str(Type(3, 1)) == "Type of size 3 (id 1)"
    assert Type(2, 1).suffix() == "_type_2_id_1"
    assert Type.empty().suffix() == ""
    assert Type(2, 1).print_concise() == "2,id1"
    assert Type.empty().print_concise() == ""


def test_basis_strings():
    assert str(Basis(3)) == "Flags of size 3 without type"
    assert str(Basis(4, Type(2, 1))) == "Flags of size 4 with type Type of size 2 (id 1))"
    assert Basis(3).print_concise() == "3"
    assert Basis(4, Type(2, 1)).print_concise() == "4,2,id1"


def test_basis_filename():
    assert Basis(3).filename() == "flags_3"
    assert Basis(4, Type(2, 1)).filename() == "flags_4_type_2_id_1"


def test_basis_with_and_without_type():
    t = Type(1, 0)
    b = Basis(3).with_type(t)
    assert b.t == t
    assert b.without_type() == Basis(3)
    assert b.with_size(5) == Basis(5, t)


def test_type_too_large():
    with pytest.raises(ValueError):
        Basis(2, Type(3, 0))
    with pytest.raises(ValueError):
        Basis(3, Type(3, 0)).with_size(2)


def test_mul_and_div_are_inverse():
    t = Type(2, 1)
    a = Basis(5, t)
    b = Basis(7, t)
    product = a * b
    assert product.t == t
    assert product / b == a
    assert product / a == b


def test_mul_without_type():
    assert Basis(2) * Basis(3) == Basis(5)


def test_mul_needs_same_type():
    with pytest.raises(ValueError):
        Basis(3, Type(1, 0)) * Basis(3)


def test_div_needs_larger_size():
    with pytest.raises(ValueError):
        Basis(2) / Basis(3)


def test_file_path():
    item = _Counter("flags_3", [1])
    assert Savable.file_path(item, "graph") == Path("data") / "graph" / "flags_3.dat"


def test_get_creates_then_loads(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    item = _Counter("split_2_3", [4, 5, 6])
    assert Savable.get(item, "graph") == [4, 5, 6]
    assert item.calls == 1
    assert (tmp_path / "data" / "graph" / "split_2_3.dat").exists()
    assert Savable.get(item, "graph") == [4, 5, 6]
    assert item.calls == 1


def test_get_reads_saved_value(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert Savable.get(_Counter("x", [7, 8]), "graph") == [7, 8]
    other = _Counter("x", [0])
    assert Savable.get(other, "graph") == [7, 8]
    assert other.calls == 0


def test_corrupted_file_is_recreated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    item = _Counter("broken", [1, 2])
    path = Savable.file_path(item, "graph")
    path.parent.mkdir(parents=True)
    path.write_bytes(b"not a gzip file")
    assert Savable.get(item, "graph") == [1, 2]
    assert item.calls == 1
    assert Savable.load(item, path) == [1, 2]


def test_create_and_save_writes_gzip(tmp_path):
    item = _Counter("direct", [3])
    path = tmp_path / "direct.dat"
    assert Savable.create_and_save(item, path) == [3]
    with gzip.open(path, "rb") as f:
        assert f.read(1)
    assert Savable.load(item, path) == [3]