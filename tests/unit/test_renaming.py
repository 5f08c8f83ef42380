"""
Tests for indexed-name splitting and fusion.
"""

import pytest

from dimexpand.passes.renaming import Renamer, fuse, is_indexed_name, split_indexed_name, strip_binder
from dimexpand.shared.errors import MalformedIndexedName
from dimexpand.shared.nodes import IndexedName, Symbol


class TestSplit:
    @pytest.mark.parametrize("name,expected", [
        ("i_d", ("i", "d")),
        ("idx_dim", ("idx", "dim")),
        ("a_b_c", ("a_b", "c")),
        ("_d", ("", "d")),
        ("i_d2", ("i", "d2")),
    ])
    def test_indexed_spellings(self, name, expected):
        assert split_indexed_name(name) == expected

    @pytest.mark.parametrize("name", ["x", "A_1", "my__", "trailing_", "a_2b"])
    def test_not_indexed(self, name):
        assert split_indexed_name(name) is None

    def test_is_indexed_name_respects_verbatim(self):
        assert is_indexed_name(Symbol("i_d"))
        assert not is_indexed_name(Symbol("i_d", verbatim=True))
        assert not is_indexed_name(Symbol("i"))


class TestFuse:
    @pytest.mark.parametrize("k", [1, 2, 3, 10, 123])
    def test_decimal_digits(self, k):
        assert fuse("i", k) == f"i{k}"

    def test_rejects_bool_and_non_int(self):
        with pytest.raises(TypeError):
            fuse("i", True)
        with pytest.raises(TypeError):
            fuse("i", "3")


class TestRenamer:
    def test_fuses_matching_suffix(self):
        assert Renamer("d", 3).rename(Symbol("i_d")) == Symbol("i3")

    def test_other_suffix_untouched(self):
        node = Symbol("i_e")
        assert Renamer("d", 3).rename(node) is node

    def test_verbatim_untouched(self):
        node = Symbol("i_d", verbatim=True)
        assert Renamer("d", 3).rename(node) is node

    def test_explicit_indexed_name(self):
        assert Renamer("d", 2).rename(IndexedName("offset", "d")) == Symbol("offset2")
        node = IndexedName("offset", "e")
        assert Renamer("d", 2).rename(node) is node

    def test_empty_base_is_malformed(self):
        with pytest.raises(MalformedIndexedName):
            Renamer("d", 1).rename(Symbol("_d"))
        with pytest.raises(MalformedIndexedName):
            Renamer("d", 1).rename(IndexedName("", "d"))

    def test_each_occurrence_fires_independently(self):
        renamer = Renamer("d", 4)
        assert renamer.rename(Symbol("i_d")) == Symbol("i4")
        assert renamer.rename(Symbol("j_d")) == Symbol("j4")


class TestStripBinder:
    @pytest.mark.parametrize("name,binder,expected", [
        ("i_d", "d", "i"),
        ("i_dim_k", "dim_k", "i"),
        ("i_dim_k", "k", "i_dim"),
        ("i_dd", "d", None),
        ("i", "d", None),
    ])
    def test_strip(self, name, binder, expected):
        assert strip_binder(name, binder) == expected

    def test_renamer_with_separator_in_binder(self):
        assert Renamer("dim_k", 7).rename(Symbol("offset_dim_k")) == Symbol("offset7")
