"""Tests for inodekit.lookup and ParameterRecordSequence ordering."""

from __future__ import annotations

import pytest

from inodekit.lookup import NOT_FOUND, binary_search, linear_search
from inodekit.params import ParameterRecord, ParameterRecordSequence


def _sequence(*names: str) -> ParameterRecordSequence:
    return ParameterRecordSequence(ParameterRecord(name, f"v-{name}") for name in names)


class TestLinearSearch:
    def test_empty(self) -> None:
        assert linear_search(ParameterRecordSequence(), "a") == NOT_FOUND

    def test_unsorted_input(self) -> None:
        records = _sequence("c", "a", "b")
        assert linear_search(records, "a") == 1
        assert linear_search(records, "z") == NOT_FOUND

    def test_returns_first_match(self) -> None:
        records = ParameterRecordSequence(
            [ParameterRecord("k", "1"), ParameterRecord("k", "2")]
        )
        assert linear_search(records, "k") == 0

    def test_exact_match_only(self) -> None:
        records = _sequence("port", "ports")
        assert linear_search(records, "por") == NOT_FOUND
        assert linear_search(records, "ports") == 1


class TestBinarySearch:
    def test_empty(self) -> None:
        assert binary_search(ParameterRecordSequence(), "a") == NOT_FOUND

    @pytest.mark.parametrize("size", [1, 2, 3, 8, 33])
    def test_finds_every_name(self, size: int) -> None:
        names = [f"name{i:03d}" for i in range(size)]
        records = _sequence(*names)
        for index, name in enumerate(names):
            assert binary_search(records, name) == index

    @pytest.mark.parametrize("needle", ["", "a", "name", "name5", "zzz"])
    def test_missing_names(self, needle: str) -> None:
        records = _sequence("b", "name0", "name1", "name9", "y")
        assert binary_search(records, needle) == NOT_FOUND

    def test_agrees_with_linear_on_sorted_input(self) -> None:
        records = _sequence("delta", "alpha", "charlie", "bravo")
        records.sort_by_name()
        for name in ("alpha", "bravo", "charlie", "delta", "echo"):
            assert binary_search(records, name) == linear_search(records, name)

    def test_works_on_plain_lists(self) -> None:
        records = [ParameterRecord("a", "1"), ParameterRecord("b", "2")]
        assert binary_search(records, "b") == 1


class TestSequenceOrdering:
    def test_push_back_tracks_sortedness(self) -> None:
        records = ParameterRecordSequence()
        records.push_back(ParameterRecord("a", "1"))
        records.push_back(ParameterRecord("b", "2"))
        assert records.is_sorted
        records.push_back(ParameterRecord("A", "3"))
        assert not records.is_sorted
        records.sort_by_name()
        assert records.is_sorted
        assert records.names == ["A", "a", "b"]

    def test_resort_is_noop(self) -> None:
        records = _sequence("c", "a", "b", "a")
        records.sort_by_name()
        first = list(records)
        records.sort_by_name()
        assert list(records) == first

    def test_count_and_indexing(self) -> None:
        records = _sequence("x", "y")
        assert records.count == len(records) == 2
        assert records[1] == ParameterRecord("y", "v-y")

    def test_find_sorts_first(self) -> None:
        records = _sequence("m", "c", "x")
        assert not records.is_sorted
        found = records.find("c")
        assert found == ParameterRecord("c", "v-c")
        assert records.is_sorted
        assert records.find("nope") is None


class TestSurrogateNames:
    def test_lone_surrogate_needle_not_found(self) -> None:
        records = _sequence("a", "b")
        assert binary_search(records, "\ud800") == NOT_FOUND
        assert linear_search(records, "\ud800") == NOT_FOUND

    def test_lone_surrogate_name_sorted_and_found(self) -> None:
        records = _sequence("\ud800", "a", "\udcff")
        records.sort_by_name()
        # surrogateescape maps \udcff back to the single byte 0xff
        assert records.names == ["a", "\ud800", "\udcff"]
        for index, name in enumerate(records.names):
            assert binary_search(records, name) == index

    def test_names_sharing_a_key_are_not_confused(self) -> None:
        # both encode to b"\xed\xa0\x80"
        records = _sequence("\udced\udca0\udc80")
        assert binary_search(records, "\ud800") == NOT_FOUND
