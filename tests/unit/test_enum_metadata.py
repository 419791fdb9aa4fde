"""Tests for enumkit.core.metadata module."""

from __future__ import annotations

import logging

import pytest

from enumkit.core.errors import EnumDefinitionError
from enumkit.core.metadata import build_metadata, normalize_constant


class TestNormalizeConstant:
    """Tests for normalize_constant function."""

    def test_pair(self) -> None:
        assert normalize_constant((1, "一")) == (1, "一")
        assert normalize_constant([2, "二"]) == (2, "二")

    def test_scalar(self) -> None:
        assert normalize_constant("hh") == ("hh", "hh")
        assert normalize_constant(7) == (7, "7")
        assert normalize_constant(None) == (None, "None")

    def test_wrong_length(self) -> None:
        with pytest.raises(EnumDefinitionError) as exc_info:
            normalize_constant((1, "a", "b"), "Some", "One")
        assert "in Some.One" in str(exc_info.value)
        assert "3 items" in str(exc_info.value)

    def test_non_string_label(self) -> None:
        with pytest.raises(EnumDefinitionError):
            normalize_constant((1, 2))


class TestBuildMetadata:
    """Tests for build_metadata function."""

    def test_tables_follow_declaration_order(self) -> None:
        meta = build_metadata("Some", {"One": (1, "一"), "Two": (2, "二"), "Three": (3, "三")})
        assert meta.keys == ["One", "Two", "Three"]
        assert meta.values == [1, 2, 3]
        assert meta.labels == ["一", "二", "三"]
        assert dict(meta.key_to_value) == {"One": (1, "一"), "Two": (2, "二"), "Three": (3, "三")}
        assert dict(meta.value_to_key) == {1: ("One", "一"), 2: ("Two", "二"), 3: ("Three", "三")}

    def test_len_and_contains(self) -> None:
        meta = build_metadata("Other", {"Haha": "hh", "Bibi": "bb"})
        assert len(meta) == 2
        assert "Haha" in meta
        assert "hh" not in meta
        assert ["Haha"] not in meta

    def test_tables_are_read_only(self) -> None:
        meta = build_metadata("Other", {"Haha": "hh"})
        with pytest.raises(TypeError):
            meta.key_to_value["Bibi"] = ("bb", "bb")  # type: ignore[index]

    def test_records(self) -> None:
        meta = build_metadata("Other", {"Haha": "hh", "Bibi": "bb"})
        assert meta.records() == [
            {"key": "Haha", "value": "hh", "label": "hh"},
            {"key": "Bibi", "value": "bb", "label": "bb"},
        ]

    def test_duplicate_values_last_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="enumkit.core.metadata"):
            meta = build_metadata("Dup", {"A": (1, "a"), "B": (1, "b")})
        assert meta.value_to_key[1] == ("B", "b")
        assert meta.keys == ["A", "B"]
        assert "reuses value 1" in caplog.text

    def test_duplicate_warning_can_be_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="enumkit.core.metadata"):
            build_metadata("Dup", {"A": (1, "a"), "B": (1, "b")}, warn_on_duplicate_values=False)
        assert caplog.text == ""

    def test_shared_labels_last_wins(self) -> None:
        meta = build_metadata("Shared", {"A": (1, "same"), "B": (2, "same")})
        assert meta.label_value_map() == {"same": 2}
        assert meta.value_label_map() == {1: "same", 2: "same"}

    def test_unhashable_value_skipped_from_inverse(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="enumkit.core.metadata"):
            meta = build_metadata("Lists", {"A": ([1, 2], "pair"), "B": (3, "three")})
        assert meta.values == [[1, 2], 3]
        assert dict(meta.value_to_key) == {3: ("B", "three")}
        assert meta.value_label_map() == {3: "three"}
        assert "unhashable value" in caplog.text

    def test_invalid_key(self) -> None:
        with pytest.raises(EnumDefinitionError):
            build_metadata("Bad", {"1st": 1})
