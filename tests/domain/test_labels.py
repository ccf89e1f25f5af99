"""Tests for explicit and heading-derived label extraction."""

from __future__ import annotations

import pytest

from pkmindex.domain.errors import PatternError
from pkmindex.domain.labels import LabelParser, extract_labels, slugify_heading
from pkmindex.domain.models import Label


class TestExplicitLabels:
    def test_single(self) -> None:
        assert extract_labels("<intro>") == [Label(name="intro", line=1, column=1)]

    def test_column_after_indent(self) -> None:
        (label,) = extract_labels("    <label>")
        assert label.column == 5
        assert label.is_implicit is False

    def test_colons_and_dots(self) -> None:
        labels = extract_labels("<label:with:colons> and <label-with-dots...>")
        assert [lbl.name for lbl in labels] == ["label:with:colons", "label-with-dots..."]
        assert [lbl.column for lbl in labels] == [1, 25]

    def test_numbers_and_underscores(self) -> None:
        labels = extract_labels("<label-with-numbers123>\n<label_with_underscores>")
        assert [(lbl.name, lbl.line) for lbl in labels] == [
            ("label-with-numbers123", 1),
            ("label_with_underscores", 2),
        ]

    @pytest.mark.parametrize("content", ["<>", "<has space>", "<é>", "a < b > c"])
    def test_rejects_invalid_names(self, content: str) -> None:
        assert extract_labels(content) == []

    def test_duplicates_preserved(self) -> None:
        assert len(extract_labels("<dup> <dup>\n<dup>")) == 3


class TestHeadingLabels:
    def test_devanagari_heading_keeps_vowel_signs(self) -> None:
        labels = LabelParser().parse("= हिंदी नोट")
        assert [lbl.name for lbl in labels] == ["हिंदी-नोट"]

    def test_levels(self) -> None:
        labels = extract_labels("= Introduction\n\n== Details")
        assert labels == [
            Label(name="introduction", line=1, column=1, is_implicit=True),
            Label(name="details", line=3, column=1, is_implicit=True),
        ]

    def test_slug_collapses_punctuation(self) -> None:
        (label,) = extract_labels("== API & Usage: Part 2!")
        assert label.name == "api-usage-part-2"

    def test_whitespace_only_heading_yields_nothing(self) -> None:
        assert extract_labels("=   ") == []

    def test_punctuation_only_heading_yields_nothing(self) -> None:
        assert extract_labels("= !!!") == []

    def test_requires_whitespace_after_marker(self) -> None:
        assert extract_labels("=Heading") == []

    def test_indented_marker_is_not_heading(self) -> None:
        assert extract_labels("  = Heading") == []

    def test_explicit_before_implicit_on_same_line(self) -> None:
        labels = extract_labels("= Setup <setup-anchor>")
        assert [(lbl.name, lbl.is_implicit) for lbl in labels] == [
            ("setup-anchor", False),
            ("setup-setup-anchor", True),
        ]


class TestSlugifyHeading:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello World", "hello-world"),
            ("  --Leading and trailing--  ", "leading-and-trailing"),
            ("snake_case stays", "snake_case-stays"),
            ("Ünïcode Wörds", "ünïcode-wörds"),
            ("???", ""),
            ("हिंदी नोट", "हिंदी-नोट"),
            ("Cafe\u0301 Menu", "cafe-menu"),
            ("Part ½ and Ⅻ", "part-½-and-ⅻ"),
        ],
    )
    def test_slugs(self, text: str, expected: str) -> None:
        assert slugify_heading(text) == expected


class TestConstruction:
    def test_bad_pattern_raises_pattern_error(self) -> None:
        with pytest.raises(PatternError):
            LabelParser(heading_pattern="^(=+")
