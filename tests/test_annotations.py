"""Tests for annotation parsing."""

import pytest

from plot_graph_analyzer.graph.annotations import (
    AnnotationParseError,
    get_annotation,
    get_annots,
    parse_annotations,
    remove_annotation,
    remove_annots,
    split_top_level,
)

NESTED = "plant(wheat)[source(self),cause(life[location(universe)])]"


class TestRemoveAnnots:
    """Tests for stripping annotation blocks."""

    def test_simple(self):
        """Test stripping a flat annotation block."""
        assert remove_annots("plant(wheat)[source(self)]") == "plant(wheat)"

    def test_no_annotations(self):
        """Test that plain terms are returned unchanged."""
        assert remove_annots("plant(wheat)") == "plant(wheat)"
        assert get_annots("plant(wheat)") == ""

    def test_annotated_argument(self):
        """Test that brackets inside the term are not an annotation block."""
        assert remove_annots("plant(wheat[state(great)])[source(self)]") == "plant(wheat[state(great)])"

    def test_quoted_string(self):
        """Test that quoted text is skipped."""
        assert remove_annots('say("a [b], c")[source(self)]') == 'say("a [b], c")'

    @pytest.mark.parametrize("label", [
        "plant(wheat)[source(self)]",
        NESTED,
        "+has(bread)",
        "!eat(bread)[motivation(hungry(hen);tired(hen)),crossCharacter(3)]",
    ])
    def test_round_trip(self, label):
        """Test that term and annotation block make up the label."""
        assert remove_annots(label) + get_annots(label) == label

    def test_strip_outer_brackets(self):
        """Test stripping the brackets of the raw block."""
        assert get_annots(NESTED) == "[source(self),cause(life[location(universe)])]"
        assert get_annots(NESTED, strip_outer_brackets=True) == get_annots(NESTED)[1:-1]


class TestGetAnnotation:
    """Tests for reading single annotations."""

    def test_nested_value(self):
        """Test that nested annotations stay part of the value."""
        assert get_annotation(NESTED, "cause") == "life[location(universe)]"
        assert get_annotation(NESTED, "source") == "self"

    def test_missing_key(self):
        """Test that absent keys yield an empty string."""
        assert get_annotation(NESTED, "motivation") == ""
        assert get_annotation("plant(wheat)", "cause") == ""

    def test_parse_annotations(self):
        """Test mapping all keys of a block."""
        assert parse_annotations(NESTED) == {
            "source": "self",
            "cause": "life[location(universe)]",
        }

    def test_semicolon_list(self):
        """Test that multi-target motivations are a single value."""
        label = "!eat(bread)[motivation(hungry(hen);tired(hen))]"
        assert get_annotation(label, "motivation") == "hungry(hen);tired(hen)"


class TestRemoveAnnotation:
    """Tests for dropping a single annotation."""

    def test_keeps_others(self):
        """Test that other annotations survive."""
        label = "!eat(bread)[motivation(hungry(hen)),source(self)]"
        assert remove_annotation(label, "motivation") == "!eat(bread)[source(self)]"

    def test_drops_empty_block(self):
        """Test that the block disappears with its last annotation."""
        assert remove_annotation("!eat(bread)[motivation(hungry(hen))]", "motivation") == "!eat(bread)"

    def test_absent_key(self):
        """Test that labels without the key are unchanged."""
        assert remove_annotation("plant(wheat)[source(self)]", "motivation") == "plant(wheat)[source(self)]"


class TestSplitTopLevel:
    """Tests for splitting at top-level separators."""

    def test_nested_separators_ignored(self):
        """Test that separators inside groups do not split."""
        assert split_top_level("a(b;c);d[e;f]", ";") == ["a(b;c)", "d[e;f]"]

    def test_empty(self):
        """Test that nothing yields no parts."""
        assert split_top_level("") == []


class TestMalformed:
    """Tests for labels with broken bracket structure."""

    @pytest.mark.parametrize("label", [
        "plant(wheat[source(self)",
        "plant(wheat))",
        "plant(wheat)[source(self)",
        "plant(wheat)[source(self)]trailing",
        "plant(wheat]",
    ])
    def test_raises(self, label):
        """Test that malformed labels are reported, not truncated."""
        with pytest.raises(AnnotationParseError):
            remove_annots(label)
