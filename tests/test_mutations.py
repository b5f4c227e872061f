"""Tests for changelist parsing and marker sizing"""

import math

import pytest

from lollipops.errors import ParseError
from lollipops.mutations import lollipop_radius, parse_changelist, parse_token


class TestParseToken:
    """Tests for parse_token"""

    def test_missense(self):
        token = parse_token("R273C")
        assert token.position == 273
        assert token.count == 1
        assert token.color_override is None
        assert token.is_synonymous is False
        assert token.raw_label == "R273C"

    def test_position_only_is_synonymous(self):
        token = parse_token("125")
        assert token.position == 125
        assert token.is_synonymous is True

    def test_same_residue_is_synonymous(self):
        assert parse_token("T125T").is_synonymous is True
        assert parse_token("T125=").is_synonymous is True
        assert parse_token("T125").is_synonymous is True

    def test_stop_gained_is_not_synonymous(self):
        token = parse_token("R213*")
        assert token.is_synonymous is False
        assert token.raw_label == "R213*"

    def test_color_and_count_suffixes(self):
        """Color is lowercased and both suffixes are removed from the label"""
        token = parse_token("R248Q#00FF00@131")
        assert token.position == 248
        assert token.count == 131
        assert token.color_override == "#00ff00"
        assert token.raw_label == "R248Q"

    def test_surrounding_whitespace_ignored(self):
        assert parse_token("  R175H ").raw_label == "R175H"

    @pytest.mark.parametrize(
        "token",
        [
            "ABC",  # no position
            "R12C34",  # two digit runs
            "R273C#zzzzzz",  # bad color
            "R273C#ff00",  # short color
            "R273C@x",  # bad count
            "R273C@0",  # count below 1
            "R273C@",  # empty count
            "R273C@\u00b2",  # superscript digit
            "R273C@\u0663",  # Arabic-Indic digit
            "R0C",  # positions are 1-based
        ],
    )
    def test_malformed_tokens_raise(self, token):
        with pytest.raises(ParseError) as exc_info:
            parse_token(token)
        assert exc_info.value.token == token
        assert token in str(exc_info.value)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_token("nothing")


class TestParseChangelist:
    """Tests for parse_changelist"""

    def test_duplicates_merge_counts(self):
        ticks = parse_changelist(["R273C", "R273C"])
        assert len(ticks) == 1
        assert ticks[0].position == 273
        assert ticks[0].count == 2
        assert ticks[0].color == "#ff0000"

    def test_counts_are_summed(self):
        ticks = parse_changelist(["R273C@3", "R273C@2"])
        assert [t.count for t in ticks] == [5]

    def test_different_colors_not_merged(self):
        ticks = parse_changelist(["R273C", "R273C#00ff00"])
        assert len(ticks) == 2
        assert {t.color for t in ticks} == {"#ff0000", "#00ff00"}

    def test_default_colors(self):
        ticks = parse_changelist(["T125", "R273C"])
        assert [t.color for t in ticks] == ["#0000ff", "#ff0000"]

    def test_custom_colors_lowercased(self):
        ticks = parse_changelist(
            ["T125", "R273C"], synonymous_color="#00FFFF", mutation_color="#FF00FF"
        )
        assert [t.color for t in ticks] == ["#00ffff", "#ff00ff"]

    def test_empty_entries_skipped(self):
        ticks = parse_changelist(["", "  ", "R175H"])
        assert len(ticks) == 1
        assert ticks[0].priority == -2

    def test_sorted_by_position_then_input_order(self):
        ticks = parse_changelist(["R273C", "R175H", "R273H"])
        assert [t.label for t in ticks] == ["R175H", "R273C", "R273H"]

    def test_merged_tick_keeps_first_index(self):
        ticks = parse_changelist(["R175H", "R273C", "R175H"])
        assert ticks[0].label == "R175H"
        assert ticks[0].priority == 0
        assert ticks[0].count == 2

    def test_position_beyond_length(self):
        with pytest.raises(ParseError, match="beyond the sequence length"):
            parse_changelist(["R273C", "X400Y"], length=393)

    def test_position_at_length_allowed(self):
        assert parse_changelist(["393"], length=393)[0].position == 393

    def test_first_error_aborts(self):
        with pytest.raises(ParseError) as exc_info:
            parse_changelist(["R273C", "bad", "also-bad"])
        assert exc_info.value.token == "bad"

    def test_empty_changelist(self):
        assert parse_changelist([]) == []


class TestLollipopRadius:
    """Tests for lollipop_radius"""

    def test_single_count_uses_base(self):
        assert lollipop_radius(1, 4.0) == 4.0

    def test_grows_logarithmically(self):
        assert lollipop_radius(4, 4.0) == pytest.approx(4.0 * math.sqrt(math.log(6)))
        assert lollipop_radius(4, 4.0) == pytest.approx(5.35, abs=0.01)

    def test_monotonic(self):
        radii = [lollipop_radius(n, 4.0) for n in range(1, 50)]
        assert radii == sorted(radii)
