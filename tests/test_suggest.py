"""Tests for the next-token suggestion engine."""

from __future__ import annotations

import pytest

from aoshelper.core.normalizer import build_index
from aoshelper.core.suggest import (
    Acceptance,
    Span,
    apply_acceptance,
    describe,
    split_line,
    suggest,
)


@pytest.fixture
def scenario_root():
    return build_index({"show ip interface": "D1", "show ip isis status": "D2"})


def _at_end(root, line):
    return suggest(root, line, len(line))


class TestScenarios:
    def test_next_level_after_space(self, scenario_root):
        result = _at_end(scenario_root, "show ip ")
        assert result.triggered
        assert result.tokens == ["interface", "isis"]

    def test_partial_token_filters(self, scenario_root):
        result = _at_end(scenario_root, "show ip is")
        assert result.tokens == ["isis"]
        assert result.query == "is"
        assert result.span == Span(8, 10)

    def test_whitespace_line_not_triggered(self, scenario_root):
        result = _at_end(scenario_root, "    ")
        assert not result.triggered
        assert result.tokens == []

    def test_empty_line_not_triggered(self, scenario_root):
        assert not suggest(scenario_root, "", 0).triggered

    def test_untriggered_results_are_independent(self, scenario_root):
        suggest(scenario_root, "  ", 2).tokens.append("stale")
        assert suggest(scenario_root, " ", 1).tokens == []

    def test_dead_end_is_empty_not_error(self, scenario_root):
        result = _at_end(scenario_root, "show bogus ")
        assert result.triggered
        assert result.tokens == []

    def test_dead_end_with_partial(self, scenario_root):
        result = _at_end(scenario_root, "show bogus i")
        assert result.triggered
        assert result.tokens == []

    def test_accept_replaces_span_with_token_and_space(self):
        assert apply_acceptance("isis", (8, 10)) == Acceptance("isis ", 13)


class TestSuggest:
    def test_first_word(self, root):
        assert _at_end(root, "sh").tokens == ["show"]

    def test_leading_whitespace_ignored(self, root):
        result = _at_end(root, "   sh")
        assert result.tokens == ["show"]
        assert result.span == Span(3, 5)

    def test_case_insensitive(self, root):
        assert _at_end(root, "ShOw Ip ").tokens == _at_end(root, "show ip ").tokens
        assert _at_end(root, "SHOW IP IS").tokens == ["isis"]

    def test_multiple_spaces_between_words(self, root):
        assert _at_end(root, "show    ip\t ").tokens == ["interface", "isis"]

    def test_cursor_in_middle_uses_text_before_cursor(self, root):
        line = "show ip interface"
        result = suggest(root, line, len("show i"))
        assert result.tokens == ["ip"]
        assert result.span == Span(5, 6)

    def test_complete_command_still_lists_children(self, root):
        assert _at_end(root, "show ip ").tokens == ["interface", "isis"]

    def test_leaf_has_no_suggestions(self, root):
        assert _at_end(root, "show ip interface ").tokens == []

    def test_exact_token_is_suggested(self, root):
        assert _at_end(root, "show vlan").tokens == ["vlan"]

    def test_sorted_and_unique(self, root):
        tokens = _at_end(root, "show ").tokens
        assert tokens == sorted(set(tokens))

    def test_empty_query_span_starts_at_cursor(self, root):
        result = _at_end(root, "show ")
        assert result.query == ""
        assert result.span == Span(5, 5)

    def test_cursor_out_of_range(self, root):
        with pytest.raises(ValueError):
            suggest(root, "show", 5)
        with pytest.raises(ValueError):
            suggest(root, "show", -1)

    def test_missing_root_triggers_without_tokens(self):
        result = suggest(None, "show ", 5)
        assert result.triggered
        assert result.tokens == []


class TestDescribe:
    def test_pairs_with_descriptions(self, root):
        pairs = describe(root, "show ip ", 8)
        assert pairs == [("interface", "D1"), ("isis", "")]

    def test_dead_end(self, root):
        assert describe(root, "bogus ", 6) == []

    def test_not_triggered(self, root):
        assert describe(root, "  ", 2) == []


class TestSplitLine:
    def test_split(self):
        assert split_line("show ip is", 10) == (["show", "ip"], "is", 8)

    def test_trailing_space(self):
        assert split_line("show ip ", 8) == (["show", "ip"], "", 8)


class TestAcceptance:
    def test_empty_span(self):
        assert apply_acceptance("vlan", (5, 5)) == Acceptance("vlan ", 10)

    def test_fields(self):
        accepted = apply_acceptance("ip", Span(5, 6))
        assert accepted.replacement_text == "ip "
        assert accepted.new_cursor_offset == 8
