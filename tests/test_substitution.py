"""Tests for placeholder substitution and its ordering semantics."""

import pytest

from scaffolder.variables import TextSubstitutor, VariableMapping, substitute


class TestTextSubstitutor:
    """Test TextSubstitutor.substitute."""

    def setup_method(self):
        self.substitutor = TextSubstitutor()

    def test_empty_string_unchanged(self):
        mapping = VariableMapping({"%year%": "2025"})
        assert self.substitutor.substitute("", mapping) == ""

    def test_none_unchanged(self):
        mapping = VariableMapping({"%year%": "2025"})
        assert self.substitutor.substitute(None, mapping) is None

    def test_empty_mapping_returns_text(self):
        assert self.substitutor.substitute("keep %year% as is", VariableMapping()) == "keep %year% as is"

    def test_none_mapping_returns_text(self):
        assert self.substitutor.substitute("%year%", None) == "%year%"

    def test_case_insensitive(self):
        assert substitute("%YEAR%", VariableMapping({"%year%": "2025"})) == "2025"
        assert substitute("%Year%-%year%", {"%YEAR%": "2025"}) == "2025-2025"

    def test_replaces_every_occurrence(self):
        mapping = VariableMapping({"%name%": "Acme"})
        assert self.substitutor.substitute("%name%/%name%_%name%", mapping) == "Acme/Acme_Acme"

    def test_multiple_tokens(self):
        mapping = VariableMapping([("%project_name%", "Acme"), ("%year%", "2025")])
        result = self.substitutor.substitute("[%project_name%] %year%", mapping)
        assert result == "[Acme] 2025"

    def test_literal_not_regex(self):
        mapping = VariableMapping({"%a.b%": "X", "%c%": r"\1 $& \g<0>"})
        assert self.substitutor.substitute("%a.b% %aXb%", mapping) == "X %aXb%"
        assert self.substitutor.substitute("%c%", mapping) == r"\1 $& \g<0>"

    def test_bare_words_are_not_replaced(self):
        mapping = VariableMapping({"%year%": "2025"})
        assert self.substitutor.substitute("year %year", mapping) == "year %year"

    def test_unknown_tokens_left_in_place(self):
        mapping = VariableMapping({"%year%": "2025"})
        assert self.substitutor.substitute("%month%-%year%", mapping) == "%month%-2025"

    def test_idempotent_when_values_contain_no_keys(self):
        mapping = VariableMapping([("%project_name%", "Acme"), ("%year%", "2025")])
        text = "%Project_Name%/%year%/README for %project_name%"
        once = self.substitutor.substitute(text, mapping)
        twice = self.substitutor.substitute(once, mapping)
        assert once == twice == "Acme/2025/README for Acme"


class TestSequentialOrdering:
    """Entries are applied one after another in mapping order."""

    def test_value_containing_later_token_is_expanded(self):
        mapping = VariableMapping([("%title%", "%year% report"), ("%year%", "2025")])
        assert substitute("%title%", mapping) == "2025 report"

    def test_value_containing_earlier_token_is_not_expanded(self):
        mapping = VariableMapping([("%year%", "2025"), ("%title%", "%year% report")])
        assert substitute("%title%", mapping) == "%year% report"

    def test_user_value_containing_preset_token_stays_literal(self):
        # Presets come first, so a user value referencing a preset is not expanded
        mapping = VariableMapping([("%year%", "2025"), ("%project_name%", "App-%YEAR%")])
        assert substitute("%project_name%", mapping) == "App-%YEAR%"

    def test_substitution_is_not_simultaneous(self):
        # A single combined pass would yield "%b%"; sequential passes chain
        mapping = VariableMapping([("%a%", "%b%"), ("%b%", "B")])
        assert substitute("%a%", mapping) == "B"

    @pytest.mark.parametrize("text,expected", [
        ("%x%", "1"),
        ("%X%%y%", "12"),
        ("no tokens", "no tokens"),
    ])
    def test_simple_table(self, text, expected):
        mapping = VariableMapping([("%x%", "1"), ("%y%", "2")])
        assert substitute(text, mapping) == expected
