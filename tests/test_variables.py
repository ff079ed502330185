"""Tests for VariableMapping, the preset catalog and VariableResolver."""

import re
from datetime import datetime
from unittest.mock import patch

import pytest

from scaffolder.exceptions import InvalidInputError
from scaffolder.variables import PRESET_VARIABLES, VariableMapping, VariableResolver


FIXED_NOW = datetime(2025, 10, 30, 17, 5, 9)


def fixed_clock():
    return FIXED_NOW


class TestVariableMapping:
    """Test the case-insensitive mapping."""

    def test_lookup_is_case_insensitive(self):
        mapping = VariableMapping({"%Project_Name%": "Acme"})
        assert mapping["%project_name%"] == "Acme"
        assert mapping["%PROJECT_NAME%"] == "Acme"
        assert "%project_NAME%" in mapping
        assert "project_name" not in mapping

    def test_iteration_keeps_insertion_order_and_original_case(self):
        mapping = VariableMapping([("%b%", "2"), ("%A%", "1"), ("%c%", "3")])
        assert list(mapping) == ["%b%", "%A%", "%c%"]

    def test_last_write_wins_but_keeps_position(self):
        mapping = VariableMapping([("%year%", "2025"), ("%x%", "x"), ("%YEAR%", "1999")])
        assert list(mapping.items()) == [("%year%", "1999"), ("%x%", "x")]
        assert len(mapping) == 2

    @pytest.mark.parametrize("key", [
        "", "%%", "year", "%year", "year%", "%a%b%",
        "%a%\n", "\n%a%", "%a b%", "%a\tb%", "%a\x00%",
    ])
    def test_invalid_keys_rejected(self, key):
        with pytest.raises(InvalidInputError):
            VariableMapping({key: "value"})

    def test_token_wraps_bare_key(self):
        assert VariableMapping.token("project_name") == "%project_name%"
        assert VariableMapping.token("%project_name%") == "%project_name%"

    def test_is_read_only(self):
        mapping = VariableMapping({"%a%": "1"})
        with pytest.raises(TypeError):
            mapping["%b%"] = "2"

    def test_equality_with_dict(self):
        assert VariableMapping({"%a%": "1"}) == {"%a%": "1"}


class TestPresetCatalog:
    """Test the built-in placeholder catalog."""

    def test_catalog_tokens(self):
        tokens = [preset.token for preset in PRESET_VARIABLES]
        assert tokens == [
            "%year%", "%yy%", "%month%", "%month_name%", "%month_name_short%",
            "%day%", "%day_of_week%", "%day_of_week_short%", "%day_of_year%",
            "%date_iso%", "%date_cn%", "%date_compact%",
            "%hour_24%", "%hour_12%", "%minute%", "%second%", "%am_pm%",
            "%datetime_iso%", "%datetime_compact%",
            "%guid%", "%username%",
        ]

    def test_catalog_is_immutable(self):
        assert isinstance(PRESET_VARIABLES, tuple)

    def test_date_time_values(self):
        mapping = VariableResolver(clock=fixed_clock).preset_mapping()

        assert mapping["%year%"] == "2025"
        assert mapping["%yy%"] == "25"
        assert mapping["%month%"] == "10"
        assert mapping["%day%"] == "30"
        assert mapping["%day_of_year%"] == "303"
        assert mapping["%date_iso%"] == "2025-10-30"
        assert mapping["%date_cn%"] == "2025年10月30日"
        assert mapping["%date_compact%"] == "20251030"
        assert mapping["%hour_24%"] == "17"
        assert mapping["%hour_12%"] == "05"
        assert mapping["%minute%"] == "05"
        assert mapping["%second%"] == "09"
        assert mapping["%datetime_iso%"] == "2025-10-30T17:05:09"
        assert mapping["%datetime_compact%"] == "20251030170509"

    def test_name_values_match_strftime(self):
        mapping = VariableResolver(clock=fixed_clock).preset_mapping()

        assert mapping["%month_name%"] == FIXED_NOW.strftime("%B")
        assert mapping["%month_name_short%"] == FIXED_NOW.strftime("%b")
        assert mapping["%day_of_week%"] == FIXED_NOW.strftime("%A")
        assert mapping["%day_of_week_short%"] == FIXED_NOW.strftime("%a")
        assert mapping["%am_pm%"] == FIXED_NOW.strftime("%p")

    def test_guid_format(self):
        mapping = VariableResolver().preset_mapping()
        assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}", mapping["%guid%"])

    def test_username_from_environment(self):
        with patch("scaffolder.variables.presets.getpass.getuser", return_value="alice"):
            mapping = VariableResolver().preset_mapping()
        assert mapping["%username%"] == "alice"

    def test_username_missing_yields_empty(self):
        with patch("scaffolder.variables.presets.getpass.getuser", side_effect=OSError("no user")):
            mapping = VariableResolver().preset_mapping()
        assert mapping["%username%"] == ""


class TestVariableResolver:
    """Test preset evaluation and merging."""

    def test_preset_keys(self):
        keys = VariableResolver().preset_keys()
        assert "%year%" in keys
        assert "%guid%" in keys
        assert len(keys) == len(PRESET_VARIABLES)

    def test_clock_read_once_per_mapping(self):
        calls = []

        def clock():
            calls.append(1)
            return FIXED_NOW

        VariableResolver(clock=clock).preset_mapping()
        assert len(calls) == 1

    def test_preset_mapping_not_cached(self):
        instants = iter([datetime(2024, 1, 1), datetime(2025, 6, 1)])
        resolver = VariableResolver(clock=lambda: next(instants))

        first = resolver.preset_mapping()
        second = resolver.preset_mapping()

        assert first["%year%"] == "2024"
        assert second["%year%"] == "2025"

    def test_guid_differs_between_builds(self):
        resolver = VariableResolver()
        assert resolver.preset_mapping()["%guid%"] != resolver.preset_mapping()["%guid%"]

    def test_merged_mapping_order_presets_then_user(self):
        resolver = VariableResolver(clock=fixed_clock)
        preset = resolver.preset_mapping()

        merged = resolver.merged_mapping(preset, [("project_name", "Acme"), ("%order_no%", "42")])

        keys = list(merged)
        assert keys[:len(PRESET_VARIABLES)] == [p.token for p in PRESET_VARIABLES]
        assert keys[len(PRESET_VARIABLES):] == ["%project_name%", "%order_no%"]
        assert merged["%PROJECT_NAME%"] == "Acme"

    def test_merged_mapping_user_wins_on_collision(self):
        resolver = VariableResolver(clock=fixed_clock)
        merged = resolver.merged_mapping(resolver.preset_mapping(), {"%YEAR%": "1999"})

        assert merged["%year%"] == "1999"
        assert list(merged)[0] == "%year%"
        assert len(merged) == len(PRESET_VARIABLES)

    def test_merged_mapping_does_not_mutate_preset(self):
        resolver = VariableResolver(clock=fixed_clock)
        preset = resolver.preset_mapping()
        resolver.merged_mapping(preset, {"year": "1999"})
        assert preset["%year%"] == "2025"

    def test_merged_mapping_rejects_empty_user_key(self):
        resolver = VariableResolver(clock=fixed_clock)
        with pytest.raises(InvalidInputError):
            resolver.merged_mapping(resolver.preset_mapping(), {"": "x"})
