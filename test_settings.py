"""Tests for JSON settings persistence."""

import json
from datetime import date

import pytest

from settings import (
    constraints_from_settings,
    default_date_from_settings,
    load_settings,
    save_settings,
)


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("DATE_RANGE_PICKER_SETTINGS", str(path))
    return path


class TestLoadSettings:

    def test_defaults_when_missing(self, settings_file):
        settings = load_settings()
        assert settings["limit_months"] is False
        assert settings["allow_past"] is False
        assert settings["number_of_allowed_months"] == 0
        assert settings["default_date"] is None
        assert settings["output_style"] == "dotted"

    def test_corrupt_file_falls_back(self, settings_file):
        settings_file.write_text("{not json", encoding="utf-8")
        assert load_settings()["output_style"] == "dotted"

    def test_non_object_falls_back(self, settings_file):
        settings_file.write_text("[1, 2]", encoding="utf-8")
        assert load_settings()["limit_months"] is False

    def test_invalid_values_dropped(self, settings_file):
        settings_file.write_text(json.dumps({
            "limit_months": "yes",
            "number_of_allowed_months": -2,
            "default_date": "31.02.2024",
            "output_style": "fancy",
        }), encoding="utf-8")
        settings = load_settings()
        assert settings["limit_months"] is False
        assert settings["number_of_allowed_months"] == 0
        assert settings["default_date"] is None
        assert settings["output_style"] == "dotted"

    def test_bool_is_not_a_month_count(self, settings_file):
        settings_file.write_text(json.dumps({"number_of_allowed_months": True}),
                                 encoding="utf-8")
        assert load_settings()["number_of_allowed_months"] == 0

    def test_round_trip(self, settings_file):
        settings = load_settings()
        settings.update(limit_months=True, number_of_allowed_months=3,
                        default_date="2024-06-01", output_style="iso")
        save_settings(settings)
        assert load_settings() == settings


class TestDerivedValues:

    def test_constraints(self, settings_file):
        settings = load_settings()
        settings.update(limit_months=True, allow_past=True, number_of_allowed_months=2)
        c = constraints_from_settings(settings, date(2024, 6, 15))
        assert c.today == date(2024, 6, 15)
        assert c.limit_months and c.allow_past
        assert c.number_of_allowed_months == 2

    def test_default_date(self, settings_file):
        settings = load_settings()
        assert default_date_from_settings(settings) is None
        settings["default_date"] = "2024-02-29"
        assert default_date_from_settings(settings) == date(2024, 2, 29)
