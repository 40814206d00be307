"""Tests for TimerSettings validation and settings.json loading."""

import json

import pytest

from BackEnd.core.models import Mode
from BackEnd.core.paths import settings_path
from BackEnd.core.settings import TimerSettings, load_settings, save_settings


class TestTimerSettings:
    def test_defaults_match_classic_pomodoro(self):
        settings = TimerSettings()
        assert settings.duration_for(Mode.WORK) == 25 * 60
        assert settings.duration_for(Mode.BREAK) == 5 * 60
        assert settings.duration_for(Mode.LONG_BREAK) == 15 * 60
        assert settings.sessions_until_long_break == 4
        assert settings.auto_start_breaks is True
        assert settings.auto_start_next_focus is False

    @pytest.mark.parametrize("field", [
        "work_duration_seconds", "break_duration_seconds", "long_break_duration_seconds", "sessions_until_long_break",
    ])
    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_values_rejected(self, field, value):
        with pytest.raises(ValueError):
            TimerSettings(**{field: value})

    def test_from_dict_ignores_unknown_keys(self):
        settings = TimerSettings.from_dict({"work_duration_seconds": 600, "soundVolume": 0.75})
        assert settings.work_duration_seconds == 600


class TestLoadSettings:
    def test_missing_file_writes_defaults(self):
        settings = load_settings()
        assert settings == TimerSettings()
        assert json.loads(settings_path().read_text())["work_duration_seconds"] == 1500

    def test_saved_settings_are_loaded(self):
        custom = TimerSettings(work_duration_seconds=3000, auto_start_next_focus=True)
        save_settings(custom)
        assert load_settings() == custom

    @pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"break_duration_seconds": 0}'])
    def test_invalid_file_falls_back_to_defaults(self, content):
        settings_path().write_text(content)
        assert load_settings() == TimerSettings()
        # the bad file is replaced so the next launch starts clean
        assert json.loads(settings_path().read_text())["break_duration_seconds"] == 300
