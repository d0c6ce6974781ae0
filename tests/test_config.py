"""Tests for environment-driven configuration."""

import pytest

import config


class TestEnvInt:
    def test_reads_integer(self, monkeypatch):
        monkeypatch.setenv("RSVP_PORT", " 8080 ")
        assert config._env_int("RSVP_PORT", 5000) == 8080

    @pytest.mark.parametrize("raw", ["", "eighty", "80.5"])
    def test_malformed_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("RSVP_SCAN_COUNT", raw)
        assert config._env_int("RSVP_SCAN_COUNT", 6) == 6

    def test_unset_falls_back(self, monkeypatch):
        monkeypatch.delenv("RSVP_PORT", raising=False)
        assert config._env_int("RSVP_PORT", 5000) == 5000


class TestDefaultWpm:
    @pytest.mark.parametrize("raw,expected", [("600", 600), ("450", 400), ("fast", 400)])
    def test_menu_values_only(self, monkeypatch, raw, expected):
        monkeypatch.setenv("RSVP_DEFAULT_WPM", raw)
        assert config._default_wpm() == expected
