"""Tests for environment-driven settings."""

import pytest

from printforge.config import BASIC_LAND_TYPES, Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PRINTFORGE_RANDOM_SET_SALT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.app_name == "PrintForge"
        assert settings.random_set_salt == 0x0E1412EED3655902

    def test_salt_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRINTFORGE_RANDOM_SET_SALT", "42")

        assert Settings(_env_file=None).random_set_salt == 42

    def test_salts_are_distinct(self) -> None:
        settings = Settings(_env_file=None)
        salts = {
            settings.preference_sequence_salt,
            settings.artist_grouper_salt,
            settings.random_replacer_salt,
            settings.random_set_salt,
        }

        assert len(salts) == 4

    def test_basic_land_names(self) -> None:
        assert BASIC_LAND_TYPES == ("Plains", "Island", "Swamp", "Mountain", "Forest")
