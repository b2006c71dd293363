"""Tests for settings resolution."""
import logging
from unittest.mock import PropertyMock, patch

import pytest

from resus_gps.infrastructure.config import Settings, get_secret


ENV_NAMES = ["LOG_LEVEL", "RESUS_DISPLAY_THRESHOLD", "RESUS_DEFAULT_ROUTE", "RESUS_MAX_DIFFERENTIALS"]


@pytest.fixture
def secrets():
    """Empty Streamlit secrets; tests add entries as needed."""
    with patch("resus_gps.infrastructure.config.st") as mock_st:
        mock_st.secrets = {}
        yield mock_st.secrets


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self, secrets):
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.display_threshold == 0.3
        assert settings.default_protocol_route == "/clinical-assessment"
        assert settings.max_differentials == 10


class TestOverrides:
    """Environment and secrets override the defaults."""

    def test_environment(self, secrets, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("RESUS_DISPLAY_THRESHOLD", "0.5")
        monkeypatch.setenv("RESUS_DEFAULT_ROUTE", "/triage")
        monkeypatch.setenv("RESUS_MAX_DIFFERENTIALS", "5")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.display_threshold == 0.5
        assert settings.default_protocol_route == "/triage"
        assert settings.max_differentials == 5

    def test_secrets_win_over_environment(self, secrets, monkeypatch):
        monkeypatch.setenv("RESUS_DEFAULT_ROUTE", "/from-env")
        secrets["RESUS_DEFAULT_ROUTE"] = "/from-secrets"
        assert get_secret("RESUS_DEFAULT_ROUTE") == "/from-secrets"
        assert Settings().default_protocol_route == "/from-secrets"

    def test_secrets_unavailable_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("RESUS_DEFAULT_ROUTE", "/from-env")
        with patch("resus_gps.infrastructure.config.st") as mock_st:
            type(mock_st).secrets = PropertyMock(side_effect=FileNotFoundError("no secrets"))
            assert get_secret("RESUS_DEFAULT_ROUTE") == "/from-env"


class TestInvalidValues:
    def test_unparseable_threshold(self, secrets, monkeypatch, caplog):
        monkeypatch.setenv("RESUS_DISPLAY_THRESHOLD", "high")
        with caplog.at_level(logging.WARNING):
            assert Settings().display_threshold == 0.3
        assert "RESUS_DISPLAY_THRESHOLD" in caplog.text

    def test_threshold_out_of_range(self, secrets, monkeypatch, caplog):
        monkeypatch.setenv("RESUS_DISPLAY_THRESHOLD", "1.5")
        with caplog.at_level(logging.WARNING):
            assert Settings().display_threshold == 0.3
        assert "outside" in caplog.text

    @pytest.mark.parametrize("raw", ["0", "-3", "ten"])
    def test_bad_max_differentials(self, secrets, monkeypatch, raw):
        monkeypatch.setenv("RESUS_MAX_DIFFERENTIALS", raw)
        assert Settings().max_differentials == 10
