"""Unit tests for settings-derived behaviour."""

import logging

from bazaar.config import ChatSettings, Settings
from bazaar.util.logging import log_level_for


class TestRealtimeToggle:
    """Tests for when the chat WebSocket channel is mounted."""

    def test_enabled_outside_production(self):
        assert Settings(environment="development").realtime_enabled

    def test_disabled_in_production_by_default(self):
        assert not Settings(environment="production").realtime_enabled

    def test_explicit_setting_wins(self):
        settings = Settings(
            environment="production", chat=ChatSettings(realtime_enabled=True)
        )

        assert settings.realtime_enabled


class TestLogLevel:
    """Tests for the stdlib log level."""

    def test_debug_flag_wins(self):
        assert log_level_for(Settings(environment="production", debug=True)) == (
            logging.DEBUG
        )

    def test_production_logs_warnings(self):
        assert log_level_for(Settings(environment="production")) == logging.WARNING

    def test_other_environments_log_info(self):
        assert log_level_for(Settings(environment="staging")) == logging.INFO
