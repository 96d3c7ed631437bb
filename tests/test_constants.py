"""Tests for simplyauto.core.constants — verify documented values and types."""
from simplyauto.core import constants


class TestAutoClickerConstants:
    def test_min_interval(self):
        assert constants.MIN_INTERVAL_MS == 1

    def test_default_interval(self):
        assert isinstance(constants.DEFAULT_INTERVAL_MS, int)
        assert constants.DEFAULT_INTERVAL_MS >= constants.MIN_INTERVAL_MS


class TestPlayerConstants:
    def test_default_speed(self):
        assert constants.DEFAULT_SPEED == 1.0

    def test_speed_choices(self):
        assert constants.DEFAULT_SPEED in constants.SPEED_CHOICES
        assert all(s > 0 for s in constants.SPEED_CHOICES)
        assert list(constants.SPEED_CHOICES) == sorted(constants.SPEED_CHOICES)


class TestCoordinatorConstants:
    def test_notify_capacity(self):
        assert isinstance(constants.NOTIFY_CAPACITY, int)
        assert constants.NOTIFY_CAPACITY >= 1

    def test_listener_join(self):
        assert constants.LISTENER_JOIN_S > 0


class TestStorageConstants:
    def test_file_extension(self):
        assert constants.FILE_EXTENSION.startswith(".")

    def test_versions_are_strings(self):
        assert isinstance(constants.RECORDING_VERSION, str)
        assert isinstance(constants.APP_VERSION, str)

    def test_error_log_name(self):
        assert constants.ERROR_LOG_NAME.endswith(".log")
