import logging
import os
from unittest.mock import patch

import pytest

from clusterstore import settings


@pytest.fixture(autouse=True)
def _fresh():
    settings.refresh_settings_cache()
    yield
    settings.refresh_settings_cache()


@pytest.mark.parametrize(
    "raw, default, expected",
    [("", True, False), ("YES", False, True), (" t ", False, True), ("off", True, False), ("N", True, False)],
)
def test_env_flag_spellings(raw, default, expected):
    with patch.dict(os.environ, {"CLUSTERSTORE_TEST_FLAG": raw}):
        assert settings._env_flag("CLUSTERSTORE_TEST_FLAG", default=default) is expected


def test_env_flag_unset_uses_default():
    with patch.dict(os.environ, {}, clear=True):
        assert settings._env_flag("CLUSTERSTORE_TEST_FLAG", default=True) is True
        assert settings._env_flag("CLUSTERSTORE_TEST_FLAG") is False


def test_env_flag_unrecognised_value_warns_and_uses_default(caplog):
    with patch.dict(os.environ, {"CLUSTERSTORE_TEST_FLAG": "maybe"}):
        with caplog.at_level(logging.WARNING, logger="clusterstore.settings"):
            assert settings._env_flag("CLUSTERSTORE_TEST_FLAG", default=True) is True
    assert "CLUSTERSTORE_TEST_FLAG" in caplog.text


def test_partial_postgres_components_do_not_fail_settings():
    env = {k: v for k, v in os.environ.items() if not k.startswith("POSTGRES_") and k != "DATABASE_URL"}
    with patch.dict(os.environ, {**env, "POSTGRES_USER": "u"}, clear=True):
        loaded = settings.get_settings()
    assert loaded.database_url is None
    assert loaded.postgres["POSTGRES_USER"] == "u"
    assert loaded.postgres["POSTGRES_PASSWORD"] is None


def test_settings_are_cached_until_refreshed():
    with patch.dict(os.environ, {"CLUSTERSTORE_SQL_ECHO": "true"}):
        first = settings.get_settings()
        assert first.sql_echo is True
    assert settings.get_settings() is first
    settings.refresh_settings_cache()
    assert settings.get_settings() is not first


def test_log_level_upper_cased():
    with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
        assert settings.get_settings().log_level == "DEBUG"


def test_configure_logging_sets_package_level():
    previous = logging.getLogger("clusterstore").level
    try:
        assert settings.configure_logging("warning") == logging.WARNING
        assert logging.getLogger("clusterstore").level == logging.WARNING
        assert settings.configure_logging("nonsense") == logging.INFO
    finally:
        logging.getLogger("clusterstore").setLevel(previous)
