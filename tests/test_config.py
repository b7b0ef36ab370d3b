import errno
import json
import logging
from unittest import mock

import pytest

from servercode.config import ConfigManager, ConfigurationError, PluginConfig
from servercode.reader import RetryPolicy


def write_config(tmp_path, data):
    path = tmp_path / "servercode.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return str(path)


def test_missing_file_gives_defaults(tmp_path):
    manager = ConfigManager({"CONFIG_PATH": str(tmp_path / "absent.json")})
    config = manager.load()

    assert config == PluginConfig()
    assert config.log_path == ""
    assert config.enable_log is True
    assert config.transient_errnos == (errno.ESTALE,)
    assert config.retry_policy() == RetryPolicy(3, 500)


def test_loads_json_file(tmp_path):
    path = write_config(
        tmp_path,
        {
            "logPath": "/appdata/AbioticFactor.log",
            "enableLog": False,
            "maxAttempts": 5,
            "baseDelayMs": 250,
            "transientErrnos": [-116, 5],
            "lokiUrl": "http://loki:3100/loki/api/v1/push",
        },
    )
    config = ConfigManager({"CONFIG_PATH": path}).load()

    assert config.log_path == "/appdata/AbioticFactor.log"
    assert config.enable_log is False
    assert config.retry_policy() == RetryPolicy(5, 250)
    assert config.transient_errnos == (116, 5)
    assert config.loki_url == "http://loki:3100/loki/api/v1/push"


def test_environment_overrides_file(tmp_path):
    path = write_config(tmp_path, {"logPath": "/from/file.log", "enableLog": True})
    environ = {
        "CONFIG_PATH": path,
        "LOG_PATH": "/from/env.log",
        "ENABLE_LOG": "off",
        "TRANSIENT_ERRNOS": "116, 112",
        "LOG_LEVEL": "debug",
    }
    config = ConfigManager(environ).load()

    assert config.log_path == "/from/env.log"
    assert config.enable_log is False
    assert config.transient_errnos == (116, 112)
    assert config.log_level == "debug"


def test_empty_loki_url_means_disabled(tmp_path):
    environ = {"CONFIG_PATH": str(tmp_path / "absent.json"), "LOKI_URL": ""}
    assert ConfigManager(environ).load().loki_url is None


def test_invalid_json_raises(tmp_path):
    path = write_config(tmp_path, "{not json")
    with pytest.raises(ConfigurationError):
        ConfigManager({"CONFIG_PATH": path}).load()


def test_non_object_raises(tmp_path):
    path = write_config(tmp_path, [1, 2, 3])
    with pytest.raises(ConfigurationError):
        ConfigManager({"CONFIG_PATH": path}).load()


@pytest.mark.parametrize(
    "environ",
    [
        {"ENABLE_LOG": "maybe"},
        {"MAX_ATTEMPTS": "three"},
        {"MAX_ATTEMPTS": "0"},
        {"BASE_DELAY_MS": "-5"},
        {"TRANSIENT_ERRNOS": "stale"},
    ],
)
def test_invalid_values_raise(tmp_path, environ):
    environ = dict(environ, CONFIG_PATH=str(tmp_path / "absent.json"))
    with pytest.raises(ConfigurationError):
        ConfigManager(environ).load()


def test_wrong_json_types_raise(tmp_path):
    path = write_config(tmp_path, {"logPath": 42})
    with pytest.raises(ConfigurationError):
        ConfigManager({"CONFIG_PATH": path}).load()


def test_setup_logging_creates_data_dir(tmp_path):
    data_dir = tmp_path / "data"

    with mock.patch("servercode.config.logging.basicConfig") as basic_config:
        ConfigManager({"DATA_DIR": str(data_dir)}).setup_logging("DEBUG")

    assert data_dir.is_dir()
    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    handlers = kwargs["handlers"]
    assert any(isinstance(h, logging.FileHandler) for h in handlers)
    for handler in handlers:
        handler.close()
