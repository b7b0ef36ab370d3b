import pytest

from servercode.config import PluginConfig
from servercode.host import Host


class FakeHost(Host):
    """Host that records diagnostics instead of logging them."""

    def __init__(self, config=None, config_error=None):
        self.config = config or PluginConfig()
        self.config_error = config_error
        self.messages = []
        self.errors = []

    def log(self, message):
        self.messages.append(message)

    def log_error(self, message, error=None):
        self.errors.append((message, error))

    def get_config(self):
        if self.config_error:
            raise self.config_error
        return self.config


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def make_host():
    return FakeHost
