"""Capabilities the chat host provides to commands."""

import logging
import queue
from abc import ABC, abstractmethod
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from .clients import LokiClient, LokiHandler
from .config import ConfigManager, PluginConfig

HOST_LOGGER_NAME = "servercode"


class Host(ABC):
    """Scoped logger plus configuration, as handed to a command."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Write an informational diagnostic."""
        pass

    @abstractmethod
    def log_error(self, message: str, error: Optional[BaseException] = None) -> None:
        """Write an error diagnostic."""
        pass

    @abstractmethod
    def get_config(self) -> PluginConfig:
        pass


class ConsoleHost(Host):
    """Host backed by the standard logging module and ConfigManager."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        service_name: str = HOST_LOGGER_NAME,
    ):
        self.config_manager = config_manager or ConfigManager()
        self.service_name = service_name
        self.logger = logging.getLogger(HOST_LOGGER_NAME)
        self._config = None
        self._queue_handler = None
        self._listener = None

    def get_config(self) -> PluginConfig:
        if self._config is None:
            self._config = self.config_manager.load()
            if self._config.loki_url:
                self.attach_loki(self._config.loki_url)
        return self._config

    def attach_loki(self, loki_url: str, client: Optional[LokiClient] = None) -> None:
        """Ship this host's diagnostics to Loki from a background thread."""
        if self._queue_handler:
            return
        loki_handler = LokiHandler(client or LokiClient(loki_url), self.service_name)
        log_queue = queue.Queue()
        self._listener = QueueListener(log_queue, loki_handler, respect_handler_level=True)
        self._listener.start()
        self._queue_handler = QueueHandler(log_queue)
        self.logger.addHandler(self._queue_handler)

    def log(self, message: str) -> None:
        self.logger.info(message)

    def log_error(self, message: str, error: Optional[BaseException] = None) -> None:
        if error is not None:
            self.logger.error(f"{message}: {error}", exc_info=error)
        else:
            self.logger.error(message)

    def close(self) -> None:
        """Detach Loki shipping, sending whatever is still queued."""
        if self._queue_handler:
            self.logger.removeHandler(self._queue_handler)
            self._queue_handler = None
            self._listener.stop()
            for handler in self._listener.handlers:
                handler.close()
            self._listener = None
