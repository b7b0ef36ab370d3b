"""Client for shipping diagnostic log records to Loki using simple POST requests."""

import logging
import time
from typing import Dict, List, Optional, Tuple

import requests

DEFAULT_APP_NAME = "servercode"
REQUEST_TIMEOUT = 10


class LokiClient:
    """Client for sending logs to Loki."""

    def __init__(self, loki_url: str):
        """Initialize the Loki client.

        Args:
            loki_url: Push endpoint of the Loki server
        """
        self.loki_url = loki_url
        self.session = requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info(f"Initialized Loki client with URL: {self.loki_url}")

    def send_logs(
        self,
        app_name: str,
        service_name: str,
        log_entries: List[Tuple[str, str, Dict[str, str]]],
        extra_labels: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Send logs to Loki.

        Args:
            app_name: Name of the application
            service_name: Name of the service
            log_entries: List of log entries in format (timestamp_ns, line, metadata)
            extra_labels: Additional labels to add to the logs

        Returns:
            bool: True if logs were sent successfully, False otherwise
        """
        if not log_entries:
            return True

        labels = {"app": app_name, "service": service_name}
        if extra_labels:
            labels.update(extra_labels)

        values = [[timestamp, line, metadata] for timestamp, line, metadata in log_entries]
        payload = {"streams": [{"stream": labels, "values": values}]}
        try:
            response = self.session.post(
                self.loki_url,
                json=payload,
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return True

        except requests.exceptions.RequestException as e:
            self.logger.error(f"Failed to send logs to Loki: {e}")
            return False

    def close(self) -> None:
        self.session.close()


class LokiHandler(logging.Handler):
    """Logging handler that pushes each record to Loki as it is emitted."""

    def __init__(
        self,
        client: LokiClient,
        service_name: str,
        app_name: str = DEFAULT_APP_NAME,
        level: int = logging.NOTSET,
    ):
        super().__init__(level)
        self.client = client
        self.app_name = app_name
        self.service_name = service_name

    def to_loki_format(self, record: logging.LogRecord) -> Tuple[str, str, Dict[str, str]]:
        """Convert a record to the (timestamp, line, metadata) Loki expects."""
        timestamp_ns = int((record.created or time.time()) * 1_000_000_000)
        return str(timestamp_ns), self.format(record), {"level": record.levelname.lower()}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = self.to_loki_format(record)
            self.client.send_logs(self.app_name, self.service_name, [entry])
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()
