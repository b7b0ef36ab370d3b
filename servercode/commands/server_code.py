"""Command that reports the Abiotic Factor server's session short code."""

from functools import partial
from typing import Callable, Optional

from .. import messages
from ..config import ConfigurationError, PluginConfig
from ..extractors import ShortCodeExtractor
from ..host import Host
from ..reader import LogFileReader, is_transient_mount_error
from .base import Command


class ServerCodeCommand(Command):
    """Reads the server log and replies with the latest short code."""

    name = "servercode"
    description = "Get the Abiotic Factor server short code"
    aliases = ("服务器代码",)

    def __init__(
        self,
        host: Host,
        extractor: Optional[ShortCodeExtractor] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        super().__init__(host)
        self.extractor = extractor or ShortCodeExtractor()
        self.sleep = sleep

    def _create_reader(self, config: PluginConfig) -> LogFileReader:
        kwargs = {
            "policy": config.retry_policy(),
            "is_transient": partial(
                is_transient_mount_error, errnos=config.transient_errnos
            ),
        }
        if self.sleep is not None:
            kwargs["sleep"] = self.sleep
        return LogFileReader(**kwargs)

    def execute(self, caller_id: str) -> str:
        try:
            config = self.host.get_config()
        except ConfigurationError as e:
            self.host.log_error("Invalid plugin configuration", e)
            return messages.format_config_error(e)

        if not config.log_path:
            return messages.CONFIG_MISSING

        try:
            if config.enable_log:
                self.host.log(f"User {caller_id} requested the server short code")

            text = self._create_reader(config).read(config.log_path)
            codes = self.extractor.extract(text)

            if not codes:
                if config.enable_log:
                    self.host.log("No short code found in the log file")
                return messages.NO_CODE_FOUND

            # Server logs are append-only, so the last match is the newest one.
            latest_code = codes[-1]
            if config.enable_log:
                self.host.log(
                    f"Found short code: {latest_code} ({len(codes)} matches in total)"
                )
            return messages.format_code(latest_code)

        except Exception as e:
            self.host.log_error("Failed to read the log file", e)
            return messages.format_error(e, config.log_path)
