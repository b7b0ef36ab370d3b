"""Base abstract class for all chat commands."""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ..host import Host


class Command(ABC):
    """Base abstract class for all chat commands."""

    name: str = ""
    description: str = ""
    aliases: Sequence[str] = ()

    def __init__(self, host: Host):
        self.host = host
        self.logger = logging.getLogger(f"{self.__class__.__name__}.{self.name}")

    @abstractmethod
    def execute(self, caller_id: str) -> str:
        """Handle one request and return the reply (implemented by subclasses)."""
        pass

    def matches(self, invocation: str) -> bool:
        """Check whether the text a user typed invokes this command."""
        invocation = invocation.strip()
        return invocation == self.name or invocation in self.aliases

    def run(self, caller_id: str) -> str:
        """Dispatch a request from the host."""
        self.logger.debug(f"Running '{self.name}' for caller {caller_id}")
        return self.execute(caller_id)
