"""Chat commands exposed to the host."""

from .base import Command
from .server_code import ServerCodeCommand

# Dictionary of available command types
COMMAND_TYPES = {
    "ServerCodeCommand": ServerCodeCommand,
}

__all__ = ["Command", "ServerCodeCommand", "COMMAND_TYPES"]
