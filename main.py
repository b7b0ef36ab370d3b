"""Entry point for running the server code command from a shell."""

from typing import List, Optional
import os
import sys
import logging
from servercode.commands import Command, ServerCodeCommand
from servercode.config import ConfigManager, ConfigurationError
from servercode.host import ConsoleHost

# Configuration Constants
DEFAULT_CALLER_ID = "console"


class CommandManager:
    """Routes invocations typed by users to registered commands."""

    def __init__(self):
        self.commands = []

    def add_command(self, command: Command) -> None:
        """Add a command to the manager."""
        self.commands.append(command)

    def find(self, invocation: str) -> Optional[Command]:
        for command in self.commands:
            if command.matches(invocation):
                return command
        return None

    def dispatch(self, invocation: str, caller_id: str) -> Optional[str]:
        """Run the command for an invocation; None when nothing matches."""
        command = self.find(invocation)
        if command is None:
            return None
        return command.run(caller_id)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    argv = sys.argv[1:] if argv is None else argv
    config_manager = ConfigManager()
    logger = logging.getLogger("servercode")
    host = ConsoleHost(config_manager)

    try:
        config = config_manager.load()
        config_manager.setup_logging(config.log_level)
        logger.debug(f"Loaded configuration from: {config_manager.config_path}")

        manager = CommandManager()
        manager.add_command(ServerCodeCommand(host))

        invocation = argv[0] if argv else ServerCodeCommand.name
        caller_id = os.environ.get("CALLER_ID", DEFAULT_CALLER_ID)
        reply = manager.dispatch(invocation, caller_id)

        if reply is None:
            names = ", ".join(
                f"{command.name} ({command.description})" for command in manager.commands
            )
            print(f"Unknown command: {invocation} (available: {names})", file=sys.stderr)
            return 2

        print(reply)
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
    finally:
        host.close()


if __name__ == "__main__":
    sys.exit(main())
