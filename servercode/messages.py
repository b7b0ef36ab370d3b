"""User-facing replies for the server code command."""

from .reader import FileMissingError, MountMissingError, NetworkFilesystemError

CONFIG_MISSING = (
    "Error: no log file path is configured. "
    "Set logPath in the plugin settings."
)

NO_CODE_FOUND = "No short code found in the log file."

MOUNT_EXAMPLE = (
    "Tip: on Unraid, map the log directory into the container, e.g. "
    "/mnt/user/appdata/abioticfactor -> /appdata/abioticfactor"
)


def format_code(code: str) -> str:
    return f"Server short code: {code}"


def format_error(error: BaseException, log_path: str) -> str:
    """Map a read failure to a diagnostic that names the configured path."""
    if isinstance(error, NetworkFilesystemError):
        return (
            f"Error: network filesystem unavailable\n"
            f"Path: {log_path}\n"
            f"Tried {error.attempts} times.\n\n"
            "Possible causes:\n"
            "1. The network storage connection is unstable\n"
            "2. The network storage is not responding\n\n"
            "Suggestions:\n"
            "1. Check the network storage status\n"
            "2. Try again later\n"
            "3. Confirm the mount path is correct"
        )

    if isinstance(error, FileMissingError):
        return (
            f"Error: the log directory exists but the file does not: {log_path}\n\n"
            "Check that the file name is correct."
        )

    if isinstance(error, MountMissingError):
        return (
            f"Error: the log path does not exist or cannot be reached: {log_path}\n\n"
            "Make sure the container has this directory mounted.\n"
            f"{MOUNT_EXAMPLE}"
        )

    if isinstance(error, FileNotFoundError):
        return (
            f"Error: log file not found: {log_path}\n\n"
            "Please check:\n"
            "1. The path is correct\n"
            "2. The container has the directory mounted"
        )

    if isinstance(error, PermissionError):
        return (
            f"Error: permission denied reading the log file: {log_path}\n\n"
            "Check the file permissions or the user the container runs as."
        )

    code = getattr(error, "errno", None)
    return (
        f"Error: could not read the log file\n"
        f"Path: {log_path}\n"
        f"Details: {str(error) or error.__class__.__name__}\n"
        f"Error code: {code if code is not None else 'unknown'}"
    )


def format_config_error(error: BaseException) -> str:
    return f"Error: invalid plugin configuration: {error}"
