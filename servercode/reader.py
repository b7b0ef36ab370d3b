"""Whole-file log reader with retries for flaky network mounts."""

import errno
import logging
import os
import stat
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

# Configuration Constants
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 500
LOG_ENCODING = "utf-8"
# The server may be mid-write, so the tail can end inside a multi-byte character.
LOG_DECODE_ERRORS = "replace"

# "Stale file handle": what NFS/SMB shares report while the share is briefly gone.
DEFAULT_TRANSIENT_ERRNOS = (errno.ESTALE,)


class LogReadError(Exception):
    """Base exception for classified log read failures."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class NetworkFilesystemError(LogReadError):
    """Exception raised when the mount stays unreachable after every retry."""

    def __init__(self, path: str, attempts: int):
        super().__init__(
            path,
            f"Network filesystem unavailable after {attempts} attempts: {path}",
        )
        self.attempts = attempts


class FileMissingError(LogReadError):
    """Exception raised when the directory exists but the log file does not."""

    def __init__(self, path: str):
        super().__init__(
            path, f"Log file does not exist but its directory does: {path}"
        )


class MountMissingError(LogReadError):
    """Exception raised when the log's directory is missing or unreachable."""

    def __init__(self, path: str):
        super().__init__(
            path, f"Log directory does not exist or cannot be reached: {path}"
        )


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to read and how long to wait between attempts."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given (1-indexed) failed attempt."""
        return attempt * self.base_delay_ms / 1000


def is_transient_mount_error(
    error: BaseException, errnos: Iterable[int] = DEFAULT_TRANSIENT_ERRNOS
) -> bool:
    """Check whether an error is a temporary network mount outage."""
    return isinstance(error, OSError) and error.errno in tuple(errnos)


class LogFileReader:
    """Reads a log file in one go, retrying transient mount errors."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        is_transient: Callable[[BaseException], bool] = is_transient_mount_error,
    ):
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.is_transient = is_transient
        self.logger = logging.getLogger(self.__class__.__name__)

    def _read_text(self, path: str) -> str:
        with open(path, "r", encoding=LOG_ENCODING, errors=LOG_DECODE_ERRORS) as f:
            return f.read()

    def read(self, path: str) -> str:
        """Read the full file content as text.

        Raises:
            NetworkFilesystemError: If every attempt hit a transient mount error
            FileMissingError: If the file is absent from an existing directory
            MountMissingError: If the file's directory is absent or unreachable
            OSError: Any other read failure, unchanged
        """
        last_error = None

        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                return self._read_text(path)
            except OSError as e:
                last_error = e

                if self.is_transient(e):
                    if attempt < self.policy.max_attempts:
                        wait = self.policy.delay_for(attempt)
                        self.logger.warning(
                            f"Transient error reading {path} "
                            f"(attempt {attempt}/{self.policy.max_attempts}), "
                            f"retrying in {wait:.1f}s: {e}"
                        )
                        self.sleep(wait)
                        continue
                    raise NetworkFilesystemError(path, attempt) from e

                if isinstance(e, FileNotFoundError):
                    self._classify_missing(path, e)

                raise

        # Unreachable while max_attempts >= 1; every attempt returns or raises.
        raise last_error

    def _classify_missing(self, path: str, error: FileNotFoundError) -> None:
        """Tell a wrong file name apart from a missing mount."""
        parent_dir = os.path.dirname(path) or "."
        try:
            parent_stat = os.stat(parent_dir)
        except OSError as parent_error:
            if isinstance(parent_error, FileNotFoundError) or self.is_transient(
                parent_error
            ):
                self.logger.debug(f"Parent directory unreachable: {parent_dir}")
                raise MountMissingError(path) from parent_error
            raise

        if stat.S_ISDIR(parent_stat.st_mode):
            raise FileMissingError(path) from error
