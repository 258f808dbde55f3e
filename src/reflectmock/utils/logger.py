"""Logging utility for engine diagnostics."""
from __future__ import annotations
import sys

class Logger:
    """Class-level logger shared by every engine in the process.

    - debug/info: Only shown when verbose=True
    - warning/error: Always shown regardless of verbose setting
    """

    PREFIX = "reflectmock"
    _verbose = False

    @classmethod
    def set_verbose(cls, verbose: bool) -> None:
        """Enable or disable verbose logging."""
        cls._verbose = bool(verbose)

    @classmethod
    def enabled(cls) -> bool:
        """Check if debug/info output is on; guard messages that repr user values."""
        return cls._verbose

    @classmethod
    def _emit(cls, level: str, msg: str) -> None:
        print(f"[{cls.PREFIX}:{level}] {msg}", file=sys.stderr)

    @classmethod
    def debug(cls, msg: str) -> None:
        """Print debug message if verbose mode is enabled."""
        if cls._verbose:
            cls._emit("DEBUG", msg)

    @classmethod
    def info(cls, msg: str) -> None:
        """Print info message if verbose mode is enabled."""
        if cls._verbose:
            cls._emit("INFO", msg)

    @classmethod
    def warning(cls, msg: str) -> None:
        """Print warning message."""
        cls._emit("WARN", msg)

    @classmethod
    def error(cls, msg: str) -> None:
        """Print error message."""
        cls._emit("ERROR", msg)

# Global logger instance
log = Logger()
