"""
Exceptions raised by Firefox Runtime.
"""


class FirefoxRuntimeError(Exception):
    """Base class for launcher errors."""


class LaunchError(FirefoxRuntimeError, RuntimeError):
    """The browser binary could not be executed."""

    def __init__(self, executable: str, cause: Exception):
        self.executable = executable
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"{executable}: {reason}")
