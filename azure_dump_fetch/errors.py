"""Errors raised by azure-dump-fetch.

Every failure is fatal for the current run: the CLI logs the message and
exits with ``exit_code``.
"""


class OperatorError(Exception):
    """Fatal error reported to the operator with a human readable message."""

    exit_code = 1

    def __init__(self, message, reason='fatal'):
        super().__init__(message)
        self.message = message
        self.reason = reason


class SelectionError(OperatorError):
    """Raised when a menu selection is empty, non-numeric or out of range."""

    def __init__(self, message):
        super().__init__(message, reason='invalid selection')


class AzureCliError(OperatorError):
    """Raised when an ``az`` invocation exits with a nonzero status."""

    def __init__(self, command, returncode, stderr):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"'{command}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message, reason='cloud cli')
