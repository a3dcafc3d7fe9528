"""Exceptions raised by CLI commands."""


class CLIError(Exception):
    """An error reported to the user with a message and an exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
