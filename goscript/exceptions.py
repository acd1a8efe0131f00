"""goscript exception hierarchy."""

from typing import Any


class GoScriptError(Exception):
    """Base exception for all goscript errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(GoScriptError):
    """Error in goscript configuration."""

    pass


class NotFoundError(GoScriptError):
    """A name did not resolve to an existing file in any root."""

    def __init__(self, message: str, name: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.name = name


class UnknownModuleError(NotFoundError):
    """Module name did not resolve."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown module: {name}", name)


class UnknownCommandError(NotFoundError):
    """Command name did not resolve."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}", name)


class InvalidArgumentError(GoScriptError):
    """Malformed flag combination or argument shape."""

    pass


class ParseError(GoScriptError):
    """A header block could not be turned into help text."""

    pass


class ReadError(ParseError):
    """A script file exists but could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}", {"reason": reason})
        self.path = path
        self.reason = reason


class InvalidPathError(ParseError):
    """A script path could not be turned into a command name."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid command path: {path!r}")
        self.path = path
