from __future__ import annotations

from typing import Optional


class InvalidSearchMode(ValueError):
    def __init__(self, mode: str):
        super().__init__(f"Invalid search mode '{mode}'")
        self.mode = mode


class TransportError(Exception):
    """
    Raised by the raw transport for any failed Jira call.
    `code` is the HTTP status when the server answered, None otherwise.
    """

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code}] {self.message}"
