"""
Type definitions for mondo-db.

Provides the command result type, the profiling level constants and the
exception hierarchy shared by the database handle and its collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterator, Mapping


class ProfilingLevel(IntEnum):
    """Server-side profiling levels."""

    OFF = 0
    SLOW = 1
    ALL = 2


@dataclass
class CommandResult:
    """
    Outcome of a database command.

    Wraps the raw server response. A command that reached the server but
    failed is still a CommandResult, with ``ok`` set to False and the
    server's ``errmsg``/``errno`` available on the raw payload.

    Attributes:
        ok: Whether the server reported ``ok == 1``.
        raw: The response document, unchanged.
    """

    ok: bool
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def error_message(self) -> str | None:
        """The server's ``errmsg``, if any."""
        return self.raw.get("errmsg")

    @property
    def error_code(self) -> int | None:
        """The server's ``errno`` (or ``code`` on newer servers), if any."""
        if "errno" in self.raw:
            return self.raw["errno"]
        return self.raw.get("code")

    @property
    def return_value(self) -> Any:
        """The ``retval`` of an eval command."""
        return self.raw.get("retval")

    def raise_for_status(self) -> CommandResult:
        """
        Raise OperationFailure if the command failed.

        Returns:
            Self, so successful results can be chained.

        Raises:
            OperationFailure: If ``ok`` is False.
        """
        if not self.ok:
            raise OperationFailure(
                self.error_message or "Command failed",
                self.error_code,
            )
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.raw)


# Type aliases for clarity
Filter = Mapping[str, Any]


class MongoError(Exception):
    """Base exception for mondo-db operations."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidName(MongoError):
    """Error raised when a database name is not valid."""

    pass


class ConnectionError(MongoError):
    """Error raised when connection to MongoDB fails."""

    pass


class OperationFailure(MongoError):
    """Error raised when a command fails on the server."""

    pass
