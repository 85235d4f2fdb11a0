"""
Responses - decoding of the generic command response envelope.

Every command answers with a document carrying an ``ok`` flag. A failed
command is still a well-formed response, so nothing here raises on
``ok == 0``.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import CommandResult

__all__ = ["interpret", "interpret_profile", "is_ok"]


def is_ok(raw: Mapping[str, Any] | None) -> bool:
    """
    Check the success flag of a command response.

    The server may send ``ok`` as an int, a float or a bool.

    Args:
        raw: The response document.

    Returns:
        True if ``raw["ok"] == 1``.
    """
    if not isinstance(raw, Mapping):
        return False
    try:
        return float(raw.get("ok", 0)) == 1
    except (TypeError, ValueError):
        return False


def interpret(raw: Mapping[str, Any] | None) -> CommandResult:
    """
    Wrap a command response, passing the payload through unchanged.

    Args:
        raw: The response document.

    Returns:
        CommandResult with the ``ok`` flag and the raw payload.
    """
    payload = dict(raw) if isinstance(raw, Mapping) else {}
    return CommandResult(ok=is_ok(payload), raw=payload)


def interpret_profile(raw: Mapping[str, Any] | None) -> int | None:
    """
    Extract the previous profiling level from a profile response.

    Args:
        raw: The response document.

    Returns:
        The ``was`` field on success, or None if the command failed.
        Level 0 and failure are distinct: test the result with ``is None``.
    """
    if not is_ok(raw):
        return None
    return raw.get("was")  # type: ignore[union-attr]
