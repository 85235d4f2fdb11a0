"""
Commands - builders for database-level command documents.

Each builder is a pure function returning a fresh ordered document with
the command verb as its first key. Nothing here performs I/O.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from bson.son import SON

__all__ = [
    "CREATE_COLLECTION",
    "CURSOR_INFO",
    "DROP_DATABASE",
    "EVAL",
    "PROFILE",
    "REPAIR_DATABASE",
    "command_document",
    "create_collection_command",
    "cursor_info_command",
    "drop_database_command",
    "eval_command",
    "profile_command",
    "repair_database_command",
]

# Command verbs, as the server expects them
PROFILE = "profile"
DROP_DATABASE = "dropDatabase"
REPAIR_DATABASE = "repairDatabase"
CREATE_COLLECTION = "create"
CURSOR_INFO = "cursorInfo"
EVAL = "$eval"


def profile_command(level: int = -1) -> SON:
    """
    Build a profile command.

    Args:
        level: New profiling level, or -1 to read the current level
               without changing it.

    Returns:
        ``{profile: level}``
    """
    return SON([(PROFILE, int(level))])


def drop_database_command() -> SON:
    """Build ``{dropDatabase: 1}``."""
    return SON([(DROP_DATABASE, 1)])


def repair_database_command(
    preserve_cloned_files_on_failure: bool = False,
    backup_original_files: bool = False,
) -> SON:
    """
    Build a repairDatabase command.

    Args:
        preserve_cloned_files_on_failure: Keep cloned files if the repair fails.
        backup_original_files: Back up the original files.

    Returns:
        ``{repairDatabase: 1, preserveClonedFilesOnFailure, backupOriginalFiles}``
    """
    return SON(
        [
            (REPAIR_DATABASE, 1),
            ("preserveClonedFilesOnFailure", bool(preserve_cloned_files_on_failure)),
            ("backupOriginalFiles", bool(backup_original_files)),
        ]
    )


def create_collection_command(
    name: str,
    capped: bool = False,
    size: int = 0,
    max: int = 0,
) -> SON:
    """
    Build a create command.

    A capped collection needs a size, so ``capped`` is ignored when
    ``size`` is zero. ``max`` only applies to capped collections.

    Args:
        name: Collection name.
        capped: Whether the collection is fixed size.
        size: Size in bytes of a capped collection.
        max: Maximum number of documents in a capped collection.

    Returns:
        ``{create: name}``, plus ``capped``/``size`` and ``max`` when they apply.
    """
    command = SON([(CREATE_COLLECTION, name)])
    if capped and size:
        command["capped"] = True
        command["size"] = size
        if max:
            command["max"] = max
    return command


def eval_command(code: Any, args: Iterable[Any] = ()) -> SON:
    """
    Build an $eval command.

    Args:
        code: JavaScript source; converted with ``str()``.
        args: Arguments passed to the function in ``code``. A single
              string is passed as one argument.

    Returns:
        ``{$eval: code, args: [...]}``
    """
    if isinstance(args, (str, bytes)):
        args = [args]
    return SON([(EVAL, str(code)), ("args", list(args))])


def cursor_info_command() -> SON:
    """Build ``{cursorInfo: 1}``."""
    return SON([(CURSOR_INFO, 1)])


def command_document(
    command: str | Mapping[str, Any],
    value: Any = 1,
    **kwargs: Any,
) -> SON:
    """
    Build an arbitrary command document.

    Args:
        command: Command verb, or a complete command document.
        value: Value for the verb when ``command`` is a string.
        **kwargs: Extra command options, appended after the verb.

    Returns:
        The command as an ordered document.
    """
    if isinstance(command, str):
        document = SON([(command, value)])
    else:
        document = SON(command)
    document.update(kwargs)
    return document
