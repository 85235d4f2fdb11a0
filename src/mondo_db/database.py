"""
Database - a named database on a MongoDB connection.

Validates the database name, builds and runs database-level commands,
and hands out collection, GridFS and reference handles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, TypeVar

from . import commands, dbref, responses
from .collection import Collection
from .gridfs import GridFS
from .types import CommandResult, InvalidName

if TYPE_CHECKING:
    from bson.dbref import DBRef

    from .client import MongoClient

T = TypeVar("T", bound=dict[str, Any])

__all__ = ["Database", "validate_database_name"]

logger = logging.getLogger(__name__)

NAMESPACES_COLLECTION = "system.namespaces"


def validate_database_name(name: Any) -> str:
    """
    Check a database name.

    Database names can use almost any character. They cannot be empty
    or contain a space or a ".". Unlike collection names, they may
    contain "$".

    Args:
        name: Proposed name; converted with ``str()``.

    Returns:
        The name as a string.

    Raises:
        InvalidName: If the name is not valid.
    """
    name = str(name)
    if not name or " " in name or "." in name:
        raise InvalidName("Invalid database name.")
    return name


class Database:
    """
    MongoDB database.

    A database handle is bound to one connection and one name, both fixed
    at construction. It never opens or closes the connection. Collections
    can be accessed using either attribute access or subscript notation.

    Commands that reach the server but fail are returned as a
    CommandResult with ``ok`` set to False; only connection errors raise.

    Example:
        db = client["myapp"]

        users = db.users
        orders = db["orders"]

        names = await db.list_collections()

        result = await db.drop()
        if not result.ok:
            print(result.error_message)
    """

    __slots__ = ("_connection", "_name")

    def __init__(self, connection: MongoClient, name: Any) -> None:
        """
        Initialize a database.

        Args:
            connection: The connection commands are sent over.
            name: Database name.

        Raises:
            InvalidName: If the name is not valid.
        """
        self._name = validate_database_name(name)
        self._connection = connection

    @property
    def name(self) -> str:
        """Get the database name."""
        return self._name

    @property
    def connection(self) -> MongoClient:
        """Get the connection this database uses."""
        return self._connection

    def __str__(self) -> str:
        return self._name

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Database):
            return self._connection is other._connection and self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash((id(self._connection), self._name))

    def __getitem__(self, name: str) -> Collection[Any]:
        """
        Get a collection by name using subscript notation.

        Example:
            users = db["users"]
        """
        return self.select_collection(name)

    def __getattr__(self, name: str) -> Collection[Any]:
        """
        Get a collection by name using attribute access.

        Example:
            users = db.users
        """
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

        return self.select_collection(name)

    def select_collection(self, name: str) -> Collection[Any]:
        """
        Get a collection.

        Args:
            name: Collection name.

        Returns:
            Collection instance bound to this database.
        """
        return Collection(self, name)

    def get_collection(
        self,
        name: str,
        document_class: type[T] | None = None,
    ) -> Collection[T]:
        """
        Get a typed collection.

        Args:
            name: Collection name.
            document_class: Optional document type for type hints.

        Returns:
            Typed Collection instance.
        """
        return Collection[T](self, name)

    async def _run(self, command: Mapping[str, Any]) -> dict[str, Any]:
        logger.debug("Running %s on database %s", next(iter(command), None), self._name)
        return await self._connection.command(self._name, command)

    async def command(
        self,
        command: str | Mapping[str, Any],
        value: Any = 1,
        **kwargs: Any,
    ) -> CommandResult:
        """
        Run a database command.

        Args:
            command: Command name or command document.
            value: Command value (default 1).
            **kwargs: Additional command options.

        Returns:
            The command result.
        """
        raw = await self._run(commands.command_document(command, value, **kwargs))
        return responses.interpret(raw)

    async def profiling_level(self) -> int | None:
        """
        Get this database's profiling level.

        Returns:
            The profiling level, or None if the command failed.
        """
        raw = await self._run(commands.profile_command())
        return responses.interpret_profile(raw)

    async def set_profiling_level(self, level: int) -> int | None:
        """
        Set this database's profiling level.

        Args:
            level: One of the ProfilingLevel values.

        Returns:
            The previous profiling level, or None if the command failed.
        """
        raw = await self._run(commands.profile_command(level))
        return responses.interpret_profile(raw)

    async def drop(self) -> CommandResult:
        """
        Drop this database.

        Returns:
            The server response; ``errmsg`` is set on failure.
        """
        raw = await self._run(commands.drop_database_command())
        return responses.interpret(raw)

    async def repair(
        self,
        preserve_cloned_files: bool = False,
        backup_original_files: bool = False,
    ) -> CommandResult:
        """
        Repair and compact this database.

        Args:
            preserve_cloned_files: Keep cloned files if the repair fails.
            backup_original_files: Back up the original files.

        Returns:
            The server response.
        """
        raw = await self._run(
            commands.repair_database_command(preserve_cloned_files, backup_original_files)
        )
        return responses.interpret(raw)

    async def create_collection(
        self,
        name: str,
        capped: bool = False,
        size: int = 0,
        max: int = 0,
    ) -> Collection[Any]:
        """
        Create a collection.

        The collection is returned even if the server refuses to create it
        (for example because it already exists).

        Args:
            name: Collection name.
            capped: Whether the collection is fixed size.
            size: Size in bytes of a capped collection; ``capped`` has no
                  effect without it.
            max: Maximum number of documents in a capped collection.

        Returns:
            The Collection instance.
        """
        result = responses.interpret(
            await self._run(commands.create_collection_command(name, capped, size, max))
        )
        if not result.ok:
            logger.warning(
                "Creating collection %s.%s failed: %s",
                self._name,
                name,
                result.error_message,
            )
        return self.select_collection(name)

    async def drop_collection(self, name_or_collection: str | Collection[Any]) -> CommandResult:
        """
        Drop a collection.

        Args:
            name_or_collection: Collection name or Collection instance.

        Returns:
            The server response.
        """
        if isinstance(name_or_collection, Collection):
            return await name_or_collection.drop()
        return await self.select_collection(name_or_collection).drop()

    async def list_collections(self) -> list[str]:
        """
        List the collections in this database.

        Index namespaces (a "$" after the first character) are skipped.
        The order is whatever the server returns.

        Returns:
            List of namespace names.
        """
        names = []
        async for namespace in self.select_collection(NAMESPACES_COLLECTION).find():
            name = namespace["name"]
            if name.find("$") > 0:
                continue
            names.append(name)
        return names

    async def cursor_info(self) -> CommandResult:
        """
        Get information about the server's cursors.

        Returns:
            The server response (``byLocation_size``, ``clientCursors_size``).
        """
        raw = await self._run(commands.cursor_info_command())
        return responses.interpret(raw)

    async def execute(self, code: Any, args: Iterable[Any] = ()) -> CommandResult:
        """
        Run JavaScript on the server.

        Args:
            code: JavaScript source.
            args: Arguments to pass to the function in ``code``.

        Returns:
            The server response; ``retval`` on success, ``errmsg`` and
            possibly ``errno`` on failure.
        """
        raw = await self._run(commands.eval_command(code, args))
        return responses.interpret(raw)

    def get_gridfs(self, prefix: str = "fs", chunks_name: str | None = None) -> GridFS:
        """
        Get the GridFS handle for files stored in this database.

        Args:
            prefix: Collection prefix, or the files collection name when
                    ``chunks_name`` is given.
            chunks_name: Name of the chunks collection.

        Returns:
            A GridFS instance.
        """
        return GridFS(self, prefix, chunks_name)

    def create_dbref(self, namespace: Any, obj: Any) -> DBRef | None:
        """
        Create a reference to a document.

        Args:
            namespace: Collection the reference points to.
            obj: A document with an ``_id``, or an ObjectId.

        Returns:
            The reference, or None if ``obj`` is neither.
        """
        return dbref.create_ref(namespace, obj)

    async def get_dbref(self, ref: Any) -> dict[str, Any] | None:
        """
        Fetch the document a reference points to.

        Args:
            ref: A DBRef or a ``{"$ref", "$id"}`` document.

        Returns:
            The document, or None.
        """
        return await dbref.get_ref(self, ref)

    def __repr__(self) -> str:
        return f"Database({self._name!r})"
