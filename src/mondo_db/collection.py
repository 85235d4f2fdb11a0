"""
Collection - the collection handle a Database hands out.

Carries the three lookups the database layer needs: ``find`` for
namespace listing and GridFS metadata, ``find_one`` for following
references, and ``drop``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from . import responses
from .cursor import Cursor

if TYPE_CHECKING:
    from .database import Database
    from .types import CommandResult, Filter

T = TypeVar("T", bound=dict[str, Any])

__all__ = ["Collection"]


class Collection(Generic[T]):
    """
    A named collection in a database.

    Only a Database (directly, or through GridFS) creates collections;
    they share its connection and never hold state of their own.

    Example:
        users = db["users"]
        alice = await users.find_one({"_id": 7})
        await users.drop()
    """

    __slots__ = ("_database", "_name")

    def __init__(self, database: Database, name: str) -> None:
        """
        Initialize a collection.

        Args:
            database: Parent database instance.
            name: Collection name.
        """
        self._database = database
        self._name = name

    @property
    def name(self) -> str:
        """Get the collection name."""
        return self._name

    @property
    def full_name(self) -> str:
        """Get the namespace, ``"<database>.<collection>"``."""
        return f"{self._database}.{self._name}"

    @property
    def database(self) -> Database:
        """Get the parent database."""
        return self._database

    def find(self, filter: Filter | None = None) -> Cursor[T]:
        """
        Find documents matching the filter.

        Args:
            filter: Query filter; every document when omitted.

        Returns:
            A Cursor; the query runs when it is iterated.
        """
        return Cursor[T](self, filter)

    async def find_one(self, filter: Filter | None = None) -> T | None:
        """
        Find a single document.

        Args:
            filter: Query filter.

        Returns:
            The first matching document, or None.
        """
        document = await self._database.connection.rpc.mongo.findOne(
            self._database.name,
            self._name,
            dict(filter or {}),
            {},
        )
        if not isinstance(document, dict) or document.get("error"):
            return None
        return document  # type: ignore[return-value]

    async def drop(self) -> CommandResult:
        """
        Drop the collection.

        An RPC session that answers a successful drop with no document
        counts as ``ok``.

        Returns:
            The server response.
        """
        raw = await self._database.connection.rpc.mongo.dropCollection(
            self._database.name,
            self._name,
        )
        return responses.interpret({"ok": 1} if raw is None else raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._database == other._database and self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._database, self._name))

    def __repr__(self) -> str:
        return f"Collection({self.full_name!r})"
