"""
GridFS - handle on the two collections that store files in a database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .collection import Collection
    from .cursor import Cursor
    from .database import Database
    from .types import CommandResult, Filter

__all__ = ["GridFS"]


class GridFS:
    """
    Files stored as a metadata collection plus a chunks collection.

    With only a prefix, the collections are ``<prefix>.files`` and
    ``<prefix>.chunks``. With an explicit chunks name, ``prefix`` is used
    as the files collection name as-is.

    Example:
        fs = db.get_gridfs()
        async for meta in fs.find({"filename": "report.pdf"}):
            print(meta["length"])
    """

    __slots__ = ("_database", "_files", "_chunks")

    def __init__(
        self,
        database: Database,
        prefix: str = "fs",
        chunks_name: str | None = None,
    ) -> None:
        """
        Initialize a GridFS handle.

        Args:
            database: Database holding the files.
            prefix: Collection prefix, or the files collection name when
                    ``chunks_name`` is given.
            chunks_name: Name of the chunks collection.
        """
        if chunks_name is None:
            files_name = f"{prefix}.files"
            chunks_name = f"{prefix}.chunks"
        else:
            files_name = prefix

        self._database = database
        self._files = database.select_collection(files_name)
        self._chunks = database.select_collection(chunks_name)

    @property
    def database(self) -> Database:
        """Get the parent database."""
        return self._database

    @property
    def files(self) -> Collection[Any]:
        """Get the file metadata collection."""
        return self._files

    @property
    def chunks(self) -> Collection[Any]:
        """Get the chunks collection."""
        return self._chunks

    def find(self, filter: Filter | None = None) -> Cursor[Any]:
        """Find file metadata documents."""
        return self._files.find(filter)

    async def drop(self) -> tuple[CommandResult, CommandResult]:
        """
        Drop both collections.

        Returns:
            The server responses for the files and chunks collections.
        """
        return await self._files.drop(), await self._chunks.drop()

    def __repr__(self) -> str:
        return f"GridFS({self._files.full_name!r}, {self._chunks.full_name!r})"
