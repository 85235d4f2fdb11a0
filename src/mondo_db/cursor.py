"""
Cursor - lazy async iteration over a find.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, Generic, TypeVar

if TYPE_CHECKING:
    from .collection import Collection
    from .types import Filter

T = TypeVar("T", bound=dict[str, Any])

__all__ = ["Cursor"]


class Cursor(Generic[T]):
    """
    Documents of a collection matching a filter.

    Nothing is sent until the cursor is first iterated or listed; the
    batch is fetched once and replayed from memory.

    Example:
        async for namespace in db["system.namespaces"].find():
            print(namespace["name"])
    """

    __slots__ = ("_collection", "_filter", "_batch", "_position")

    def __init__(self, collection: Collection[Any], filter: Filter | None = None) -> None:
        """
        Initialize a cursor.

        Args:
            collection: Collection to query.
            filter: Query filter.
        """
        self._collection = collection
        self._filter = dict(filter or {})
        self._batch: list[T] | None = None
        self._position = 0

    @property
    def collection(self) -> Collection[Any]:
        """Get the queried collection."""
        return self._collection

    async def _fetch(self) -> list[T]:
        if self._batch is None:
            collection = self._collection
            batch = await collection.database.connection.rpc.mongo.find(
                collection.database.name,
                collection.name,
                self._filter,
                {},
            )
            self._batch = batch if isinstance(batch, list) else []
        return self._batch

    async def to_list(self) -> list[T]:
        """Return every matching document."""
        return list(await self._fetch())

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        batch = await self._fetch()
        if self._position == len(batch):
            raise StopAsyncIteration
        self._position += 1
        return batch[self._position - 1]

    def __repr__(self) -> str:
        return f"Cursor({self._collection.full_name!r}, {self._filter!r})"
