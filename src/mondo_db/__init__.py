"""
mondo-db - database handles for an async MongoDB connection.

This package provides the database layer of an async MongoDB client:
- Database name validation
- Administrative commands (profiling, drop, repair, create collection, eval)
- Command results that report server failures instead of raising them
- Database references (DBRefs) and GridFS handles

Example usage:
    from mondo_db import MongoClient, ProfilingLevel

    async def main():
        async with MongoClient("https://mongo.do") as client:
            db = client["myapp"]

            previous = await db.set_profiling_level(ProfilingLevel.SLOW)
            if previous is None:
                print("profiling not available")

            await db.create_collection("logs", capped=True, size=1 << 20)

            user = await db.users.find_one({"name": "Alice"})
            ref = db.create_dbref("users", user)
            same_user = await db.get_dbref(ref)

            result = await db.execute("function (x) { return x * 2; }", [21])
            if result.ok:
                print(result.return_value)
            else:
                print(result.error_message)

    import asyncio
    asyncio.run(main())
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import MongoClient
from .collection import Collection
from .cursor import Cursor
from .database import Database, validate_database_name
from .dbref import create_ref, get_ref, is_ref
from .gridfs import GridFS
from .types import (
    CommandResult,
    ConnectionError,
    InvalidName,
    MongoError,
    OperationFailure,
    ProfilingLevel,
)

__all__ = [
    # Main classes
    "MongoClient",
    "Database",
    "Collection",
    "Cursor",
    "GridFS",
    # References
    "create_ref",
    "get_ref",
    "is_ref",
    # Helpers
    "validate_database_name",
    # Result types
    "CommandResult",
    "ProfilingLevel",
    # Exceptions
    "MongoError",
    "InvalidName",
    "ConnectionError",
    "OperationFailure",
    # Version
    "__version__",
]
