"""
MongoClient - connection to a MongoDB service.

Owns the RPC session. Databases use it through a single primitive,
``command(database_name, command)``, and never open or close it
themselves.
"""

from __future__ import annotations

import logging
import os
from types import TracebackType
from typing import Any, Mapping

from .database import Database
from .types import ConnectionError, MongoError

__all__ = ["MongoClient"]

logger = logging.getLogger(__name__)

DEFAULT_URI = "https://mongo.do"
DEFAULT_TIMEOUT = 30.0


class MongoClient:
    """
    MongoDB client.

    Databases can be accessed using either attribute access or subscript
    notation. The client must be connected before databases are used.

    Example:
        client = MongoClient("https://mongo.do")
        await client.connect()

        db = client["myapp"]
        db = client.myapp

        await client.close()

        # Or use as async context manager
        async with MongoClient("https://mongo.do") as client:
            db = client["myapp"]
            ...
    """

    __slots__ = ("_uri", "_rpc", "_connected", "_databases", "_options")

    def __init__(
        self,
        uri: str | None = None,
        **options: Any,
    ) -> None:
        """
        Initialize the MongoDB client.

        Args:
            uri: Connection URI (e.g., "https://mongo.do" or "wss://mongo.do/rpc").
                 If not provided, uses MONGO_URL environment variable.
            **options: Additional connection options.
                - timeout: Default timeout for operations (default: 30.0).
        """
        self._uri = uri or os.environ.get("MONGO_URL", DEFAULT_URI)
        self._rpc: Any = None
        self._connected = False
        self._databases: dict[str, Database] = {}
        self._options = options

    @property
    def uri(self) -> str:
        """Get the connection URI."""
        return self._uri

    @property
    def is_connected(self) -> bool:
        """Check if the client is connected."""
        return self._connected

    @property
    def rpc(self) -> Any:
        """
        Get the RPC session.

        Raises:
            MongoError: If the client is not connected.
        """
        self._ensure_connected()
        return self._rpc

    async def connect(self) -> MongoClient:
        """
        Connect to the MongoDB service.

        Returns:
            Self for chaining.

        Raises:
            ConnectionError: If connection fails.
        """
        if self._connected:
            return self

        try:
            from rpc_do import connect

            timeout = self._options.get("timeout", DEFAULT_TIMEOUT)
            self._rpc = await connect(self._uri, timeout=timeout)
            self._connected = True
            logger.debug("Connected to %s", self._uri)
            return self
        except ImportError as e:
            raise ConnectionError(
                "rpc-do package is required. Install with: pip install rpc-do"
            ) from e
        except Exception as e:
            raise ConnectionError(f"Failed to connect to {self._uri}: {e}") from e

    async def close(self) -> None:
        """Close the connection."""
        if self._rpc is not None:
            await self._rpc.close()
            self._rpc = None
            logger.debug("Closed connection to %s", self._uri)
        self._connected = False
        self._databases.clear()

    def _ensure_connected(self) -> None:
        """Ensure the client is connected."""
        if not self._connected or self._rpc is None:
            raise MongoError("Client is not connected. Call connect() first.")

    async def command(self, database: str, command: Mapping[str, Any]) -> dict[str, Any]:
        """
        Run a command document against a database.

        Errors from the RPC session are not caught.

        Args:
            database: Database name.
            command: Command document.

        Returns:
            The decoded response document.

        Raises:
            MongoError: If the client is not connected.
        """
        self._ensure_connected()

        result = await self._rpc.mongo.command(database, dict(command))
        return result if isinstance(result, dict) else {}

    def __getitem__(self, name: str) -> Database:
        """
        Get a database by name using subscript notation.

        Raises:
            InvalidName: If the name is not a valid database name.

        Example:
            db = client["myapp"]
        """
        self._ensure_connected()

        if name not in self._databases:
            self._databases[name] = Database(self, name)
        return self._databases[name]

    def __getattr__(self, name: str) -> Database:
        """
        Get a database by name using attribute access.

        Example:
            db = client.myapp
        """
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

        return self[name]

    def get_database(self, name: str) -> Database:
        """Get a database by name."""
        return self[name]

    async def __aenter__(self) -> MongoClient:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        status = "connected" if self._connected else "disconnected"
        return f"MongoClient({self._uri!r}, {status})"
