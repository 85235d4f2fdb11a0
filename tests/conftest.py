"""
Pytest fixtures for mondo-db tests.

Provides a mocked RPC session and client fixtures for testing without
actual network connections.
"""

from __future__ import annotations

import sys
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


class MockRpcMongo:
    """Mock for the RPC mongo namespace."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, list[dict[str, Any]]]] = {}
        self.commands: list[tuple[str, dict[str, Any]]] = []
        self.responses: dict[str, dict[str, Any]] = {}
        self.profile_levels: dict[str, int] = {}

    def _get_collection_data(self, database: str, collection: str) -> list[dict[str, Any]]:
        """Get or create collection data."""
        if database not in self._data:
            self._data[database] = {}
        if collection not in self._data[database]:
            self._data[database][collection] = []
        return self._data[database][collection]

    def add_namespace(self, database: str, name: str) -> None:
        """Record a namespace the way the server lists it."""
        self._get_collection_data(database, "system.namespaces").append({"name": name})

    def seed(self, database: str, collection: str, *documents: dict[str, Any]) -> None:
        """Store documents directly in a collection."""
        self._get_collection_data(database, collection).extend(dict(doc) for doc in documents)

    async def findOne(
        self,
        database: str,
        collection: str,
        filter: dict[str, Any],
        options: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Mock findOne."""
        for doc in self._get_collection_data(database, collection):
            if self._matches(doc, filter):
                return doc
        return None

    async def find(
        self,
        database: str,
        collection: str,
        filter: dict[str, Any],
        options: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Mock find."""
        data = self._get_collection_data(database, collection)
        return [doc for doc in data if self._matches(doc, filter)]

    async def dropCollection(
        self,
        database: str,
        collection: str,
    ) -> dict[str, Any]:
        """Mock dropCollection."""
        if collection not in self._data.get(database, {}):
            return {"ok": 0.0, "errmsg": "ns not found"}
        del self._data[database][collection]
        return {"ok": 1.0, "ns": f"{database}.{collection}"}

    async def command(
        self,
        database: str,
        command: dict[str, Any],
    ) -> dict[str, Any]:
        """Mock command. Canned responses in ``responses`` win."""
        self.commands.append((database, command))
        verb = next(iter(command))
        if verb in self.responses:
            return dict(self.responses[verb])

        if verb == "profile":
            was = self.profile_levels.get(database, 0)
            if command[verb] != -1:
                self.profile_levels[database] = command[verb]
            return {"was": was, "ok": 1.0}
        if verb == "dropDatabase":
            self._data.pop(database, None)
            return {"dropped": database, "ok": 1.0}
        if verb == "create":
            name = command[verb]
            if name in self._data.get(database, {}):
                return {"errmsg": "collection already exists", "ok": 0.0}
            self._get_collection_data(database, name)
            self.add_namespace(database, f"{database}.{name}")
            return {"ok": 1.0}
        if verb in ("ping", "repairDatabase"):
            return {"ok": 1.0}
        if verb == "cursorInfo":
            return {"byLocation_size": 0, "clientCursors_size": 0, "ok": 1.0}
        if verb == "$eval":
            return {"retval": None, "ok": 1.0}
        return {"errmsg": f"no such cmd: {verb}", "ok": 0.0}

    def _matches(self, doc: dict[str, Any], filter: dict[str, Any]) -> bool:
        """Check if document matches filter."""
        for key, value in filter.items():
            if isinstance(value, dict) and "$exists" in value:
                if bool(value["$exists"]) != (key in doc):
                    return False
            elif doc.get(key) != value:
                return False
        return True


class MockRpcClient:
    """Mock RPC client for testing."""

    def __init__(self) -> None:
        self.mongo = MockRpcMongo()
        self._closed = False

    async def close(self) -> None:
        """Close the mock client."""
        self._closed = True


@pytest.fixture
def mock_rpc() -> MockRpcClient:
    """Create a mock RPC client."""
    return MockRpcClient()


@pytest.fixture
def mock_connect(mock_rpc: MockRpcClient, monkeypatch: pytest.MonkeyPatch):
    """Mock the rpc_do.connect function."""
    mock_rpc_do = MagicMock()
    mock_rpc_do.connect = AsyncMock(return_value=mock_rpc)

    monkeypatch.setitem(sys.modules, "rpc_do", mock_rpc_do)

    return mock_rpc_do


@pytest.fixture
async def client(mock_connect, mock_rpc: MockRpcClient):
    """Create a connected MongoClient."""
    from mondo_db import MongoClient

    client = MongoClient("https://test.mongo.do")
    await client.connect()
    return client


@pytest.fixture
async def database(client):
    """Create a database."""
    return client["testdb"]


@pytest.fixture
async def collection(database):
    """Create a collection."""
    return database["testcollection"]
