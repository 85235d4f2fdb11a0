"""
Tests for database references.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from bson.dbref import DBRef
from bson.objectid import ObjectId

from mondo_db.dbref import create_ref, get_ref, is_ref, ref_to_document


class TestCreateRef:
    """Tests for create_ref."""

    def test_from_document(self):
        assert create_ref("users", {"_id": 7, "name": "Alice"}) == DBRef("users", 7)

    def test_from_object_id(self):
        oid = ObjectId()
        assert create_ref("users", oid) == DBRef("users", oid)

    def test_document_and_id_agree(self):
        oid = ObjectId()
        assert create_ref("users", {"_id": oid}) == create_ref("users", oid)

    def test_document_without_id(self):
        assert create_ref("users", {"name": "Alice"}) is None

    @pytest.mark.parametrize("obj", [7, "507f1f77bcf86cd799439011", None, [1, 2]])
    def test_other_values(self, obj):
        """Test that only documents and ObjectIds make references."""
        assert create_ref("users", obj) is None

    def test_namespace_coerced_to_str(self):
        class Namespace:
            def __str__(self):
                return "users"

        ref = create_ref(Namespace(), {"_id": 1})
        assert ref.collection == "users"

    def test_ref_to_document(self):
        ref = create_ref("users", {"_id": 7})
        assert ref_to_document(ref) == {"$ref": "users", "$id": 7}


class TestIsRef:
    """Tests for is_ref."""

    def test_dbref(self):
        assert is_ref(DBRef("users", 7))

    def test_document(self):
        assert is_ref({"$ref": "users", "$id": 7})

    def test_only_ref_key(self):
        assert not is_ref({"$ref": "users"})

    def test_only_id_key(self):
        assert not is_ref({"$id": 7})

    def test_extra_keys(self):
        assert not is_ref({"$ref": "users", "$id": 7, "name": "Alice"})

    def test_dbref_with_extra_fields(self):
        """A DBRef follows the same exact-shape rule as its document form."""
        assert not is_ref(DBRef("users", 7, foo=2))

    def test_dbref_with_database(self):
        assert not is_ref(DBRef("users", 7, "otherdb"))
        assert not is_ref({"$ref": "users", "$id": 7, "$db": "otherdb"})

    @pytest.mark.parametrize("candidate", [None, 7, "users", ["$ref", "$id"]])
    def test_scalars(self, candidate):
        assert not is_ref(candidate)


class TestGetRef:
    """Tests for following references."""

    async def test_round_trip(self, database, mock_rpc):
        mock_rpc.mongo.seed("testdb", "coll", {"_id": 7, "v": "a"})

        ref = database.create_dbref("coll", {"_id": 7})

        assert await database.get_dbref(ref) == {"_id": 7, "v": "a"}

    async def test_document_form(self, database, mock_rpc):
        mock_rpc.mongo.seed("testdb", "coll", {"_id": 7, "v": "a"})

        assert await database.get_dbref({"$ref": "coll", "$id": 7}) == {"_id": 7, "v": "a"}

    async def test_object_id(self, database, mock_rpc):
        oid = ObjectId()
        mock_rpc.mongo.seed("testdb", "users", {"_id": oid, "name": "Alice"})

        user = await database.get_dbref(database.create_dbref("users", oid))

        assert user["name"] == "Alice"

    async def test_not_found(self, database):
        assert await database.get_dbref(DBRef("coll", 404)) is None

    async def test_not_a_ref(self, database):
        assert await database.get_dbref({"_id": 7}) is None
        assert await database.get_dbref(None) is None

    async def test_other_database_is_not_followed(self, database, mock_rpc):
        """Both forms of a reference carrying $db give None, without raising."""
        mock_rpc.mongo.seed("otherdb", "coll", {"_id": 1})
        mock_rpc.mongo.findOne = AsyncMock(side_effect=AssertionError("no lookup expected"))

        assert await get_ref(database, DBRef("coll", 1, "otherdb")) is None
        assert await database.get_dbref({"$ref": "coll", "$id": 1, "$db": "otherdb"}) is None

    async def test_extra_fields_not_followed(self, database, mock_rpc):
        mock_rpc.mongo.seed("testdb", "coll", {"_id": 1})

        assert await database.get_dbref(DBRef("coll", 1, foo=2)) is None
