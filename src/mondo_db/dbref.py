"""
DBRef - creating, recognising and following database references.

A reference is a ``bson.dbref.DBRef``. Documents of the form
``{"$ref": collection, "$id": id}`` produced elsewhere are recognised
too, so references stored by other clients can be followed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from bson.dbref import DBRef
from bson.objectid import ObjectId

if TYPE_CHECKING:
    from .database import Database

__all__ = ["REF_KEY", "ID_KEY", "create_ref", "get_ref", "is_ref", "ref_to_document"]

REF_KEY = "$ref"
ID_KEY = "$id"

_REF_KEYS = frozenset((REF_KEY, ID_KEY))


def create_ref(namespace: Any, obj: Any) -> DBRef | None:
    """
    Create a reference to a document or an id.

    Args:
        namespace: Name of the collection the reference points to.
        obj: A document with an ``_id`` field, or an ObjectId.

    Returns:
        The reference, or None if ``obj`` is neither.

    Example:
        ref = create_ref("users", {"_id": user_id, "name": "Alice"})
        assert ref == create_ref("users", user_id)
    """
    if isinstance(obj, Mapping):
        if "_id" in obj:
            return DBRef(str(namespace), obj["_id"])
        return None
    if isinstance(obj, ObjectId):
        return DBRef(str(namespace), obj)
    return None


def is_ref(candidate: Any) -> bool:
    """
    Check whether a value is a reference.

    A DBRef and its document form follow the same rule: the only fields
    are ``$ref`` and ``$id``. References carrying ``$db`` or extra fields
    are not recognised.

    Args:
        candidate: Any value.

    Returns:
        True for a reference with exactly the ``$ref`` and ``$id`` fields.
    """
    if isinstance(candidate, DBRef):
        candidate = candidate.as_doc()
    if isinstance(candidate, Mapping):
        return set(candidate.keys()) == _REF_KEYS
    return False


def ref_to_document(ref: DBRef) -> dict[str, Any]:
    """Return the ``{"$ref", "$id"}`` document form of a reference."""
    return {REF_KEY: ref.collection, ID_KEY: ref.id}


async def get_ref(database: Database, ref: Any) -> dict[str, Any] | None:
    """
    Fetch the document a reference points to.

    Args:
        database: Database the referenced collection lives in.
        ref: A DBRef or a ``{"$ref", "$id"}`` document.

    Returns:
        The referenced document, or None if ``ref`` is not a reference or
        nothing matches it.
    """
    if not is_ref(ref):
        return None

    if isinstance(ref, DBRef):
        ref = ref_to_document(ref)

    collection = database.select_collection(str(ref[REF_KEY]))
    return await collection.find_one({"_id": ref[ID_KEY]})
