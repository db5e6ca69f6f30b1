"""
Songs collection reconciliation

Brings the collection, its $jsonSchema validator and its secondary indices
to the layout declared in config.py. Safe to run on every import:
- Missing collection  -> created with the validator
- Existing collection -> validator replaced via collMod (validationLevel: moderate)
- Obsolete indices    -> dropped
- Desired indices     -> (re)issued, the server skips identical ones
"""

from typing import Dict, List
from pymongo import IndexModel
from pymongo.database import Database
from pymongo.errors import PyMongoError
import logging

from exceptions import SchemaReconcileError, IndexReconcileError

logger = logging.getLogger(__name__)

# Built-in primary key index, never dropped
ID_INDEX_NAME = "_id_"


def ensure_songs_collection(db: Database, collection_name: str, schema: Dict) -> None:
    """
    Make sure the collection exists and enforces the schema

    Raises:
        SchemaReconcileError: if listing, creating or modifying fails
    """
    try:
        existing = db.list_collection_names()
    except PyMongoError as e:
        raise SchemaReconcileError("Error listing collections", str(e)) from e

    if collection_name in existing:
        ensure_songs_schema(db, collection_name, schema)
        return

    try:
        db.create_collection(collection_name, validator={"$jsonSchema": schema})
    except PyMongoError as e:
        raise SchemaReconcileError("Error creating collection", str(e)) from e

    logger.info(f"Created collection '{collection_name}' with schema validator")


def ensure_songs_schema(db: Database, collection_name: str, schema: Dict) -> None:
    """
    Replace the validator of an existing collection.

    Moderate validation only checks new writes and updates to documents
    that already pass, so older documents are left alone.
    """
    try:
        db.command({
            "collMod"         : collection_name,
            "validator"       : {"$jsonSchema": schema},
            "validationLevel" : "moderate"
        })
    except PyMongoError as e:
        raise SchemaReconcileError("Error updating schema", str(e)) from e

    logger.info(f"Updated schema validator on '{collection_name}'")


def index_name(index: IndexModel) -> str:
    """
    Name MongoDB gives (or was told to give) an index

    IndexModel always carries a name: the one passed as name=..., or else
    each <field>_<direction> pair joined with "_".

    Example:
        >>> index_name(IndexModel([("title", 1), ("artist", 1)]))
        'title_1_artist_1'
    """
    return index.document["name"]


def ensure_songs_indices(db: Database, collection_name: str, indices: List[IndexModel]) -> List[str]:
    """
    Converge the collection's indices to exactly the desired set.

    Args:
        db: karaoke database
        collection_name: collection to reconcile
        indices: desired indices

    Returns:
        Names of the indices that were dropped

    Raises:
        IndexReconcileError: if listing, dropping or creating fails
    """
    collection = db[collection_name]
    desired = {index_name(index) for index in indices}

    try:
        existing = [index["name"] for index in collection.list_indexes()]
    except PyMongoError as e:
        raise IndexReconcileError("Error retrieving existing indices", str(e)) from e

    dropped = []
    for name in existing:
        if name == ID_INDEX_NAME or name in desired:
            continue
        try:
            collection.drop_index(name)
        except PyMongoError as e:
            raise IndexReconcileError(f"Error dropping index ({name})", str(e)) from e
        logger.info(f"Dropped obsolete index '{name}'")
        dropped.append(name)

    try:
        collection.create_indexes(indices)
    except PyMongoError as e:
        raise IndexReconcileError("Error creating indices", str(e)) from e

    return dropped
