"""
Adapter to write parsed catalog songs into the MongoDB songs collection
"""

from typing import Optional
from pymongo.database import Database
from pymongo.errors import PyMongoError
import logging

from database.connection import get_database
from exceptions import UpsertError
from models import Song
import config

logger = logging.getLogger(__name__)

class SongAdapter:
    """
    Convert Song records -> MongoDB documents, one upsert per song

    """
    def __init__(self, db: Optional[Database] = None, collection_name: str = config.SONGS_COLLECTION):
        """
        Initialize adapter w/ MongoDB
        """
        self.db = db if db is not None else get_database()
        self.collection = self.db[collection_name]

    def upsert_song(self, song: Song) -> bool:
        """
        Replace the fields of the song with the same id, or insert it.

        Args:
            song: parsed catalog song

        Returns:
            True if a new document was inserted, False if an existing one was updated

        Raises:
            UpsertError: on any store error

        Example:
            >>> adapter = SongAdapter()
            >>> adapter.upsert_song(song)   # first import
            True
            >>> adapter.upsert_song(song)   # re-import
            False
        """
        try:
            result = self.collection.update_one(
                {
                    "id": song.id
                },
                {
                    "$set": song.to_document()
                },
                upsert=True
            )
        except PyMongoError as e:
            raise UpsertError(f"Error inserting song ({song.id})", song.id, str(e)) from e

        return result.upserted_id is not None

    def count_songs(self) -> int:
        """ Number of documents in the songs collection"""
        return self.collection.count_documents({})
