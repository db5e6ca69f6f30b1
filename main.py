"""
Docstring for karaoke-import.main

1. Load Data (semicolon CSV)
2. Connect to MongoDB (single deadline for the whole run)
3. Reconcile collection schema
4. Reconcile indices
5. Upsert every song
6. Report inserted / updated totals
"""

import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

import pymongo
from pymongo.database import Database
from pymongo.errors import PyMongoError

import config
from catalog_reader import CatalogReader
from config import ImportSettings
from database.adapter import SongAdapter
from database.connection import close_connection, get_database
from database.schema import ensure_songs_collection, ensure_songs_indices
from exceptions import KaraokeImportError
from models import Song

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    inserted: int = 0
    updated: int = 0


class CatalogImport:
    def __init__(
            self,
            settings: Optional[ImportSettings] = None,
            db: Optional[Database] = None
            ):
        """
        Initialize the import

        Args:
            settings: names, file path and deadline for this run
            db: database to import into (connects from settings if omitted)
        """
        self.settings = settings or ImportSettings.from_env()
        self.db = db

    def run(self) -> ImportSummary:
        """
        Read the catalog, reconcile the collection and upsert every song.

        The file is parsed before the store is touched, so a bad catalog
        never reaches MongoDB. Every store call afterwards shares one deadline.

        Raises:
            KaraokeImportError: on the first unrecoverable error
        """
        songs = CatalogReader(self.settings.file_path).read_songs()

        with pymongo.timeout(self.settings.timeout_seconds):
            if self.db is None:
                self.db = get_database(self.settings)

            ensure_songs_collection(self.db, self.settings.collection_name, config.SONGS_SCHEMA)
            ensure_songs_indices(self.db, self.settings.collection_name, config.SONGS_INDICES)

            summary = self.import_songs(songs)
            total = SongAdapter(self.db, self.settings.collection_name).count_songs()

        logger.info(
            f"Import complete: inserted {summary.inserted} songs "
            f"and updated {summary.updated} songs!"
        )
        logger.info(f"Collection '{self.settings.collection_name}' now holds {total} songs")
        return summary

    def import_songs(self, songs: List[Song]) -> ImportSummary:
        """ Upsert songs one at a time; stops at the first failure"""
        adapter = SongAdapter(self.db, self.settings.collection_name)

        inserted = 0
        for song in songs:
            logger.info(f'Upserting song ({song.id}): "{song.title}" by {song.artist}')
            if adapter.upsert_song(song):
                inserted += 1

        return ImportSummary(inserted=inserted, updated=len(songs) - inserted)


def main() -> int:
    # LOGGING CONFIG
    logging.basicConfig(
        level       = logging.INFO,
        format      = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers    =[
                logging.FileHandler('import.log'),
                logging.StreamHandler(sys.stdout)
        ]
    )

    try:
        CatalogImport(ImportSettings.from_env()).run()
    except (KaraokeImportError, PyMongoError) as e:
        logger.error(f"Import failed: {e}")
        return 1
    finally:
        close_connection()

    return 0


if __name__ == '__main__':
    sys.exit(main())
