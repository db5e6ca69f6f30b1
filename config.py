"""
Catalog import settings

- Fixed names for the karaoke database, collection and input file
- $jsonSchema validator for the songs collection
- Desired index layout for the songs collection
"""

import os
from dataclasses import dataclass

from pymongo import ASCENDING, IndexModel

KARAOKE_DB              = "karaoke-db"
SONGS_COLLECTION        = "songs"
KARAOKE_FILE_PATH       = "./data/karafuncatalog.csv"
MONGO_URI               = "mongodb://localhost:27017"
MONGO_TIMEOUT_SECONDS   = 30.0

# Catalog layout (positional)
CATALOG_DELIMITER   = ";"
CATALOG_COLUMNS     = [
                        'id',
                        'title',
                        'artist',
                        'year',
                        'duo',
                        'explicit',
                        'date_added',
                        'styles',
                        'languages'
]
LIST_SEPARATOR      = ","

SONGS_SCHEMA = {
    "bsonType": "object",
    "required": ["id", "title", "artist"],
    "properties": {
        "id": {
            "bsonType": "int",
            "description": "the unique identifier for a song in karafun catalog",
        },
        "title": {
            "bsonType": "string",
            "description": "the title of the song",
        },
        "artist": {
            "bsonType": "string",
            "description": "the artist of the song",
        },
        "year": {
            "bsonType": "int",
            "description": "the year the song was released",
        },
        "duo": {
            "bsonType": "bool",
            "description": "whether the song is a duet",
        },
        "explicit": {
            "bsonType": "bool",
            "description": "whether the song is explicit",
        },
        "dateAdded": {
            "bsonType": "date",
            "description": "the date the song was added to the catalog",
        },
        "styles": {
            "bsonType": "array",
            "description": "the styles of the song",
            "items": {"bsonType": "string"},
        },
        "languages": {
            "bsonType": "array",
            "description": "the languages of the song",
            "items": {"bsonType": "string"},
        },
    },
}

SONGS_INDICES = [
    IndexModel([("id", ASCENDING)], unique=True),
    IndexModel([("title", ASCENDING), ("artist", ASCENDING), ("year", ASCENDING)], unique=True),
    IndexModel([("title", ASCENDING)]),
    IndexModel([("artist", ASCENDING)]),
]


@dataclass(frozen=True)
class ImportSettings:
    """
    Everything one import run needs to know about its surroundings.

    Defaults come from the module constants; tests build their own instance.
    """
    mongo_uri       : str   = MONGO_URI
    database_name   : str   = KARAOKE_DB
    collection_name : str   = SONGS_COLLECTION
    file_path       : str   = KARAOKE_FILE_PATH
    timeout_seconds : float = MONGO_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "ImportSettings":
        """Build settings from the defaults, letting the environment override them"""
        return cls(
            mongo_uri       = os.getenv("MONGODB_URL", MONGO_URI),
            database_name   = os.getenv("MONGODB_DATABASE", KARAOKE_DB),
            collection_name = os.getenv("KARAOKE_COLLECTION", SONGS_COLLECTION),
            file_path       = os.getenv("KARAOKE_FILE_PATH", KARAOKE_FILE_PATH),
            timeout_seconds = float(os.getenv("MONGO_TIMEOUT_SECONDS", MONGO_TIMEOUT_SECONDS)),
        )
