import pytest

import config
from config import ImportSettings


class TestImportSettings:

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        for name in ("MONGODB_URL", "MONGODB_DATABASE", "KARAOKE_COLLECTION",
                     "KARAOKE_FILE_PATH", "MONGO_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = ImportSettings.from_env()

        assert settings == ImportSettings()
        assert settings.mongo_uri == "mongodb://localhost:27017"
        assert settings.database_name == "karaoke-db"
        assert settings.collection_name == "songs"
        assert settings.file_path == "./data/karafuncatalog.csv"
        assert settings.timeout_seconds == 30.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URL", "mongodb://mongo:27017")
        monkeypatch.setenv("MONGODB_DATABASE", "karaoke-staging")
        monkeypatch.setenv("KARAOKE_COLLECTION", "songs_v2")
        monkeypatch.setenv("KARAOKE_FILE_PATH", "/data/catalog.csv")
        monkeypatch.setenv("MONGO_TIMEOUT_SECONDS", "5")

        settings = ImportSettings.from_env()

        assert settings.mongo_uri == "mongodb://mongo:27017"
        assert settings.database_name == "karaoke-staging"
        assert settings.collection_name == "songs_v2"
        assert settings.file_path == "/data/catalog.csv"
        assert settings.timeout_seconds == 5.0


class TestSongsLayout:

    def test_schema_required_fields(self):
        assert config.SONGS_SCHEMA["required"] == ["id", "title", "artist"]

    def test_schema_field_types(self):
        types = {name: prop["bsonType"] for name, prop in config.SONGS_SCHEMA["properties"].items()}

        assert types == {
            "id"        : "int",
            "title"     : "string",
            "artist"    : "string",
            "year"      : "int",
            "duo"       : "bool",
            "explicit"  : "bool",
            "dateAdded" : "date",
            "styles"    : "array",
            "languages" : "array",
        }

    def test_one_unique_index_per_business_key(self):
        unique = [
            list(index.document["key"]) for index in config.SONGS_INDICES
            if index.document.get("unique")
        ]

        assert unique == [["id"], ["title", "artist", "year"]]

    def test_lookup_indices_are_not_unique(self):
        lookups = [
            list(index.document["key"]) for index in config.SONGS_INDICES
            if not index.document.get("unique")
        ]

        assert lookups == [["title"], ["artist"]]
