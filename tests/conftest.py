"""
Mocking:
1. database (MagicMock and a small in-memory stand-in)
2. catalog files on disk
3. import settings
"""
import sys
import os

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)


import pytest
from unittest.mock import MagicMock, Mock
from bson import ObjectId

from config import ImportSettings

CATALOG_HEADER = "Id;Title;Artist;Year;Duo;Explicit;Date Added;Styles;Languages"


class FakeCollection:
    """Just enough of pymongo's Collection for upserts and index reconciliation"""
    def __init__(self):
        self.documents  = []
        self.indexes    = {"_id_": {"key": {"_id": 1}}}

    def update_one(self, filter, update, upsert=False):
        for doc in self.documents:
            if all(doc.get(k) == v for k, v in filter.items()):
                doc.update(update["$set"])
                return Mock(matched_count=1, upserted_id=None)

        if not upsert:
            return Mock(matched_count=0, upserted_id=None)

        doc = dict(filter)
        doc.update(update["$set"])
        doc["_id"] = ObjectId()
        self.documents.append(doc)
        return Mock(matched_count=0, upserted_id=doc["_id"])

    def count_documents(self, filter):
        return len(self.documents)

    def list_indexes(self):
        return [{"name": name, **spec} for name, spec in self.indexes.items()]

    def drop_index(self, name):
        del self.indexes[name]

    def create_indexes(self, indexes):
        names = []
        for index in indexes:
            document = index.document
            self.indexes.setdefault(document["name"], {"key": dict(document["key"])})
            names.append(document["name"])
        return names


class FakeDatabase:
    """Just enough of pymongo's Database for collection/validator reconciliation"""
    def __init__(self):
        self.collections        = {}
        self.validators         = {}
        self.validation_levels  = {}
        self.commands           = []

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())

    def list_collection_names(self):
        return list(self.collections)

    def create_collection(self, name, validator=None):
        self.validators[name] = validator
        return self[name]

    def command(self, command):
        self.commands.append(command)
        name = command["collMod"]
        self.validators[name] = command["validator"]
        self.validation_levels[name] = command["validationLevel"]
        return {"ok": 1.0}


@pytest.fixture
def mock_db():
    """Returns a mock MongoDB object"""
    db = MagicMock()
    return db


@pytest.fixture
def fake_db():
    """Returns an in-memory database that remembers writes"""
    return FakeDatabase()


@pytest.fixture
def write_catalog(tmp_path):
    """Write catalog rows (header added) to a temp file and return its path"""
    def _write(*rows, header=CATALOG_HEADER, name="catalog.csv"):
        path = tmp_path / name
        lines = [header, *rows] if header is not None else list(rows)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_catalog(write_catalog):
    return write_catalog(
        "42;Bohemian Rhapsody;Queen;1975;false;false;2020-01-15;Rock,Opera;English",
        "7;Shallow;Lady Gaga & Bradley Cooper;2018;true;false;2018-10-05;Pop;English",
        "1001;Despacito;Luis Fonsi;2017;false;false;2017-02-01;Latin,Pop;Spanish,English",
    )


@pytest.fixture
def settings_for():
    def _settings(file_path):
        return ImportSettings(
            mongo_uri       = "mongodb://localhost:27017",
            database_name   = "karaoke-test",
            collection_name = "songs",
            file_path       = file_path,
            timeout_seconds = 5.0
        )
    return _settings
