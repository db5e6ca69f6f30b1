"""
MongoDB connection manager

- Creates a single instance of MongoDB connection for the import run
- Server selection never waits longer than the run deadline
"""

from typing import Optional
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, ConfigurationError
from pymongo.database import Database
import logging

from config import ImportSettings
from database import db_config


logger = logging.getLogger(__name__)

class MongoDBConnection:
    """
    Singleton MongoDB connection manager

    client: MongoClient instance
    db: karaoke database instance
    """
    _instance   : Optional['MongoDBConnection'] = None
    _client     : Optional[MongoClient]         = None
    _db         : Optional[Database]            = None
    _settings   : Optional[ImportSettings]      = None

    def __new__(cls, settings: Optional[ImportSettings] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)

        return cls._instance

    def __init__(self, settings: Optional[ImportSettings] = None):
        """ Initialize connection"""
        if self._settings is None:
            MongoDBConnection._settings = settings or ImportSettings.from_env()
        if self._client is None:
            self._connect()

    def _connect(self) -> None:
        """
        Establish connection to MongoDB

        Raises:
            ConnectionFailure: if cannot connect to MongoDB
            ConfigurationError: If connection string is invalid
        """
        settings = self._settings
        try:
            deadline_ms = int(settings.timeout_seconds * 1000)

            client = MongoClient(
                settings.mongo_uri,
                maxPoolSize              = db_config.maxPoolSize,
                minPoolSize              = db_config.minPoolSize,
                maxIdleTimeMS            = db_config.maxIdleTimeMS,
                serverSelectionTimeoutMS = min(db_config.serverSelectionTimeoutMS, deadline_ms),
                connectTimeoutMS         = db_config.connectTimeoutMS,
                socketTimeoutMS          = db_config.socketTimeoutMS
            )
            # Test connection
            client.admin.command('ping')

            MongoDBConnection._client = client
            MongoDBConnection._db = client[settings.database_name]
            logger.info(f"Connected to MongoDB ({settings.mongo_uri}), database '{settings.database_name}'")

        except ConnectionFailure as e:
            logger.error(f"Error connecting to MongoDB ({settings.mongo_uri}): {e}")
            raise
        except ConfigurationError as e:
            logger.error(f"Invalid MongoDB URI ({settings.mongo_uri}): {e}")
            raise

    @property
    def client(self) -> MongoClient:
        """ Get instance"""
        if self._client is None:
            self._connect()
        return self._client

    @property
    def db(self) -> Database:
        """ Get Database instance"""
        if self._db is None:
            self._connect()
        return self._db

    def close(self) -> None:
        """ Close Connection"""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
            MongoDBConnection._client = None
            MongoDBConnection._db = None
            MongoDBConnection._settings = None


def get_database(settings: Optional[ImportSettings] = None) -> Database:
    """
    get an instance of the karaoke database.

    Returns:
        Database: PyMongo Database object

    Example:
        >>> db = get_database()
        >>> db.songs.count_documents({})
        Output: 41872
    """
    return MongoDBConnection(settings).db

def close_connection() -> None:
    """ Close MongoDB connection (call when the run ends)"""
    if MongoDBConnection._instance is not None:
        MongoDBConnection._instance.close()
