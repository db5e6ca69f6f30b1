"""Errors that abort a catalog import run"""

from typing import Optional


class KaraokeImportError(Exception):
    """ Base for every fatal import error"""
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class CatalogFormatError(KaraokeImportError):
    """ Raised when the catalog file is missing, unreadable or malformed"""
    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message, details)
        self.file_path = file_path


class SchemaReconcileError(KaraokeImportError):
    """ Raised when the songs collection or its validator cannot be set up"""


class IndexReconcileError(KaraokeImportError):
    """ Raised when listing, dropping or creating indices fails"""


class UpsertError(KaraokeImportError):
    """ Raised when a single song cannot be written"""
    def __init__(self, message: str, song_id: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message, details)
        self.song_id = song_id
