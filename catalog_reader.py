"""
- Read the semicolon-delimited karafun catalog
- Coerce each column to its type, falling back to zero values
- Build Song records in file order
"""

import csv
import logging
import re
from datetime import date, datetime
from typing import List

import pandas as pd

import config
from exceptions import CatalogFormatError
from models import Song, ZERO_DATE

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_PATTERN  = re.compile(r"[+-]?[0-9]+")
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_BOOL_VALUES  = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}


def parse_int(value: str) -> int:
    """Signed decimal integer, or 0 when the text is not one"""
    if not _INT_PATTERN.fullmatch(value):
        return 0
    number = int(value)
    if number < INT64_MIN or number > INT64_MAX:
        return 0
    return number


def parse_bool(value: str) -> bool:
    """Only the literal forms in _BOOL_VALUES are understood; anything else is False"""
    return _BOOL_VALUES.get(value, False)


def parse_date(value: str) -> date:
    """YYYY-MM-DD, or ZERO_DATE when the text is not a real calendar date"""
    if not _DATE_PATTERN.fullmatch(value):
        return ZERO_DATE
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return ZERO_DATE


def split_list(value: str) -> List[str]:
    # "" -> [""], kept as-is
    return value.split(config.LIST_SEPARATOR)


class CatalogReader:
    def __init__(self, file_path: str, delimiter: str = config.CATALOG_DELIMITER):
        self.file_path  = file_path
        self.delimiter  = delimiter

    def read_songs(self) -> List[Song]:
        """
        Parse every data row of the catalog into a Song.

        Returns:
            Songs in file order (header row skipped)

        Raises:
            CatalogFormatError: if the file cannot be read, a quoted field is
                not closed right before a delimiter, or a row does not have
                exactly one value per column
        """
        self._check_structure()
        df = self._load_table()

        songs = [self._build_song(record) for record in df.to_dict(orient="records")]

        logger.info(f"Read {len(songs)} songs from {self.file_path}")
        return songs

    def _check_structure(self) -> None:
        """
        Walk the raw file once before loading it.

        The strict csv dialect rejects text after a closing quote
        ('"Weird Al" Yankovic') and unterminated quotes, which pandas would
        otherwise rewrite. Every record, header included, must have exactly
        len(CATALOG_COLUMNS) fields. Blank lines are skipped.
        """
        expected = len(config.CATALOG_COLUMNS)
        records = 0
        try:
            with open(self.file_path, encoding="utf-8", newline="") as handle:
                reader = csv.reader(handle, delimiter=self.delimiter, strict=True)
                for row in reader:
                    if not row:
                        continue
                    records += 1
                    if len(row) != expected:
                        raise CatalogFormatError(
                            "Wrong number of columns in catalog file",
                            self.file_path,
                            f"line {reader.line_num}: expected {expected}, got {len(row)}"
                        )
        except csv.Error as e:
            raise CatalogFormatError("Error parsing catalog file", self.file_path, str(e)) from e
        except FileNotFoundError as e:
            raise CatalogFormatError("Catalog file not found", self.file_path, str(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogFormatError("Error reading catalog file", self.file_path, str(e)) from e

        if records == 0:
            raise CatalogFormatError("Catalog file is empty", self.file_path)

    def _load_table(self) -> pd.DataFrame:
        """ Load the checked catalog as strings, header row dropped"""
        try:
            df = pd.read_csv(
                self.file_path,
                sep             = self.delimiter,
                header          = None,
                names           = config.CATALOG_COLUMNS,
                dtype           = str,
                keep_default_na = False,
                encoding        = "utf-8"
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise CatalogFormatError("Error parsing catalog file", self.file_path, str(e)) from e

        return df.iloc[1:]

    @staticmethod
    def _build_song(record: dict) -> Song:
        return Song(
            id          = parse_int(record["id"]),
            title       = record["title"],
            artist      = record["artist"],
            year        = parse_int(record["year"]),
            duo         = parse_bool(record["duo"]),
            explicit    = parse_bool(record["explicit"]),
            date_added  = parse_date(record["date_added"]),
            styles      = split_list(record["styles"]),
            languages   = split_list(record["languages"])
        )
