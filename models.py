"""
Pydantic model for one karaoke catalog entry

"""

from datetime import date, datetime, time
from typing import List

from pydantic import BaseModel, ConfigDict, Field

# Zero value for a missing/unparseable date added
ZERO_DATE = date.min


class Song(BaseModel):
    """Single catalog row after coercion"""
    model_config = ConfigDict(populate_by_name=True)

    id          : int
    title       : str
    artist      : str
    year        : int        = 0
    duo         : bool       = False
    explicit    : bool       = False
    date_added  : date       = Field(ZERO_DATE, alias="dateAdded")
    styles      : List[str]  = Field(default_factory=list)
    languages   : List[str]  = Field(default_factory=list)

    def to_document(self) -> dict:
        """
        MongoDB document for this song.

        BSON has no plain date type, so dateAdded is stored as midnight UTC.
        """
        doc = self.model_dump(by_alias=True)
        doc["dateAdded"] = datetime.combine(self.date_added, time.min)
        return doc
