from typing import List, Optional
from pydantic import BaseModel, Field


class PaperRecord(BaseModel):
    """
    One paper as stored in the search index.

    Mirrors the document shape written by the ingestion pipeline:
    {id, title, year, venue, authors[], ee_link?}
    """

    id: int
    title: str
    year: int
    venue: str
    authors: List[str] = Field(default_factory=list)
    ee_link: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }
