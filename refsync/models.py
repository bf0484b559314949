"""Data models for refsync."""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class EntryBlock:
    """A citation block as found in the source text, before field extraction."""
    entry_type: str
    key: str
    fields_block: str


@dataclass(frozen=True)
class RawEntry:
    """Represents a single parsed bibliography entry."""
    key: str
    entry_type: str
    author: str = ""
    year: str = ""
    title: str = ""
    url: Optional[str] = None
    booktitle: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    journal: Optional[str] = None

    @classmethod
    def from_fields(cls, key: str, entry_type: str, fields: Dict[str, str]) -> 'RawEntry':
        """Create a RawEntry from an extracted field mapping."""
        return cls(
            key=key,
            entry_type=entry_type,
            author=fields.get('author', ''),
            year=fields.get('year', ''),
            title=fields.get('title', ''),
            url=fields.get('url'),
            booktitle=fields.get('booktitle'),
            pages=fields.get('pages'),
            publisher=fields.get('publisher'),
            journal=fields.get('journal'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary, leaving out optional fields that are absent."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class CanonicalReference:
    """A reference record as written to the generated module."""
    short_key: str
    author: str
    year: int
    title: str
    short_cite: str
    booktitle: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    url: Optional[str] = None


class SyncResult(BaseModel):
    """Outcome of one synchronization run."""
    entries_synced: int
    message: str
    skipped_entries: int = Field(default=0, description="Entry markers that did not yield an entry")
    defaulted_years: int = Field(default=0, description="Entries whose year could not be parsed")
    duplicate_keys: List[str] = Field(default_factory=list, description="Short keys seen more than once")
    output_path: str = Field(default="", description="Path of the generated module")
