"""Mapping of raw bibliography entries to canonical references."""

import logging
from typing import Optional

from refsync.constants import YEAR_RE, YEAR_MIN, YEAR_MAX, UNKNOWN_AUTHOR
from refsync.models import RawEntry, CanonicalReference

logger = logging.getLogger(__name__)


def derive_short_key(key: str) -> str:
    """
    Shorten a citation key for use in the generated module.

    Hyphens are removed and at most the first two underscore-separated
    segments are kept, e.g. "razbuten_2025_12_17" -> "razbuten2025".
    """
    return "".join(key.replace("-", "").split("_")[:2])


def author_surname(author: str) -> str:
    """Return the surname of the first listed author, or "Unknown"."""
    tokens = author.split(",")[0].split()
    return tokens[-1] if tokens else UNKNOWN_AUTHOR


def parse_year(year: str) -> Optional[int]:
    """Parse a year string, returning None unless it is a 32-bit integer."""
    if not YEAR_RE.fullmatch(year):
        return None
    value = int(year)
    if not YEAR_MIN <= value <= YEAR_MAX:
        return None
    return value


def format_short_cite(surname: str, year: str) -> str:
    """Format the "surname, year" citation using the unparsed year text."""
    return f"{surname}, {year}"


def entry_to_reference(entry: RawEntry) -> CanonicalReference:
    """
    Convert a raw entry into its canonical reference form.

    Args:
        entry: Parsed bibliography entry

    Returns:
        CanonicalReference keyed by the derived short key
    """
    year = parse_year(entry.year)
    if year is None:
        logger.warning(f"Entry '{entry.key}' has unparseable year '{entry.year}', using 0")
        year = 0

    return CanonicalReference(
        short_key=derive_short_key(entry.key),
        author=entry.author,
        year=year,
        title=entry.title,
        short_cite=format_short_cite(author_surname(entry.author), entry.year),
        booktitle=entry.booktitle,
        pages=entry.pages,
        publisher=entry.publisher if entry.publisher is not None else entry.journal,
        url=entry.url,
    )
