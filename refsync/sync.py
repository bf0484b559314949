"""
Reference synchronization module.

This module keeps the generated references module in step with the bibliography:
- Lists the raw entries of a bibliography file
- Parses, maps and emits the references module, replacing it atomically
"""

import os
import logging
from typing import List, Dict

from refsync.bibtex.parser import parse_bibtex, count_entry_markers
from refsync.bibtex.mapper import entry_to_reference, parse_year
from refsync.bibtex.emitter import generate_references_ts
from refsync.models import RawEntry, CanonicalReference, SyncResult
from refsync.utils import atomic_write_text

logger = logging.getLogger(__name__)


class ReferenceSyncError(Exception):
    """Raised when a listing or synchronization run cannot complete."""


def _read_bib_text(bib_path: str) -> str:
    if not os.path.isfile(bib_path):
        raise ReferenceSyncError(f"references.bib not found: {bib_path}")

    try:
        with open(bib_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceSyncError(f"Failed to read bib file: {e}") from e

    logger.info(f"Read bibliography from {bib_path}")
    return content


def read_bib_file(bib_path: str) -> List[RawEntry]:
    """
    Parse a bibliography file without writing anything.

    Args:
        bib_path: Path to the bibliography file

    Returns:
        Raw entries in source order

    Raises:
        ReferenceSyncError: If the file is missing or cannot be read
    """
    return parse_bibtex(_read_bib_text(bib_path))


def sync_references(bib_path: str, output_path: str) -> SyncResult:
    """
    Regenerate the references module from the bibliography file.

    Malformed entries are skipped and unparseable years become 0; both are
    counted in the result rather than failing the run.

    Args:
        bib_path: Path to the bibliography file
        output_path: Path of the generated module, replaced on success

    Returns:
        SyncResult describing the run

    Raises:
        ReferenceSyncError: If reading, directory creation or writing fails
    """
    content = _read_bib_text(bib_path)

    entries = parse_bibtex(content)
    skipped = count_entry_markers(content) - len(entries)
    if skipped:
        logger.warning(f"Skipped {skipped} malformed entries in {bib_path}")

    references: Dict[str, CanonicalReference] = {}
    defaulted: Dict[str, bool] = {}
    duplicate_keys: List[str] = []
    for entry in entries:
        ref = entry_to_reference(entry)
        if ref.short_key in references:
            logger.warning(f"Duplicate short key '{ref.short_key}' from '{entry.key}', keeping the later entry")
            if ref.short_key not in duplicate_keys:
                duplicate_keys.append(ref.short_key)
        references[ref.short_key] = ref
        defaulted[ref.short_key] = ref.year == 0 and parse_year(entry.year) is None

    defaulted_years = sum(defaulted.values())

    ts_content = generate_references_ts(list(references.values()))

    parent = os.path.dirname(output_path)
    if parent:
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise ReferenceSyncError(f"Failed to create data directory: {e}") from e

    try:
        atomic_write_text(output_path, ts_content)
    except OSError as e:
        raise ReferenceSyncError(f"Failed to write references.ts: {e}") from e

    logger.info(f"Wrote {len(references)} references to {output_path}")

    return SyncResult(
        entries_synced=len(references),
        message=f"Synced {len(references)} references",
        skipped_entries=skipped,
        defaulted_years=defaulted_years,
        duplicate_keys=duplicate_keys,
        output_path=output_path,
    )
