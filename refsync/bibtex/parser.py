"""
BibTeX parsing module.

This module turns raw bibliography text into RawEntry records:
- Locating entry blocks (`@type{key, ...}`) in source order
- Scanning `name = {value}` / `name = "value"` fields with brace-depth tracking
- Normalizing recognized field values
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from refsync.constants import ENTRY_START_RE, FIELD_NAME_RE, BARE_VALUE_RE, KNOWN_FIELDS
from refsync.models import EntryBlock, RawEntry

logger = logging.getLogger(__name__)


def iter_entry_blocks(content: str) -> Iterator[EntryBlock]:
    """
    Yield the entry blocks found in bibliography text, in source order.

    A block starts at `@<word>{` and runs until the next such marker or the end
    of the text. Blocks without a comma-terminated, non-empty key are skipped.

    Args:
        content: Full bibliography text

    Yields:
        EntryBlock for each recognizable entry
    """
    markers = list(ENTRY_START_RE.finditer(content))
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(content)
        body = content[marker.end():end]

        comma = body.find(',')
        if comma == -1:
            logger.debug(f"Skipping entry at offset {marker.start()}: no key terminator")
            continue

        key = body[:comma].strip()
        if not key:
            logger.debug(f"Skipping entry at offset {marker.start()}: empty key")
            continue

        yield EntryBlock(
            entry_type=marker.group(1).lower(),
            key=key,
            fields_block=body[comma + 1:],
        )


def count_entry_markers(content: str) -> int:
    """Count `@<word>{` markers, whether or not they form a valid entry."""
    return sum(1 for _ in ENTRY_START_RE.finditer(content))


def _scan_braced(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """Read a `{...}` value starting at the opening brace. Returns (value, end) or None."""
    depth = 0
    for i in range(pos, len(text)):
        ch = text[i]
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return text[pos + 1:i], i + 1
    return None


def _scan_quoted(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """Read a `"..."` value starting at the opening quote. Returns (value, end) or None."""
    depth = 0
    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth = max(depth - 1, 0)
        elif ch == '"' and depth == 0:
            return text[pos + 1:i], i + 1
        i += 1
    return None


def _scan_value(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """Read a field value of any supported form starting at pos."""
    if pos >= len(text):
        return None
    if text[pos] == '{':
        return _scan_braced(text, pos)
    if text[pos] == '"':
        return _scan_quoted(text, pos)
    match = BARE_VALUE_RE.match(text, pos)
    if match:
        return match.group(0), match.end()
    return None


def normalize_field(name: str, value: str) -> str:
    """Apply per-field normalization to a raw field value."""
    value = value.strip()
    if name == "pages":
        value = value.replace("--", "-")
    return value


def extract_fields(fields_block: str) -> Dict[str, str]:
    """
    Extract recognized fields from an entry's field block.

    Args:
        fields_block: Text following the entry key

    Returns:
        Dictionary of lower-cased field name to normalized value
    """
    fields: Dict[str, str] = {}
    pos = 0

    while pos < len(fields_block):
        match = FIELD_NAME_RE.match(fields_block, pos)
        if not match:
            # Not a field here; resume after the next separator
            comma = fields_block.find(',', pos)
            if comma == -1:
                break
            pos = comma + 1
            continue

        name = match.group(1).lower()
        start = match.end()
        scanned = _scan_value(fields_block, start)
        if scanned is None:
            if start < len(fields_block) and fields_block[start] in '{"':
                logger.debug(f"Unterminated value for field '{name}', ignoring rest of block")
                break
            # Empty or missing value; skip this field only
            logger.debug(f"Missing value for field '{name}', skipping field")
            comma = fields_block.find(',', start)
            if comma == -1:
                break
            pos = comma + 1
            continue

        value, pos = scanned
        if name in KNOWN_FIELDS:
            fields[name] = normalize_field(name, value)

    return fields


def parse_bibtex(content: str) -> List[RawEntry]:
    """
    Parse bibliography text into raw entries.

    Args:
        content: Full bibliography text

    Returns:
        List of RawEntry in the order they appear in the text
    """
    entries = []
    for block in iter_entry_blocks(content):
        fields = extract_fields(block.fields_block)
        entries.append(RawEntry.from_fields(block.key, block.entry_type, fields))
    logger.debug(f"Parsed {len(entries)} entries")
    return entries
