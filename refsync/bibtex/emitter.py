"""
Generated module emitter.

Renders canonical references as the TypeScript data module consumed by the
site. Output is deterministic so unchanged input yields identical text.
"""

import logging
from typing import List

from refsync.constants import IDENTIFIER_RE, OPTIONAL_REFERENCE_FIELDS
from refsync.models import CanonicalReference

logger = logging.getLogger(__name__)

MODULE_HEADER = """// Auto-generated from references.bib
// Run: refsync sync
// Do NOT edit manually - edit references.bib instead

export interface Reference {
    author: string;
    year: number;
    title: string;
    shortCite: string;
    booktitle?: string;
    pages?: string;
    publisher?: string;
    url?: string;
}

export const references: Record<string, Reference> = {
"""

MODULE_FOOTER = "};\n"

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def ts_string(value: str) -> str:
    """Quote a value as a TypeScript string literal."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def ts_property_name(key: str) -> str:
    """Return key as a bare property name when it is a valid identifier, quoted otherwise."""
    return key if IDENTIFIER_RE.match(key) else ts_string(key)


def render_reference(ref: CanonicalReference) -> str:
    """Render a single record of the references mapping."""
    lines = [
        f"        author: {ts_string(ref.author)}",
        f"        year: {ref.year}",
        f"        title: {ts_string(ref.title)}",
        f"        shortCite: {ts_string(ref.short_cite)}",
    ]
    for name in OPTIONAL_REFERENCE_FIELDS:
        value = getattr(ref, name)
        if value is not None:
            lines.append(f"        {name}: {ts_string(value)}")

    return f"    {ts_property_name(ref.short_key)}: {{\n" + ",\n".join(lines) + "\n    },\n"


def generate_references_ts(references: List[CanonicalReference]) -> str:
    """
    Generate the full text of the references module.

    Args:
        references: Canonical references in the order they should appear

    Returns:
        TypeScript source text
    """
    parts = [MODULE_HEADER]
    for ref in references:
        parts.append(render_reference(ref))
    parts.append(MODULE_FOOTER)
    logger.debug(f"Rendered {len(references)} references")
    return "".join(parts)
