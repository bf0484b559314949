#!/usr/bin/env python3
"""
Tests for the reference mapper module.
"""

import pytest

from refsync.bibtex.mapper import (
    derive_short_key,
    author_surname,
    parse_year,
    format_short_cite,
    entry_to_reference,
)
from refsync.models import RawEntry


@pytest.mark.parametrize("key, expected", [
    ("thurston2009", "thurston2009"),
    ("razbuten_2025_12_17", "razbuten2025"),
    ("thurston-2009", "thurston2009"),
    ("a-b_c_d_e", "abc"),
    ("plain", "plain"),
])
def test_derive_short_key(key, expected):
    """Test short key derivation."""
    assert derive_short_key(key) == expected


def test_author_surname():
    """Test surname extraction from author fields."""
    assert author_surname("Doe, Jane") == "Doe"
    assert author_surname("Jane Doe") == "Doe"
    assert author_surname("Thurston, William P.") == "Thurston"
    assert author_surname("Razbuten") == "Razbuten"
    assert author_surname("") == "Unknown"
    assert author_surname("   ") == "Unknown"
    # Only the text before the first comma is considered
    assert author_surname("van der Berg, Anna and Smith, Bo") == "Berg"


def test_parse_year():
    """Test year parsing with fallback."""
    assert parse_year("2020") == 2020
    assert parse_year("n.d.") is None
    assert parse_year("2024a") is None
    assert parse_year("") is None


def test_format_short_cite():
    """Test short citation formatting keeps the raw year text."""
    assert format_short_cite("Doe", "2024a") == "Doe, 2024a"


def test_entry_to_reference():
    """Test conversion of a raw entry to a canonical reference."""
    entry = RawEntry(
        key="doe2020",
        entry_type="article",
        author="Doe, Jane",
        year="2020",
        title="A Study",
        journal="Nature",
    )
    ref = entry_to_reference(entry)

    assert ref.short_key == "doe2020"
    assert ref.author == "Doe, Jane"
    assert ref.year == 2020
    assert ref.title == "A Study"
    assert ref.short_cite == "Doe, 2020"
    assert ref.publisher == "Nature"
    assert ref.booktitle is None
    assert ref.pages is None
    assert ref.url is None


def test_entry_to_reference_prefers_publisher_over_journal():
    """Test that an explicit publisher wins over the journal fallback."""
    entry = RawEntry(key="x_1", entry_type="book", publisher="MIT Press", journal="Nature")
    assert entry_to_reference(entry).publisher == "MIT Press"


def test_entry_to_reference_unparseable_year():
    """Test that an unparseable year becomes 0 without failing."""
    entry = RawEntry(key="anon", entry_type="misc", author="", year="n.d.", title="Untitled")
    ref = entry_to_reference(entry)

    assert ref.year == 0
    assert ref.short_cite == "Unknown, n.d."


def test_parse_year_ascii_only_and_bounded():
    """Test that non-ASCII digits and out-of-range years are rejected."""
    assert parse_year("٢٠٢٠") is None
    assert parse_year("99999999999") is None
    assert parse_year("2147483647") == 2147483647
    assert parse_year("-2147483648") == -2147483648
    assert parse_year("2147483648") is None
