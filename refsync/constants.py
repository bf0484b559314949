"""Constants for the refsync package."""

import re

# Regular expression patterns
ENTRY_START_RE = re.compile(r'@(\w+)\s*\{')
FIELD_NAME_RE = re.compile(r'[\s,]*(\w+)\s*=\s*')
BARE_VALUE_RE = re.compile(r'[^,}\s]+')
YEAR_RE = re.compile(r'[+-]?[0-9]+')
YEAR_MIN = -2**31
YEAR_MAX = 2**31 - 1
IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Fields kept from each entry; anything else is parsed and discarded
KNOWN_FIELDS = (
    "author", "year", "title", "url", "booktitle", "pages", "publisher", "journal"
)
OPTIONAL_REFERENCE_FIELDS = ("booktitle", "pages", "publisher", "url")

UNKNOWN_AUTHOR = "Unknown"

# Default configuration values
DEFAULT_CONFIG_PATH = "~/.config/refsync/config.yaml"
DEFAULT_BIB_PATH = "src/lib/references.bib"
DEFAULT_OUTPUT_PATH = "src/lib/data/references.ts"
DEFAULT_LOG_LEVEL = "INFO"
