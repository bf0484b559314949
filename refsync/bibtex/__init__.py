"""
BibTeX package for refsync.

This package provides the parse/map/emit core:
- Extracting entries and fields from bibliography text
- Mapping raw entries to canonical references
- Emitting the generated TypeScript references module
"""

__all__ = ['parser', 'mapper', 'emitter']
