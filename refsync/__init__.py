"""
refsync: keep a static site's generated reference data in step with its
BibTeX bibliography.
"""

__version__ = "0.1.0"
