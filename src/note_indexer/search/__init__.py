"""
Tag/date indexing package.

This package provides the in-memory index stack:
- inverted_index: key -> postings mapping with key normalization
- column_formatter: column-aligned token layout for the master index
- renderer: key pages and master index text
- indexer: pipeline wiring extractor, indexes, renderer and repository
"""
