"""
Ingestion layer for the practice catalog.

Key Components:
- build_index: raw CMS practices + categories -> CatalogIndex
- IndexCache: caller-owned memoization keyed by input fingerprint
"""
