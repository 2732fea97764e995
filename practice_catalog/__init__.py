"""
Practice Catalog.

Normalizes loosely-typed headless-CMS practice records into an immutable
index and serves the catalog's category/preset/free-text filter and its
editorial default layout.
"""

__version__ = "0.1.0"
