"""
Schemas for the practice catalog.

This package contains:
- practice.py: pydantic models for categories, cards, normalized practices,
  filter state and the index snapshot
- labels.py: localized UI labels
"""
