"""
Normalization module for CMS practice data.

This package contains:
- strapi.py: envelope unwrapping for records and relations
- text.py: case/accent/whitespace folding
- media.py: media kinds and thumbnail selection
- categories.py: category catalog merge, labels and counts
- cards.py: metadata card resolution and KPI selection
- classifiers.py: duration, difficulty, video and featured heuristics
"""
