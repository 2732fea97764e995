"""
Search layer: the filter engine and the editorial default layout.
"""
