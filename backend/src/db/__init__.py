"""
Database row mapping: column name resolution and row scanning.
"""
