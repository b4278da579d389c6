"""Dataset ingestion.

This module converts legacy catalog formats into the JSON dataset shape.
"""
