"""Dataset storage and access layer.

This module holds the in-memory catalog accessor, search filtering,
version stamping, and JSON dataset file helpers.
"""
