"""Jotter — tag-annotated memos stored as markdown files."""

__version__ = "0.1.0"
