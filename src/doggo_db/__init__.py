"""
Doggo DB - embedded document store

A small, single-process document database: named databases of tables of
JSON rows, queried with a filter mapping and persisted as one blob per
database through a pluggable storage backend.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
