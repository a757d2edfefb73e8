"""Inbound adapters for the document store.

Inbound adapters convert caller input into internal domain objects.

Exports:
    Filter Parser:
        - FilterParser: Converts filter mappings into clause lists
        - parse_filter: Shorthand for FilterParser().parse()
"""

from doggo_db.adapters.inbound.filter_parser import FilterParser, parse_filter

__all__ = [
    "FilterParser",
    "parse_filter",
]
