"""
multisource core module.

Contains the Composite resolution engine and its introspection helpers.
"""

from multisource.core import introspection
from multisource.core.composite import Composite, construct_composite
from multisource.core.introspection import (
    occurrence_count,
    duplicate_names,
    unique_names,
    immediate_sources,
)

__all__ = [
    "Composite",
    "construct_composite",
    "introspection",
    "occurrence_count",
    "duplicate_names",
    "unique_names",
    "immediate_sources",
]
