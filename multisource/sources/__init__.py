"""
Delegation sources.

A source is any object exposing has/get/keys/delete. Plain mappings and
arbitrary objects are adapted automatically; further adapters can be
registered with @register_adapter.
"""

from multisource.sources.protocols import Source, BaseSource
from multisource.sources.registry import (
    SourceAdapterRegistry,
    register_adapter,
    as_source,
)

# Import adapters to trigger registration
from multisource.sources.adapters import AttributeSource, MappingSource
from multisource.sources.manager import SourceList

__all__ = [
    "Source",
    "BaseSource",
    "SourceAdapterRegistry",
    "register_adapter",
    "as_source",
    "AttributeSource",
    "MappingSource",
    "SourceList",
]
