"""
Introspection helpers built on top of enumeration.

All helpers look one level deep: a nested composite counts as a single
source, but its enumeration is already flattened into the parent's
``keys()``.
"""

from collections import Counter
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from multisource.core.composite import Composite


def occurrence_count(composite: "Composite", key: str) -> int:
    """
    Count how many places define ``key``.

    Args:
        composite: The composite to inspect
        key: Property name

    Returns:
        1 for own storage plus 1 for every source that has the key
    """
    count = 1 if composite.has_own(key) else 0
    for source in composite.iter_sources():
        if source.has(key):
            count += 1
    return count


def _name_counts(composite: "Composite") -> Counter:
    return Counter(composite.keys())


def duplicate_names(composite: "Composite") -> List[str]:
    """Names enumerated two or more times, each listed once."""
    counts = _name_counts(composite)
    return [name for name, count in counts.items() if count >= 2]


def unique_names(composite: "Composite") -> List[str]:
    """Names enumerated exactly once."""
    counts = _name_counts(composite)
    return [name for name, count in counts.items() if count == 1]


def immediate_sources(composite: "Composite") -> List[Any]:
    """
    Return the live ordered source list.

    This is the composite's own list, not a copy. Appending to it directly
    skips the identity check of ``add_source``.
    """
    return composite.source_list.items
