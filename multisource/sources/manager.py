"""
Ordered source-list management.

The list holds caller objects by reference. Membership is identity based:
two equal but distinct dicts are two different sources.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional

from multisource.errors import UnknownSourceError
from multisource.sources.protocols import Source
from multisource.sources.registry import as_source

logger = logging.getLogger(__name__)


class SourceList:
    """
    Ordered collection of delegation sources.

    Order is the only precedence signal: during a read the last matching
    source wins.

    ``items`` is the live backing list. Mutating it directly bypasses the
    identity check of ``add`` and can introduce duplicates.

    The same holds for the constructor: a list passed in is adopted
    without an identity check, so ``SourceList([a, a])`` holds ``a`` twice.
    """

    def __init__(self, sources: Optional[Iterable[Any]] = None):
        # a caller's list is adopted as-is so it stays the live list
        if sources is None:
            sources = []
        elif not isinstance(sources, list):
            sources = list(sources)
        self._items: List[Any] = sources

    @property
    def items(self) -> List[Any]:
        """The live ordered list of source objects."""
        return self._items

    def index_of(self, source: Any) -> int:
        """Return the position of ``source`` by identity, or -1."""
        for i, item in enumerate(self._items):
            if item is source:
                return i
        return -1

    def contains(self, source: Any) -> bool:
        """Identity membership test, one level deep."""
        return self.index_of(source) != -1

    def add(self, source: Any, put_upfront: bool = False) -> bool:
        """
        Add a source unless it is already present.

        Args:
            source: Object to delegate to
            put_upfront: Insert at the front (lowest read precedence)
                instead of the back (highest read precedence)

        Returns:
            True if the source was added, False if it was already present
        """
        if self.contains(source):
            return False

        if put_upfront:
            self._items.insert(0, source)
        else:
            self._items.append(source)
        logger.debug(
            f"SourceList: added {type(source).__name__} at "
            f"{'front' if put_upfront else 'back'} ({len(self._items)} sources)"
        )
        return True

    def remove(self, source: Any, silent: bool = True) -> bool:
        """
        Remove the first identity match.

        Args:
            source: Object to remove
            silent: Return False instead of raising when absent

        Returns:
            True if a source was removed

        Raises:
            UnknownSourceError: If absent and silent is False
        """
        index = self.index_of(source)
        if index == -1:
            if not silent:
                raise UnknownSourceError(source)
            return False

        del self._items[index]
        logger.debug(f"SourceList: removed {type(source).__name__} ({len(self._items)} sources)")
        return True

    def adapted(self) -> Iterator[Source]:
        """Iterate the sources in order, each exposed through its adapter."""
        for item in self._items:
            yield as_source(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)
