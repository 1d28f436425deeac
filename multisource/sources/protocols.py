"""
Core protocol definitions for delegation sources.

A source is anything a composite can forward to. The engine needs exactly
four capabilities from it: existence check, read, own-key enumeration and
delete. Writes are never forwarded to a source.
"""

from typing import Protocol, Any, List, runtime_checkable
from abc import ABC, abstractmethod


@runtime_checkable
class Source(Protocol):
    """Structural contract of a delegation source."""

    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Any:
        ...

    def keys(self) -> List[str]:
        ...

    def delete(self, key: str) -> bool:
        ...


class BaseSource(ABC):
    """
    Base class for source adapters.

    Adapters wrap a caller-owned target object. They never copy it, so a
    change made through the adapter is visible to every other holder of
    the target.
    """

    def __init__(self, target: Any):
        self._target = target

    @property
    def target(self) -> Any:
        """The wrapped object."""
        return self._target

    @abstractmethod
    def has(self, key: str) -> bool:
        """
        Check whether the target exposes a key.

        Args:
            key: Property name

        Returns:
            True if a read of ``key`` would succeed
        """
        ...

    @abstractmethod
    def get(self, key: str) -> Any:
        """
        Read a key from the target.

        Args:
            key: Property name

        Returns:
            The stored value
        """
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        """
        List the target's own keys.

        Returns:
            Own property names, inherited names excluded
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a key from the target.

        Args:
            key: Property name

        Returns:
            True if something was removed
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target!r})"
