"""
Composite delegation handle.

A Composite combines its own storage with an ordered list of sources and
resolves every read, write, existence check, enumeration and delete
against them, imitating multiple inheritance through composition.

Resolution order:
- Own storage is always consulted first
- Sources are scanned in list order; on a read the last match wins
- Policy flags decide whether duplicates, misses, new keys and source
  deletes are errors

The five mandatory operations are explicit methods: nothing is intercepted
through attribute syntax. A Composite is itself a Source, so composites
nest. Nothing detects a source graph that loops back on itself; such a
graph recurses until RecursionError.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from multisource.config.settings import MultiSourceSettings
from multisource.core import introspection
from multisource.errors import (
    DeletionDisallowedError,
    DuplicatePropertyError,
    MissingPropertyError,
    OverrideDisallowedError,
    UnknownOwnPropertyError,
)
from multisource.operations.registry import OperationCallback, OperationRegistry
from multisource.policy.flags import PolicyFlags
from multisource.sources.manager import SourceList
from multisource.sources.protocols import Source
from multisource.sources.registry import as_source

logger = logging.getLogger(__name__)


class Composite:
    """
    Facade forwarding property access to an ordered list of sources.

    Example:
        ```python
        walker = {"walk": lambda: "walking"}
        swimmer = {"swim": lambda: "swimming"}

        duck = Composite([walker, swimmer])
        duck.get("swim")()            # "swimming"
        duck.set("name", "Donald")    # lands in own storage
        duck.keys()                   # ["name", "walk", "swim"]
        ```

    Writes never reach a source. A write of a key that some source
    defines creates or updates an own key that shadows it; the source
    keeps its value.
    """

    def __init__(
        self,
        sources: Optional[List[Any]] = None,
        allow_duplicates: bool = True,
        error_if_missing: bool = False,
        allow_override: bool = True,
        allow_deletion: bool = False,
    ):
        """
        Args:
            sources: Initial ordered source list, adopted by reference
            allow_duplicates: Reads may resolve keys defined by several sources
            error_if_missing: Reads and writes of unknown keys raise
            allow_override: Writes may create keys nothing defines
            allow_deletion: Deletes may reach into sources
        """
        self._own: Dict[str, Any] = {}
        self._sources = SourceList(sources)
        self._flags = PolicyFlags(
            allow_duplicates=allow_duplicates,
            error_if_missing=error_if_missing,
            allow_override=allow_override,
            allow_deletion=allow_deletion,
        )
        self._operations = OperationRegistry()

    @classmethod
    def from_settings(
        cls,
        sources: Optional[List[Any]] = None,
        settings: Optional[MultiSourceSettings] = None,
    ) -> "Composite":
        """
        Create a composite whose flags come from configuration.

        Args:
            sources: Initial ordered source list
            settings: Settings to read ``defaults`` from (loaded if omitted)
        """
        settings = settings or MultiSourceSettings()
        return cls(sources, **settings.defaults.model_dump())

    # ------------------------------------------------------------------
    # Mandatory operations
    # ------------------------------------------------------------------

    def has(self, key: str) -> bool:
        """True if own storage or any source defines ``key``."""
        if key in self._own:
            return True
        for source in self._sources.adapted():
            if source.has(key):
                return True
        return False

    def get(self, key: str) -> Any:
        """
        Resolve a key.

        Own storage wins outright. Otherwise every source is scanned and the
        last one defining the key supplies the value.

        Returns:
            The resolved value, or None if nothing defines the key

        Raises:
            DuplicatePropertyError: If 2+ sources match and duplicates are disallowed
            MissingPropertyError: If nothing matches and error_if_missing is set
        """
        if key in self._own:
            return self._own[key]

        found = None
        count = 0
        for source in self._sources.adapted():
            if source.has(key):
                found = source.get(key)
                count += 1

        if count > 1 and not self._flags.allow_duplicates:
            logger.debug(f"Composite: '{key}' resolved in {count} sources with duplicates disallowed")
            raise DuplicatePropertyError(key, count)

        if count == 0 and self._flags.error_if_missing:
            raise MissingPropertyError(key)

        return found

    def set(self, key: str, value: Any) -> None:
        """
        Write a key into own storage.

        Raises:
            MissingPropertyError: If nothing defines the key and error_if_missing is set
            OverrideDisallowedError: If nothing defines the key and allow_override is off
        """
        if key in self._own:
            self._own[key] = value
            return

        found = False
        for source in self._sources.adapted():
            if source.has(key):
                # shadows the source; the source itself is left untouched
                self._own[key] = value
                found = True

        if self._flags.error_if_missing and not found:
            raise MissingPropertyError(key, creating=True)
        if found:
            return
        if not self._flags.allow_override:
            raise OverrideDisallowedError(key)

        self._own[key] = value

    def keys(self) -> List[str]:
        """
        Enumerate own keys followed by every source's keys, in list order.

        Names are not deduplicated: a key held by own storage and two
        sources appears three times.
        """
        names = list(self._own.keys())
        for source in self._sources.adapted():
            names.extend(source.keys())
        return names

    def delete(self, key: str) -> bool:
        """
        Delete a key.

        An own key is always deletable. Otherwise the key is removed from
        every source that has it, if allow_deletion is set.

        Sources are visited in order and nothing is rolled back: if a nested
        composite raises DeletionDisallowedError partway through, the
        sources before it have already lost the key.

        Returns:
            True if anything was removed, False for a no-op

        Raises:
            DeletionDisallowedError: If the key is not own and allow_deletion is off
        """
        if key in self._own:
            del self._own[key]
            return True

        if not self._flags.allow_deletion:
            raise DeletionDisallowedError(key)

        deleted = False
        for source in self._sources.adapted():
            if source.has(key):
                if source.delete(key):
                    deleted = True

        if not deleted:
            logger.debug(f"Composite: delete of '{key}' matched no source")
        return deleted

    # ------------------------------------------------------------------
    # Own storage
    # ------------------------------------------------------------------

    def add_property(self, name: str, value: Any) -> None:
        """
        Store a value in own storage, bypassing the sources.

        Raises:
            OverrideDisallowedError: If ``name`` already exists anywhere and
                allow_override is off
        """
        if self.has(name) and not self._flags.allow_override:
            raise OverrideDisallowedError(name)
        self._own[name] = value
        logger.debug(f"Composite: added own property '{name}'")

    def delete_property(self, name: str, silent: bool = True) -> bool:
        """
        Remove a key from own storage only. Sources are never touched.

        Raises:
            UnknownOwnPropertyError: If absent and silent is False
        """
        if name not in self._own:
            if not silent:
                raise UnknownOwnPropertyError(name)
            return False
        del self._own[name]
        logger.debug(f"Composite: deleted own property '{name}'")
        return True

    def has_own(self, key: str) -> bool:
        return key in self._own

    def own_keys(self) -> List[str]:
        return list(self._own.keys())

    # ------------------------------------------------------------------
    # Source list
    # ------------------------------------------------------------------

    @property
    def source_list(self) -> SourceList:
        return self._sources

    def iter_sources(self) -> Iterator[Source]:
        """Iterate the sources in order, adapted to the Source protocol."""
        return self._sources.adapted()

    def add_source(self, source: Any, put_upfront: bool = False) -> bool:
        """Add a source unless already present. See SourceList.add()."""
        return self._sources.add(source, put_upfront)

    def remove_source(self, source: Any, silent: bool = True) -> bool:
        """Remove a source. See SourceList.remove()."""
        return self._sources.remove(source, silent)

    def is_source_in_hierarchy(self, source: Any) -> bool:
        """Identity membership test over the immediate source list."""
        return self._sources.contains(source)

    def can_source_be_safely_added(self, source: Any) -> bool:
        """
        Check that adding ``source`` would introduce no name conflict.

        Returns:
            False if already present or if any of its own keys is already
            enumerated by this composite, True otherwise
        """
        if self.is_source_in_hierarchy(source):
            return False
        existing = set(self.keys())
        for name in as_source(source).keys():
            if name in existing:
                return False
        return True

    def add_source_if_safe(self, source: Any) -> bool:
        """Append ``source`` only if it introduces no name conflict."""
        if self.can_source_be_safely_added(source):
            return self.add_source(source)
        return False

    # ------------------------------------------------------------------
    # Policy flags
    # ------------------------------------------------------------------

    @property
    def flags(self) -> PolicyFlags:
        """Snapshot copy of the current flags."""
        return self._flags.model_copy()

    @property
    def allow_duplicates(self) -> bool:
        return self._flags.allow_duplicates

    @allow_duplicates.setter
    def allow_duplicates(self, value: bool) -> None:
        self._flags.allow_duplicates = value

    @property
    def error_if_missing(self) -> bool:
        return self._flags.error_if_missing

    @error_if_missing.setter
    def error_if_missing(self, value: bool) -> None:
        self._flags.error_if_missing = value

    @property
    def allow_override(self) -> bool:
        return self._flags.allow_override

    @allow_override.setter
    def allow_override(self, value: bool) -> None:
        self._flags.allow_override = value

    @property
    def allow_deletion(self) -> bool:
        return self._flags.allow_deletion

    @allow_deletion.setter
    def allow_deletion(self, value: bool) -> None:
        self._flags.allow_deletion = value

    def get_allow_duplicates(self) -> bool:
        return self.allow_duplicates

    def set_allow_duplicates(self, value: bool) -> None:
        self.allow_duplicates = value

    def get_error_if_missing(self) -> bool:
        return self.error_if_missing

    def set_error_if_missing(self, value: bool) -> None:
        self.error_if_missing = value

    def get_allow_override(self) -> bool:
        return self.allow_override

    def set_allow_override(self, value: bool) -> None:
        self.allow_override = value

    def get_allow_deletion(self) -> bool:
        return self.allow_deletion

    def set_allow_deletion(self, value: bool) -> None:
        self.allow_deletion = value

    # ------------------------------------------------------------------
    # Extension operations
    # ------------------------------------------------------------------

    def add_operation(self, name: str, callback: OperationCallback, silent: bool = False) -> bool:
        """Install an extension callback. See OperationRegistry.add()."""
        return self._operations.add(name, callback, silent)

    def remove_operation(self, name: str, silent: bool = True) -> bool:
        """Remove an extension callback. See OperationRegistry.remove()."""
        return self._operations.remove(name, silent)

    def installed_operations(self) -> List[str]:
        """Names of installed extension callbacks. Mandatory operations are never listed."""
        return self._operations.installed()

    def invoke_operation(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call an installed extension callback with this composite first."""
        return self._operations.invoke(name, self, *args, **kwargs)

    @staticmethod
    def eligible_operation_names() -> List[str]:
        return OperationRegistry.eligible_names()

    @staticmethod
    def protected_operation_names() -> List[str]:
        return OperationRegistry.protected_names()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def occurrence_count(self, key: str) -> int:
        return introspection.occurrence_count(self, key)

    def duplicate_names(self) -> List[str]:
        return introspection.duplicate_names(self)

    def unique_names(self) -> List[str]:
        return introspection.unique_names(self)

    def immediate_sources(self) -> List[Any]:
        """The live source list. See introspection.immediate_sources()."""
        return introspection.immediate_sources(self)

    def __repr__(self) -> str:
        return f"Composite(own={len(self._own)}, sources={len(self._sources)})"


def construct_composite(
    sources: Optional[List[Any]] = None,
    allow_duplicates: Optional[bool] = None,
    error_if_missing: Optional[bool] = None,
    allow_override: Optional[bool] = None,
    allow_deletion: Optional[bool] = None,
    settings: Optional[MultiSourceSettings] = None,
) -> Composite:
    """
    Factory for composites.

    Flags left as None take the value of ``settings.defaults`` when
    settings are given, and the built-in defaults otherwise.

    Args:
        sources: Initial ordered source list
        allow_duplicates: Override for the duplicate policy
        error_if_missing: Override for the missing-key policy
        allow_override: Override for the new-key policy
        allow_deletion: Override for the source-delete policy
        settings: Optional configuration to take defaults from

    Returns:
        A new Composite
    """
    defaults = settings.defaults if settings is not None else PolicyFlags()
    explicit = {
        "allow_duplicates": allow_duplicates,
        "error_if_missing": error_if_missing,
        "allow_override": allow_override,
        "allow_deletion": allow_deletion,
    }
    flags = defaults.model_dump()
    flags.update({name: value for name, value in explicit.items() if value is not None})
    return Composite(sources, **flags)
