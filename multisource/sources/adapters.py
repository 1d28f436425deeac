"""
Adapters to wrap plain objects as Sources.

Provides MappingSource for dict-like objects and AttributeSource for
everything else. Both are registered with the SourceAdapterRegistry so a
composite can hold the caller's object directly and adapt it on access.
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, List

from multisource.sources.protocols import BaseSource
from multisource.sources.registry import register_adapter

logger = logging.getLogger(__name__)


@register_adapter(object)
class AttributeSource(BaseSource):
    """
    Wraps an arbitrary object, delegating to its attributes.

    Existence and reads follow normal attribute lookup, so class-level
    attributes and methods resolve too (methods come back bound to the
    target). Enumeration and deletion only see the instance's own
    attributes.
    """

    def has(self, key: str) -> bool:
        return hasattr(self._target, key)

    def get(self, key: str) -> Any:
        return getattr(self._target, key)

    def keys(self) -> List[str]:
        try:
            return list(vars(self._target))
        except TypeError:
            # no __dict__, fall back to populated slots
            names: List[str] = []
            for cls in type(self._target).__mro__:
                slots = cls.__dict__.get("__slots__", ())
                if isinstance(slots, str):
                    slots = (slots,)
                for slot in slots:
                    if slot not in names and hasattr(self._target, slot):
                        names.append(slot)
            return names

    def delete(self, key: str) -> bool:
        if key not in self.keys():
            # inherited attributes cannot be removed through the instance
            logger.debug(f"AttributeSource: '{key}' is not an own attribute of {self._target!r}")
            return False
        delattr(self._target, key)
        return True


@register_adapter(Mapping)
class MappingSource(BaseSource):
    """Wraps a mapping, delegating to its items."""

    def has(self, key: str) -> bool:
        return key in self._target

    def get(self, key: str) -> Any:
        return self._target[key]

    def keys(self) -> List[str]:
        return list(self._target.keys())

    def delete(self, key: str) -> bool:
        if not isinstance(self._target, MutableMapping):
            logger.debug(f"MappingSource: target {type(self._target).__name__} is read-only")
            return False
        if key not in self._target:
            return False
        del self._target[key]
        return True
