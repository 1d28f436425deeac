"""
Per-composite registry of extension operations.

The five mandatory operations (has, get, set, keys, delete) are methods of
the composite itself. They are never registry entries and nothing here can
replace them. The registry only holds optional callbacks under a closed
set of names.

Name tables:
    ELIGIBLE_OPERATIONS   may be added, overridden and removed
    PROTECTED_OPERATIONS  can never be added, overridden or removed

``delete_property`` is eligible. It names an extension hook reachable
through ``invoke()`` only; installing it does not change how the
mandatory ``delete`` behaves. The two tables are disjoint.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from multisource.errors import (
    OperationNotAllowedError,
    OperationNotInstalledError,
    ProtectedOperationError,
)

logger = logging.getLogger(__name__)

ELIGIBLE_OPERATIONS = (
    "apply",
    "construct",
    "define_property",
    "delete_property",
    "get_own_property_descriptor",
    "get_prototype_of",
    "is_extensible",
    "prevent_extensions",
    "set_prototype_of",
)

PROTECTED_OPERATIONS = ("get", "set", "has", "own_keys")

MANDATORY_OPERATIONS = ("has", "get", "set", "keys", "delete")

OperationCallback = Callable[..., Any]


class OperationRegistry:
    """
    Table of extension callbacks for one composite.

    Usage:
        registry = OperationRegistry()
        registry.add("apply", lambda composite, *args: ...)
        registry.invoke("apply", composite, 1, 2)
        registry.remove("apply")
    """

    def __init__(self):
        self._operations: Dict[str, OperationCallback] = {}

    def add(self, name: str, callback: OperationCallback, silent: bool = False) -> bool:
        """
        Install or overwrite a callback.

        Args:
            name: Operation name, must be in ELIGIBLE_OPERATIONS
            callback: Called as ``callback(composite, *args, **kwargs)``
            silent: Return False instead of raising for an ineligible name

        Returns:
            True if installed, False if the name is not eligible

        Raises:
            OperationNotAllowedError: If the name is not eligible and silent is False
            TypeError: If callback is not callable
        """
        if name not in ELIGIBLE_OPERATIONS:
            if not silent:
                raise OperationNotAllowedError(name)
            return False

        if not callable(callback):
            raise TypeError(f"Callback for operation '{name}' must be callable")

        if name in self._operations:
            logger.warning(f"Overwriting existing operation callback: {name}")
        self._operations[name] = callback
        logger.debug(f"Installed operation: {name}")
        return True

    def remove(self, name: str, silent: bool = True) -> bool:
        """
        Remove a callback.

        Args:
            name: Operation name
            silent: Return False instead of raising for a protected name

        Returns:
            True for any eligible name (installed or not), False otherwise

        Raises:
            ProtectedOperationError: If the name is protected and silent is False
        """
        if name in PROTECTED_OPERATIONS and not silent:
            raise ProtectedOperationError(name)

        if name in ELIGIBLE_OPERATIONS:
            self._operations.pop(name, None)
            logger.debug(f"Removed operation: {name}")
            return True

        return False

    def get(self, name: str) -> Optional[OperationCallback]:
        """Return the installed callback or None."""
        return self._operations.get(name)

    def invoke(self, name: str, composite: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Call an installed callback with the composite as first argument.

        Raises:
            OperationNotInstalledError: If nothing is installed under ``name``
        """
        callback = self._operations.get(name)
        if callback is None:
            raise OperationNotInstalledError(name)
        return callback(composite, *args, **kwargs)

    def installed(self) -> List[str]:
        """Names currently installed, in installation order."""
        return list(self._operations.keys())

    def is_installed(self, name: str) -> bool:
        return name in self._operations

    @staticmethod
    def eligible_names() -> List[str]:
        """Fresh copy of the eligible name table."""
        return list(ELIGIBLE_OPERATIONS)

    @staticmethod
    def protected_names() -> List[str]:
        """Fresh copy of the protected name table."""
        return list(PROTECTED_OPERATIONS)
