"""
Error taxonomy for multi-source delegation.

Every error is raised at the point of violation and aborts only the
current operation. Nothing here is retried or recovered internally; the
only suppression is the documented ``silent`` flag on the management
operations, which turns a would-be error into a ``False`` result.

1. DuplicatePropertyError: read matched 2+ sources with duplicates disallowed
2. MissingPropertyError: read/write found nothing with error_if_missing set
3. OverrideDisallowedError: new own key while allow_override is off
4. DeletionDisallowedError: source delete while allow_deletion is off
5. UnknownSourceError / UnknownOwnPropertyError: non-silent removal misses
6. OperationNotAllowedError / ProtectedOperationError: registry misuse
"""

from typing import Optional, Dict, Any


class MultiSourceError(Exception):
    """Base class for all delegation errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class DuplicatePropertyError(MultiSourceError):
    """A key resolved in more than one source while duplicates are disallowed."""

    def __init__(self, key: str, count: int):
        super().__init__(
            f"Property '{key}' exists in {count} sources. "
            "Duplication of properties across sources is disallowed.",
            {"key": key, "count": count},
        )
        self.key = key
        self.count = count


class MissingPropertyError(MultiSourceError):
    """A key was found nowhere while error_if_missing is enabled."""

    def __init__(self, key: str, creating: bool = False):
        message = f"Property '{key}' not found in own storage or any source."
        if creating:
            message += " Creating a new one is disallowed."
        super().__init__(message, {"key": key})
        self.key = key


class OverrideDisallowedError(MultiSourceError):
    """Shadowing or creating an own key while allow_override is disabled."""

    def __init__(self, key: str):
        super().__init__(
            f"Overriding property '{key}' is currently disallowed.",
            {"key": key},
        )
        self.key = key


class DeletionDisallowedError(MultiSourceError):
    """Deleting a source-held key while allow_deletion is disabled."""

    def __init__(self, key: str):
        super().__init__(
            f"Deleting '{key}' from sources is currently disallowed. "
            "Enable allow_deletion to delete it from every source that has it.",
            {"key": key},
        )
        self.key = key


class UnknownSourceError(MultiSourceError, LookupError):
    """Non-silent removal of an object that is not in the source list."""

    def __init__(self, source: Any):
        super().__init__(
            f"Source {source!r} is not in the hierarchy and silent is False.",
            {"source": source},
        )
        self.source = source


class UnknownOwnPropertyError(MultiSourceError, LookupError):
    """Non-silent deletion of a key that is not in own storage."""

    def __init__(self, key: str):
        super().__init__(
            f"Cannot delete own property '{key}': it is not present and silent is False.",
            {"key": key},
        )
        self.key = key


class OperationNotAllowedError(MultiSourceError):
    """Registering a callback under a name outside the eligible table."""

    def __init__(self, name: str):
        super().__init__(
            f"Operation '{name}' is not in the list of operations eligible for extension.",
            {"name": name},
        )
        self.name = name


class ProtectedOperationError(MultiSourceError):
    """Removing an operation name from the protected table."""

    def __init__(self, name: str):
        super().__init__(
            f"Operation '{name}' is protected and cannot be removed.",
            {"name": name},
        )
        self.name = name


class OperationNotInstalledError(MultiSourceError, LookupError):
    """Invoking an extension operation that has no installed callback."""

    def __init__(self, name: str):
        super().__init__(
            f"No callback installed for operation '{name}'.",
            {"name": name},
        )
        self.name = name
