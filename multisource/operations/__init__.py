"""Extension operation registry and its fixed name tables."""

from multisource.operations.registry import (
    OperationRegistry,
    OperationCallback,
    ELIGIBLE_OPERATIONS,
    PROTECTED_OPERATIONS,
    MANDATORY_OPERATIONS,
)

__all__ = [
    "OperationRegistry",
    "OperationCallback",
    "ELIGIBLE_OPERATIONS",
    "PROTECTED_OPERATIONS",
    "MANDATORY_OPERATIONS",
]
