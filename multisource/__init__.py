"""
multisource - Multi-source property delegation.

A Composite forwards existence checks, reads, writes, enumeration and
deletion to an ordered list of source objects, imitating multiple
inheritance through composition.

Quick Start:
    ```python
    from multisource import Composite

    class Walker:
        def walk(self):
            return "walking"

    duck = Composite([Walker(), {"quack": "Quack!"}])
    duck.get("walk")()      # "walking"
    duck.get("quack")       # "Quack!"
    duck.has("fly")         # False
    ```

Policies:
    ```python
    strict = Composite([a, b], allow_duplicates=False, error_if_missing=True)
    strict.get("shared")    # DuplicatePropertyError if both a and b define it
    strict.get("nothing")   # MissingPropertyError
    ```

From configuration (multisource.yaml or MULTISOURCE_* env vars):
    ```python
    from multisource import Composite, MultiSourceSettings

    composite = Composite.from_settings([a, b], MultiSourceSettings())
    ```
"""

__version__ = "0.1.0"

# Core configuration
from multisource.config.settings import MultiSourceSettings, setup_logging

# Policy
from multisource.policy import PolicyFlags

# Sources
from multisource.sources import (
    Source,
    BaseSource,
    AttributeSource,
    MappingSource,
    SourceAdapterRegistry,
    SourceList,
    register_adapter,
    as_source,
)

# Operations
from multisource.operations import (
    OperationRegistry,
    ELIGIBLE_OPERATIONS,
    PROTECTED_OPERATIONS,
    MANDATORY_OPERATIONS,
)

# Engine
from multisource.core import Composite, construct_composite

# Errors
from multisource.errors import (
    MultiSourceError,
    DuplicatePropertyError,
    MissingPropertyError,
    OverrideDisallowedError,
    DeletionDisallowedError,
    UnknownSourceError,
    UnknownOwnPropertyError,
    OperationNotAllowedError,
    ProtectedOperationError,
    OperationNotInstalledError,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "MultiSourceSettings",
    "setup_logging",
    # Policy
    "PolicyFlags",
    # Sources
    "Source",
    "BaseSource",
    "AttributeSource",
    "MappingSource",
    "SourceAdapterRegistry",
    "SourceList",
    "register_adapter",
    "as_source",
    # Operations
    "OperationRegistry",
    "ELIGIBLE_OPERATIONS",
    "PROTECTED_OPERATIONS",
    "MANDATORY_OPERATIONS",
    # Engine
    "Composite",
    "construct_composite",
    # Errors
    "MultiSourceError",
    "DuplicatePropertyError",
    "MissingPropertyError",
    "OverrideDisallowedError",
    "DeletionDisallowedError",
    "UnknownSourceError",
    "UnknownOwnPropertyError",
    "OperationNotAllowedError",
    "ProtectedOperationError",
    "OperationNotInstalledError",
]
