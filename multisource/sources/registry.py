"""
Source adapter registry.

Provides a central registry mapping object types to the adapter class
that exposes them as a Source, so composites can hold caller objects
as-is and adapt them lazily.
"""

from typing import Dict, Type, Optional, Any, List, Callable
import logging

from multisource.sources.protocols import Source, BaseSource

logger = logging.getLogger(__name__)

SOURCE_METHODS = ("has", "get", "keys", "delete")


def _implements_source(obj: Any) -> bool:
    """True if the Source methods are defined on the type, not just reachable on the instance."""
    obj_type = type(obj)
    return all(callable(getattr(obj_type, name, None)) for name in SOURCE_METHODS)


class SourceAdapterRegistry:
    """
    Registry for source adapter implementations.

    Adapters are registered by the type they wrap. Lookup walks the
    registrations newest first and takes the first one the object is an
    instance of, so a more specific adapter registered later shadows the
    generic ``object`` fallback.

    Usage:
        # Registration (usually via decorator)
        SourceAdapterRegistry.register(Mapping, MappingSource)

        # Lookup
        adapter_class = SourceAdapterRegistry.get(dict)

        # Adapt
        source = SourceAdapterRegistry.adapt({"foo": 1})
        source.get("foo")
    """

    _adapters: Dict[type, Type[BaseSource]] = {}

    @classmethod
    def register(cls, target_type: type, adapter_class: Type[BaseSource]) -> None:
        """
        Register an adapter class for a target type.

        Args:
            target_type: Type (or ABC) of objects the adapter wraps
            adapter_class: The adapter class to register
        """
        if target_type in cls._adapters:
            logger.warning(
                f"Overwriting existing source adapter registration: {target_type.__name__}"
            )
            # re-insert so the overwrite takes the newest slot
            del cls._adapters[target_type]
        cls._adapters[target_type] = adapter_class
        logger.debug(f"Registered source adapter: {target_type.__name__} -> {adapter_class.__name__}")

    @classmethod
    def get(cls, target_type: type) -> Optional[Type[BaseSource]]:
        """
        Get the adapter class for a type.

        Args:
            target_type: Type to look up

        Returns:
            Adapter class or None if nothing matches
        """
        for registered in reversed(list(cls._adapters)):
            if issubclass(target_type, registered):
                return cls._adapters[registered]
        return None

    @classmethod
    def adapt(cls, obj: Any) -> Source:
        """
        Expose an object as a Source.

        Objects whose class implements the Source methods (including
        composites) are returned unchanged. A catch-all ``__getattr__``
        on the instance does not count.

        Args:
            obj: Any caller-supplied object

        Returns:
            A Source view of ``obj``

        Raises:
            TypeError: If no adapter matches
        """
        if _implements_source(obj):
            return obj

        adapter_class = cls.get(type(obj))
        if not adapter_class:
            available = ", ".join(t.__name__ for t in cls._adapters) or "none"
            raise TypeError(
                f"No source adapter for type '{type(obj).__name__}'. "
                f"Registered adapters: {available}"
            )
        return adapter_class(obj)

    @classmethod
    def list_adapters(cls) -> List[str]:
        """
        List all registered target type names.

        Returns:
            Type names, oldest registration first
        """
        return [t.__name__ for t in cls._adapters]

    @classmethod
    def is_registered(cls, target_type: type) -> bool:
        """
        Check if a type has its own registration.

        Args:
            target_type: Type to check

        Returns:
            True if registered, False otherwise
        """
        return target_type in cls._adapters

    @classmethod
    def unregister(cls, target_type: type) -> bool:
        """
        Remove a registration.

        Args:
            target_type: Type to unregister

        Returns:
            True if something was removed
        """
        return cls._adapters.pop(target_type, None) is not None


def register_adapter(target_type: type) -> Callable[[Type[BaseSource]], Type[BaseSource]]:
    """
    Decorator to auto-register a source adapter class.

    Usage:
        @register_adapter(Mapping)
        class MappingSource(BaseSource):
            ...

    Args:
        target_type: Type the adapter wraps

    Returns:
        Decorator function
    """

    def decorator(cls: Type[BaseSource]) -> Type[BaseSource]:
        SourceAdapterRegistry.register(target_type, cls)
        return cls

    return decorator


def as_source(obj: Any) -> Source:
    """Shortcut for SourceAdapterRegistry.adapt()."""
    return SourceAdapterRegistry.adapt(obj)
