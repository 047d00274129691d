"""
Factory registry - named lookup of factories.

Responsible for:
- Defining and registering factories under unique names
- Resolving parent names for Factory.extend
- Module-level shortcuts backed by a process-wide default registry
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from .exceptions import DuplicateFactoryError, FactoryNotFoundError
from .factory import Factory
from .utils.logging import log_event
from .utils.result import Result, Success, not_found_error


class FactoryRegistry:
    """
    Registry mapping names to factories.

    Example::

        registry = FactoryRegistry()
        registry.define("user", User, unpack=True).set("role", "member")
        registry.define("admin", User, unpack=True).extend("user").set("role", "admin")
    """

    def __init__(self):
        self._factories: Dict[str, Factory] = {}

    def define(
        self,
        name: str,
        model: Callable[..., Any],
        *,
        replace: bool = False,
        **factory_kwargs: Any,
    ) -> Factory:
        """
        Create a factory bound to this registry and register it under ``name``.

        Args:
            name: Unique factory name
            model: Model callable for the factory
            replace: Overwrite an existing registration instead of raising
            **factory_kwargs: Passed to Factory (persist, unpack)

        Raises:
            DuplicateFactoryError: If ``name`` is taken and ``replace`` is False
        """
        factory = Factory(model, name=name, registry=self, **factory_kwargs)
        return self.register(name, factory, replace=replace)

    def register(self, name: str, factory: Factory, *, replace: bool = False) -> Factory:
        """Register an existing factory under ``name``."""
        if name in self._factories and not replace:
            raise DuplicateFactoryError(name)

        if factory.name is None:
            factory.name = name
        if factory.registry is None:
            factory.registry = self

        self._factories[name] = factory

        log_event(
            "factory_registered",
            {
                "factory": name,
                "model": getattr(factory.model, "__name__", repr(factory.model)),
                "replaced": replace,
            },
            level=logging.DEBUG,
        )
        return factory

    def unregister(self, name: str) -> Factory:
        """
        Remove and return the factory registered under ``name``.

        Factories that already extended it keep their parent reference.
        """
        if name not in self._factories:
            raise FactoryNotFoundError(name, self._suggest_similar(name))

        factory = self._factories.pop(name)
        log_event("factory_unregistered", {"factory": name}, level=logging.DEBUG)
        return factory

    def get(self, name: str) -> Factory:
        """
        Get a factory by name.

        Raises:
            FactoryNotFoundError: If no factory is registered under ``name``
        """
        factory = self._factories.get(name)
        if factory is None:
            raise FactoryNotFoundError(name, self._suggest_similar(name))
        return factory

    def lookup(self, name: str) -> Result[Factory, str]:
        """Get a factory by name as a Result instead of raising."""
        try:
            return Success(self.get(name))
        except FactoryNotFoundError as e:
            return not_found_error(
                str(e),
                context={"factory": name, "suggestion": e.suggestion},
                exception=e,
            )

    def names(self) -> List[str]:
        return list(self._factories)

    def clear(self) -> None:
        """Remove every registration."""
        self._factories.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def _suggest_similar(self, requested_name: str) -> Optional[str]:
        """Suggest a registered name that partially matches the requested one."""
        if not requested_name or not self._factories:
            return None

        requested_lower = requested_name.lower()
        for name in self._factories:
            if requested_lower in name.lower() or name.lower() in requested_lower:
                return name

        return None


# Global registry used by Factory.extend when a factory has no registry
default_registry = FactoryRegistry()


def define(name: str, model: Callable[..., Any], **factory_kwargs: Any) -> Factory:
    """Define a factory in the default registry."""
    return default_registry.define(name, model, **factory_kwargs)


def get_factory(name: str) -> Factory:
    """Get a factory from the default registry."""
    return default_registry.get(name)


def build(name: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
    """Build an instance with the named factory of the default registry."""
    return get_factory(name).build(overrides)


async def create(name: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
    """Create an instance with the named factory of the default registry."""
    return await get_factory(name).create(overrides)
