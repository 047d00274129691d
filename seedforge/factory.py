"""
Factory: builds and persists populated model instances for tests.

A factory holds attribute definitions and hook chains, and can extend a
named parent factory to inherit both. ``build`` instantiates synchronously;
``create`` runs the full lifecycle:

    pre:build -> build -> pre:save -> persist -> post:save

Any stage that raises ends the call with that exception. Nothing is rolled
back: an instance whose post:save hook fails stays persisted.
"""

import inspect
import logging
import warnings
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .attributes import AttributeDefinition, Lazy, Sequenced, as_definition
from .attributes import resolve_attribute
from .config.settings import get_settings
from .exceptions import PersistenceNotSupportedError
from .hooks import (
    POST_SAVE,
    PRE_BUILD,
    PRE_SAVE,
    Continuation,
    HookCallback,
    HookTable,
    continuation,
    legacy_post_save,
)
from .paths import get_path_value, merge_mappings, set_path_value
from .sequence import SequenceCounter
from .utils.logging import log_event, operation_context, track

_MISSING = object()


class CreateStage(str, Enum):
    """Stages of Factory.create, in execution order."""

    PRE_BUILD = "pre_build"
    BUILD = "build"
    PRE_SAVE = "pre_save"
    PERSIST = "persist"
    POST_SAVE = "post_save"
    DONE = "done"


class Factory:
    """
    Produces model instances from attribute definitions.

    Args:
        model: Callable building an instance from the resolved attributes
        name: Name used in log events; set by the registry on registration
        registry: Registry used by ``extend`` to look up parents by name
            (the default registry when omitted)
        persist: Callable persisting an instance; defaults to ``instance.save()``
        unpack: Call ``model(**attributes)`` instead of ``model(attributes)``
    """

    def __init__(
        self,
        model: Callable[..., Any],
        *,
        name: Optional[str] = None,
        registry=None,
        persist: Optional[Callable[[Any], Any]] = None,
        unpack: bool = False,
    ):
        self.model = model
        self.name = name
        self.registry = registry
        self.persister = persist
        self.unpack = unpack
        self.attributes: Dict[str, AttributeDefinition] = {}
        self.hooks = HookTable()

        self.parent: Optional["Factory"] = None
        self._own_sequence = SequenceCounter()

    def __repr__(self) -> str:
        model_name = getattr(self.model, "__name__", repr(self.model))
        label = f"{self.name!r}, " if self.name else ""
        return f"Factory({label}{model_name})"

    # Configuration

    def set(
        self,
        name: str,
        value: Any = _MISSING,
        *,
        lazy: Optional[Callable[[], Any]] = None,
        sequence: Optional[Callable[[int], Any]] = None,
    ) -> "Factory":
        """
        Define an attribute.

        Exactly one of ``value``, ``lazy`` or ``sequence`` must be given. A
        ``value`` that is already an AttributeDefinition is stored as-is;
        anything else is a literal, callables included.
        """
        given = [value is not _MISSING, lazy is not None, sequence is not None]
        if sum(given) != 1:
            raise ValueError(
                f"set('{name}') takes exactly one of value, lazy= or sequence="
            )

        if lazy is not None:
            definition: AttributeDefinition = Lazy(lazy)
        elif sequence is not None:
            definition = Sequenced(sequence)
        else:
            definition = as_definition(value)

        self.attributes[name] = definition
        return self

    def hook(self, key: str, callback: HookCallback) -> "Factory":
        """Append ``callback`` to the chain for event ``key``."""
        self.hooks.add(key, callback)
        return self

    def before(self, fn: Callable[[Continuation], Any]) -> "Factory":
        """
        Register a continuation-style ``fn(next_)`` on pre:build.

        Deprecated: use ``hook("pre:build", ...)``.
        """
        _warn_deprecated("before", PRE_BUILD)
        return self.hook(PRE_BUILD, continuation(fn))

    def after(self, fn: Callable[[Continuation], Any]) -> "Factory":
        """
        Register a continuation-style ``fn(next_)`` on post:save.

        ``fn`` is not given the saved instance.
        Deprecated: use ``hook("post:save", ...)``.
        """
        _warn_deprecated("after", POST_SAVE)
        return self.hook(POST_SAVE, legacy_post_save(fn))

    async def emit(self, key: str, *args: Any) -> None:
        """Run the hook chain for ``key``; see HookTable.emit."""
        await self.hooks.emit(key, *args)

    def extend(self, parent: Union[str, "Factory"]) -> "Factory":
        """
        Inherit attributes and hooks from ``parent``.

        ``parent`` is a registered factory name or a Factory. Every hook of
        every ancestor, nearest first, is appended to this factory's chains
        after its own hooks.
        """
        if isinstance(parent, Factory):
            parent_factory = parent
        else:
            parent_factory = self._get_registry().get(parent)

        self.parent = parent_factory

        adopted = 0
        for ancestor in self.ancestors():
            for key, callbacks in ancestor.hooks.items():
                for callback in callbacks:
                    self.hook(key, callback)
                    adopted += 1

        log_event(
            "factory_extended",
            {"factory": self.name, "parent": parent_factory.name},
            level=logging.DEBUG,
        )
        log_event(
            "hooks_adopted",
            {"factory": self.name, "hook_count": adopted},
            level=logging.DEBUG,
        )
        return self

    # Lineage

    def ancestors(self) -> List["Factory"]:
        """Parent, grandparent, ... nearest first; empty for a root factory."""
        ancestors = []
        current = self
        while current.parent is not None:
            ancestors.append(current.parent)
            current = current.parent
        return ancestors

    def has_ancestors(self) -> bool:
        return bool(self.ancestors())

    @property
    def root(self) -> "Factory":
        ancestors = self.ancestors()
        return ancestors[-1] if ancestors else self

    @property
    def sequence(self) -> SequenceCounter:
        """Counter of the current root; looked up on every access."""
        return self.root._own_sequence

    def next_sequence(self) -> int:
        return self.sequence.next()

    # Resolution

    def value(self, name: str, definitions: Mapping[str, Any]) -> Any:
        """Resolve one attribute from ``definitions``."""
        return resolve_attribute(name, definitions, self.next_sequence)

    def resolved_attributes(self) -> Dict[str, Any]:
        """
        Resolve own and inherited attributes into a fresh nested dict.

        Own definitions win over inherited ones; farther ancestors only fill
        names no nearer factory defines. Generators run once per call.
        """
        definitions: Dict[str, Any] = dict(self.attributes)
        for ancestor in self.ancestors():
            for name, definition in ancestor.attributes.items():
                definitions.setdefault(name, definition)

        separator = get_settings().path_separator
        resolved: Dict[str, Any] = {}
        for name in definitions:
            set_path_value(name, self.value(name, definitions), resolved, separator)
        return resolved

    @track(operation="factory_build")
    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Instantiate the model without running hooks or persisting.

        Override keys are dotted paths and win over resolved attributes. A
        mapping override is merged into the resolved mapping at its path, so
        sibling keys it does not name are kept.
        """
        attributes = self.resolved_attributes()
        if overrides:
            separator = get_settings().path_separator
            for key, value in overrides.items():
                current = get_path_value(key, attributes, separator=separator)
                if isinstance(value, Mapping) and isinstance(current, Mapping):
                    value = merge_mappings(current, value)
                set_path_value(key, value, attributes, separator)

        if self.unpack:
            return self.model(**attributes)
        return self.model(attributes)

    def build_many(
        self, count: int, overrides: Optional[Mapping[str, Any]] = None
    ) -> List[Any]:
        return [self.build(overrides) for _ in range(count)]

    # Lifecycle

    async def create(self, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Build, persist and return an instance, running all lifecycle hooks.

        Raises:
            The exception of the first failing hook, the persister, the
            model, or a generator. Later stages do not run.
        """
        with operation_context(factory=self.name):
            return await self._create(overrides)

    async def create_many(
        self, count: int, overrides: Optional[Mapping[str, Any]] = None
    ) -> List[Any]:
        """Create ``count`` instances one after another."""
        instances = []
        for _ in range(count):
            instances.append(await self.create(overrides))
        return instances

    @track(operation="factory_create")
    async def _create(self, overrides: Optional[Mapping[str, Any]]) -> Any:
        stage = CreateStage.PRE_BUILD
        try:
            await self.emit(PRE_BUILD)

            stage = CreateStage.BUILD
            instance = self.build(overrides)

            stage = CreateStage.PRE_SAVE
            await self.emit(PRE_SAVE, instance)

            stage = CreateStage.PERSIST
            await self._persist(instance)

            stage = CreateStage.POST_SAVE
            await self.emit(POST_SAVE, instance)
        except Exception as e:
            log_event(
                "create_failed",
                {
                    "factory": self.name,
                    "stage": stage.value,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                level=logging.WARNING,
            )
            raise

        return instance

    async def _persist(self, instance: Any) -> None:
        if self.persister is not None:
            result = self.persister(instance)
        else:
            save = getattr(instance, "save", None)
            if not callable(save):
                raise PersistenceNotSupportedError(instance)
            result = save()

        if inspect.isawaitable(result):
            await result

        log_event(
            "instance_persisted",
            {"factory": self.name, "instance_type": type(instance).__name__},
            level=logging.DEBUG,
        )

    def _get_registry(self):
        if self.registry is not None:
            return self.registry

        from .registry import default_registry

        return default_registry


def _warn_deprecated(method: str, event_key: str) -> None:
    if get_settings().deprecation_warnings:
        warnings.warn(
            f"Factory.{method}() is deprecated; use hook('{event_key}', ...)",
            DeprecationWarning,
            stacklevel=3,
        )
