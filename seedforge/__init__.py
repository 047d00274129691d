"""
seedforge - test-fixture factories with inheritance and async save hooks.

Define a factory per model, give it literal or generated attributes, and
build or create populated instances in tests. Factories extend named parents,
inheriting their attributes and hook chains.
"""

__version__ = "0.1.0"

from .attributes import AttributeDefinition, Lazy, Sequenced, Static
from .config import Settings, configure_logging, get_settings
from .exceptions import (
    DuplicateFactoryError,
    FactoryNotFoundError,
    HookContinuationError,
    HookError,
    PersistenceNotSupportedError,
    RegistryError,
    SeedForgeError,
)
from .factory import CreateStage, Factory
from .hooks import POST_SAVE, PRE_BUILD, PRE_SAVE, HookTable, continuation
from .paths import get_path_value, set_path_value
from .registry import (
    FactoryRegistry,
    build,
    create,
    default_registry,
    define,
    get_factory,
)
from .sequence import SequenceCounter

__all__ = [
    # Factories
    "Factory",
    "CreateStage",
    "FactoryRegistry",
    "default_registry",
    "define",
    "get_factory",
    "build",
    "create",
    # Attributes
    "AttributeDefinition",
    "Static",
    "Lazy",
    "Sequenced",
    "SequenceCounter",
    # Hooks
    "HookTable",
    "continuation",
    "PRE_BUILD",
    "PRE_SAVE",
    "POST_SAVE",
    # Paths
    "set_path_value",
    "get_path_value",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "SeedForgeError",
    "RegistryError",
    "FactoryNotFoundError",
    "DuplicateFactoryError",
    "HookError",
    "HookContinuationError",
    "PersistenceNotSupportedError",
]
