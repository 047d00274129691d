"""
Custom exceptions for seedforge.

Errors raised by user code (hooks, generators, models, persisters) are never
wrapped in these; they reach the caller unchanged.
"""

from typing import Optional


class SeedForgeError(Exception):
    """Base exception for seedforge errors."""

    pass


class RegistryError(SeedForgeError):
    """Base exception for factory registry errors."""

    pass


class FactoryNotFoundError(RegistryError, KeyError):
    """Raised when a requested factory name is not registered."""

    def __init__(self, name: str, suggestion: Optional[str] = None):
        self.name = name
        self.suggestion = suggestion
        message = f"Factory not found: {name}"
        if suggestion:
            message += f" (did you mean '{suggestion}'?)"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class DuplicateFactoryError(RegistryError):
    """Raised when registering a factory under a name already in use."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Factory already registered: {name}")


class HookError(SeedForgeError):
    """
    Base exception for hook pipeline errors.

    Also raised when a continuation is resumed with an error value that is not
    an exception; the original value is kept on ``error``.
    """

    def __init__(self, message: str, error: Optional[object] = None):
        super().__init__(message)
        self.error = error


class HookContinuationError(HookError):
    """Raised when a continuation-style hook resumes its chain more than once."""

    pass


class PersistenceNotSupportedError(SeedForgeError):
    """Raised when an instance can't be persisted: no persister and no save()."""

    def __init__(self, instance: object):
        self.instance = instance
        super().__init__(
            f"{type(instance).__name__} has no save() and the factory has no persister"
        )
