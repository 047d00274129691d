"""
Attribute definitions and value resolution.

An attribute is defined by one of three explicit variants:

- ``Static(value)``: the value itself, returned unchanged on every build.
- ``Lazy(fn)``: ``fn()`` is called on every build.
- ``Sequenced(fn)``: ``fn(n)`` is called with the next number of the
  factory's sequence; each resolution consumes one number.

Example::

    factory.set("role", "member")
    factory.set("token", lazy=lambda: uuid.uuid4().hex)
    factory.set("email", sequence=lambda n: f"user{n}@example.com")
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

SequenceSource = Callable[[], int]


class AttributeDefinition:
    """Base class for attribute definition variants."""

    def resolve(self, next_sequence: SequenceSource) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Static(AttributeDefinition):
    """A literal attribute value."""

    value: Any

    def resolve(self, next_sequence: SequenceSource) -> Any:
        return self.value


@dataclass(frozen=True)
class Lazy(AttributeDefinition):
    """A zero-argument generator, called once per resolution."""

    generator: Callable[[], Any]

    def __post_init__(self):
        if not callable(self.generator):
            raise TypeError(f"Lazy generator must be callable, got {self.generator!r}")

    def resolve(self, next_sequence: SequenceSource) -> Any:
        return self.generator()


@dataclass(frozen=True)
class Sequenced(AttributeDefinition):
    """A generator called with the next sequence number."""

    generator: Callable[[int], Any]

    def __post_init__(self):
        if not callable(self.generator):
            raise TypeError(
                f"Sequenced generator must be callable, got {self.generator!r}"
            )

    def resolve(self, next_sequence: SequenceSource) -> Any:
        return self.generator(next_sequence())


def as_definition(value: Any) -> AttributeDefinition:
    """Wrap a plain value as ``Static``; definitions pass through."""
    if isinstance(value, AttributeDefinition):
        return value
    return Static(value)


def resolve_attribute(
    name: str,
    definitions: Mapping[str, Any],
    next_sequence: SequenceSource,
) -> Any:
    """
    Compute the concrete value of one attribute.

    Args:
        name: Attribute name, a key of ``definitions``
        definitions: Merged attribute definitions of a factory lineage
        next_sequence: Callable returning the lineage's next sequence number

    Returns:
        The resolved value. Anything stored that is not an
        AttributeDefinition is returned as a literal.
    """
    return as_definition(definitions[name]).resolve(next_sequence)
