"""
Unique id generation for trade records.

Every trade record carries an opaque `item_id` that downstream consumers use
as the row identity. Like the random source, the generator is injected so
tests can produce predictable ids while production uses collision-resistant
random ones.
"""

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """
    Abstract id generator protocol.

    Any object with a `new_id()` method returning a fresh string qualifies.
    Implementations must never return the same id twice within one
    simulation run.
    """

    def new_id(self) -> str:
        """Return a fresh, unique, opaque id string."""
        ...


class UuidIdGenerator:
    """
    Id generator backed by random (version 4) UUIDs.

    122 bits of randomness per id make collisions effectively impossible,
    even across separate runs. Ids are rendered as 32-character hex strings.
    """

    def new_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """
    Id generator that counts upward from 1 (for deterministic tests).

    **Usage**:
        ids = SequentialIdGenerator(prefix="item-")
        ids.new_id()  # "item-1"
        ids.new_id()  # "item-2"
    """

    def __init__(self, prefix: str = "item-"):
        self._prefix = prefix
        self._counter = 0

    def new_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}{self._counter}"


def get_default_id_generator() -> IdGenerator:
    """Factory for the production id generator (UuidIdGenerator)."""
    return UuidIdGenerator()
