# id generators for mock entities
# passed explicitly into the generators so tests can pin ids

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def next_id(self, prefix: str) -> str:
        ...


class SequentialIdGenerator:
    """prefix_n ids from a single counter shared by every prefix"""

    def __init__(self, start: int = 0):
        self._counter = start

    def next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}_{self._counter}"


class UuidIdGenerator:
    def next_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:12]}"


def make_id_generator(strategy: str) -> IdGenerator:
    """build the generator named by MOCK_ID_STRATEGY"""
    if strategy == "uuid":
        return UuidIdGenerator()
    if strategy == "sequence":
        return SequentialIdGenerator()
    raise ValueError(f"Unknown id strategy: {strategy}")
