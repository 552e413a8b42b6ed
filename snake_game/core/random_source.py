"""
Random number sources for the game engine.

The engine never calls the ``random`` module directly; it asks an injected
source for integers and coin flips so tests can replay an exact sequence.
"""

import random
from typing import Iterable, List, Optional, Protocol, Union


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int:
        """Uniform integer in ``[start, stop)``."""
        ...

    def coin(self) -> bool:
        """Fair coin flip."""
        ...


class SystemRandomSource:
    """RandomSource backed by ``random.Random``"""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def randrange(self, start: int, stop: int) -> int:
        return self._random.randrange(start, stop)

    def coin(self) -> bool:
        return self._random.random() < 0.5


class ScriptExhausted(IndexError):
    pass


class ScriptedRandomSource:
    """Replays a fixed list of values, in order, for deterministic tests.

    Integers are returned from ``randrange`` as-is; booleans from ``coin``.
    A value outside the requested range is a scripting mistake and raises
    ``ValueError`` rather than being clamped.
    """

    def __init__(self, values: Iterable[Union[int, bool]]):
        self._values: List[Union[int, bool]] = list(values)
        self.calls = 0

    @property
    def remaining(self) -> int:
        return len(self._values)

    def _next(self) -> Union[int, bool]:
        if not self._values:
            raise ScriptExhausted(f"scripted random source exhausted after {self.calls} calls")
        self.calls += 1
        return self._values.pop(0)

    def randrange(self, start: int, stop: int) -> int:
        value = self._next()
        if isinstance(value, bool) or not start <= value < stop:
            raise ValueError(f"scripted value {value!r} not in range [{start}, {stop})")
        return value

    def coin(self) -> bool:
        value = self._next()
        if not isinstance(value, bool):
            raise ValueError(f"scripted value {value!r} is not a coin flip")
        return value
