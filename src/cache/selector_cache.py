"""
NetPerfCompare - Selector Cache

Memoization for derived selectors. A selector declares its input
selectors; its combiner only reruns when one of the input values
changes. Comparison is by identity, plus equality for plain scalars
(strings, numbers, None), so rebuilding an equal list of ids counts as
a change while re-reading the same store object does not.

Each cache instance belongs to its owner (one per compare page); there
is no module level state and no manual reset.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from src.utils.performance import PerformanceMetrics, PerformanceTimer


logger = logging.getLogger(__name__)


InputSelector = Callable[[Any, Any], Any]

_SCALAR_TYPES = (str, int, float, bool, type(None), Enum)


def _same_input(previous: Any, current: Any) -> bool:
    """True if an input value is unchanged since the last computation."""
    if previous is current:
        return True
    if isinstance(previous, _SCALAR_TYPES) and isinstance(current, _SCALAR_TYPES):
        return type(previous) is type(current) and previous == current
    return False


@dataclass
class CacheEntry:
    """Inputs and result of the last computation of a selector."""
    inputs: Tuple[Any, ...]
    result: Any


class SelectorCache:
    """
    Holds the last computation of each selector.

    Tracks hits and misses for logging and tests.
    """

    def __init__(self, log_threshold_ms: float = 100.0):
        """
        Initialize the cache.

        Args:
            log_threshold_ms: Recomputations slower than this are logged as warnings
        """
        self._entries: Dict[str, CacheEntry] = {}
        self.hits: Dict[str, int] = {}
        self.misses: Dict[str, int] = {}
        self.log_threshold_ms = log_threshold_ms
        self.metrics = PerformanceMetrics()
        logger.debug("SelectorCache initialized")

    def lookup(self, name: str, inputs: Tuple[Any, ...]) -> Optional[CacheEntry]:
        """Return the entry for name if it was computed from the same inputs."""
        entry = self._entries.get(name)
        if entry is None or len(entry.inputs) != len(inputs):
            return None
        if all(_same_input(prev, cur) for prev, cur in zip(entry.inputs, inputs)):
            return entry
        return None

    def compute(self, name: str, inputs: Tuple[Any, ...], combiner: Callable[..., Any]) -> Any:
        """
        Return the cached result or run the combiner and store its result.

        Args:
            name: Selector name
            inputs: Current input values
            combiner: Function of the inputs

        Returns:
            Selector result
        """
        entry = self.lookup(name, inputs)
        if entry is not None:
            self.hits[name] = self.hits.get(name, 0) + 1
            return entry.result

        self.misses[name] = self.misses.get(name, 0) + 1
        with PerformanceTimer(f"selector.{name}", self.log_threshold_ms, self.metrics):
            result = combiner(*inputs)

        self._entries[name] = CacheEntry(inputs=inputs, result=result)
        return result

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Hit/miss counts per selector."""
        names = set(self.hits) | set(self.misses)
        return {
            name: {"hits": self.hits.get(name, 0), "misses": self.misses.get(name, 0)}
            for name in sorted(names)
        }


class MemoizedSelector:
    """
    A selector computed from the values of other selectors.

    Usage:
        get_total = MemoizedSelector(cache, "total", [get_a, get_b], lambda a, b: a + b)
        get_total(state, query)
    """

    def __init__(
        self,
        cache: SelectorCache,
        name: str,
        input_selectors: Sequence[InputSelector],
        combiner: Callable[..., Any]
    ):
        self.cache = cache
        self.name = name
        self.input_selectors = list(input_selectors)
        self.combiner = combiner

    def __call__(self, state: Any, query: Any) -> Any:
        inputs = tuple(selector(state, query) for selector in self.input_selectors)
        return self.cache.compute(self.name, inputs, self.combiner)

    def __repr__(self) -> str:
        return f"MemoizedSelector({self.name!r})"


def create_selector(
    cache: SelectorCache,
    name: str,
    *input_selectors: InputSelector,
    combiner: Callable[..., Any]
) -> MemoizedSelector:
    """Convenience constructor for MemoizedSelector."""
    return MemoizedSelector(cache, name, input_selectors, combiner)
