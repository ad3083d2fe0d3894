"""
NetPerfCompare - Cache Module

In-memory memoization for derived selectors.
"""

from src.cache.selector_cache import (
    SelectorCache,
    MemoizedSelector,
    create_selector,
)

__all__ = [
    "SelectorCache",
    "MemoizedSelector",
    "create_selector",
]
