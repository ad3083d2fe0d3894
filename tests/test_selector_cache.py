"""
NetPerfCompare - Selector Cache Tests

Tests for memoized selector recomputation rules.
"""

from unittest.mock import MagicMock

from src.cache.selector_cache import SelectorCache, create_selector


class TestSelectorCache:
    """Test suite for SelectorCache and MemoizedSelector."""

    def _selector(self, cache, combiner):
        return create_selector(
            cache, "total",
            lambda state, query: state["values"],
            lambda state, query: query["scale"],
            combiner=combiner
        )

    def test_combiner_runs_once_for_same_inputs(self):
        """Verify identical inputs reuse the cached result."""
        cache = SelectorCache()
        combiner = MagicMock(side_effect=lambda values, scale: sum(values) * scale)
        selector = self._selector(cache, combiner)
        state = {"values": [1, 2, 3]}

        assert selector(state, {"scale": 2}) == 12
        assert selector(state, {"scale": 2}) == 12
        assert combiner.call_count == 1
        assert cache.stats() == {"total": {"hits": 1, "misses": 1}}

    def test_equal_scalars_count_as_unchanged(self):
        """Verify equal strings/numbers from new query objects hit the cache."""
        cache = SelectorCache()
        combiner = MagicMock(return_value="result")
        selector = self._selector(cache, combiner)
        state = {"values": []}

        selector(state, {"scale": "x" * 3})
        selector(state, {"scale": "".join(["x", "x", "x"])})

        assert combiner.call_count == 1

    def test_new_container_recomputes(self):
        """Verify an equal but different list counts as a change."""
        cache = SelectorCache()
        combiner = MagicMock(side_effect=lambda values, scale: list(values))
        selector = self._selector(cache, combiner)

        selector({"values": [1]}, {"scale": 1})
        selector({"values": [1]}, {"scale": 1})

        assert combiner.call_count == 2

    def test_bool_and_int_are_distinct(self):
        """Verify True and 1 are not treated as the same input."""
        cache = SelectorCache()
        combiner = MagicMock(side_effect=lambda values, scale: scale)
        selector = self._selector(cache, combiner)
        state = {"values": []}

        assert selector(state, {"scale": 1}) == 1
        assert selector(state, {"scale": True}) is True
        assert combiner.call_count == 2

    def test_only_latest_inputs_are_kept(self):
        """Verify switching back to earlier inputs recomputes."""
        cache = SelectorCache()
        combiner = MagicMock(side_effect=lambda values, scale: scale)
        selector = self._selector(cache, combiner)
        state = {"values": []}

        selector(state, {"scale": 1})
        selector(state, {"scale": 2})
        selector(state, {"scale": 1})

        assert combiner.call_count == 3

    def test_recomputation_is_timed(self):
        """Verify each recomputation is recorded in the cache metrics."""
        cache = SelectorCache()
        selector = self._selector(cache, lambda values, scale: scale)

        selector({"values": []}, {"scale": 1})

        assert cache.metrics.get_stats("selector.total")["count"] == 1
