"""
NetPerfCompare - Combined Aggregator Tests

Unit tests for join lookup, grouping and the time series / hourly combiners.
"""

import unittest

from src.aggregators.combined_aggregator import (
    combine_data,
    combine_facet_item_hourly,
    combine_facet_item_time_series,
    combine_hourly,
    combine_time_series,
    get_combined_items
)
from src.aggregators.cross_product import get_combined_type_and_ids
from src.aggregators.identity import make_location_client_isp_id, make_location_client_isp_transit_isp_id
from src.models.dimensions import METRICS, CombinedRecord, Entity, EntityTime
from src.models.facts import CombinedTypeAndIds, FetchableResource, HourlyEntry, Status
from src.views.selection import extract_facet_type, get_filter_types


DOWNLOAD = METRICS[0]


def make_series(*points):
    """Build a daily series from (date, value, count) tuples."""
    return [
        {"date": day, DOWNLOAD.data_key: value, "count": count}
        for day, value, count in points
    ]


def make_record(series=None, status=Status.SUCCESS, hourly=None, hourly_status=Status.SUCCESS):
    """Build a combined record."""
    return CombinedRecord(time=EntityTime(
        time_series=FetchableResource(status=status, data=series),
        hourly=FetchableResource(status=hourly_status, data=hourly)
    ))


def expand(facet_type_value, facet_ids, filter1_ids=None, filter2_ids=None, breakdown_by=None):
    """Run the expander for a facet type value."""
    facet_type = extract_facet_type(facet_type_value)
    return get_combined_type_and_ids(
        facet_type, facet_ids, get_filter_types(facet_type), filter1_ids, filter2_ids, breakdown_by
    )


class TestGetCombinedItems(unittest.TestCase):
    """Test cases for the join lookup."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = {
            make_location_client_isp_id(1, 10): make_record(make_series(("2024-01-01", 50.0, 3))),
            make_location_client_isp_id(2, 10): make_record(make_series(("2024-01-01", 70.0, 5))),
        }
        self.sources = {"location-clientIsp": self.store}

    def test_joins_records_in_id_order(self):
        """Test each combined id is paired with its record."""
        type_and_ids = expand("location", [1, 2], filter1_ids=[10])

        items = get_combined_items(type_and_ids, self.sources)

        self.assertEqual(len(items), 2)
        self.assertEqual(items[0].id.facet_item_id, 1)
        self.assertIs(items[0].data, self.store[make_location_client_isp_id(1, 10)])
        self.assertEqual(items[1].id.facet_item_id, 2)

    def test_drops_ids_without_record(self):
        """Test ids missing from the store are excluded."""
        type_and_ids = expand("location", [1, 2, 3], filter1_ids=[10, 20])

        items = get_combined_items(type_and_ids, self.sources)

        self.assertEqual(len(items), 2)
        self.assertLessEqual(len(items), len(type_and_ids.combined_ids))
        self.assertEqual({item.id.combined for item in items}, set(self.store))

    def test_unknown_combined_type_is_empty(self):
        """Test an unrecognized combined type yields no items."""
        type_and_ids = CombinedTypeAndIds(combined_type="location", combined_ids=[])

        self.assertEqual(get_combined_items(type_and_ids, self.sources), [])

    def test_missing_store_is_empty(self):
        """Test a combined type without a store yields no items."""
        type_and_ids = expand("location", [1], filter2_ids=[100])

        self.assertEqual(get_combined_items(type_and_ids, self.sources), [])


class TestCombineTimeSeries(unittest.TestCase):
    """Test cases for grouping and merging time series."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = {
            make_location_client_isp_id(1, 10): make_record(
                make_series(("2024-01-01", 50.0, 3), ("2024-01-02", 55.0, 4))
            ),
            make_location_client_isp_id(1, 20): make_record(
                make_series(("2024-01-01", 20.0, 1))
            ),
            make_location_client_isp_id(2, 10): make_record(None, status=Status.FETCHING),
            make_location_client_isp_id(2, 20): make_record(
                make_series(("2024-01-02", 90.0, 2)), status=Status.ERROR
            ),
        }
        type_and_ids = expand("location", [1, 2], filter1_ids=[10, 20])
        self.items = get_combined_items(type_and_ids, {"location-clientIsp": self.store})

    def test_groups_by_facet_item(self):
        """Test one combined series per facet item."""
        grouping = combine_data(combine_time_series, "location-clientIsp", self.items)

        self.assertFalse(grouping.nested)
        self.assertEqual(list(grouping.groups), [1, 2])

    def test_merges_group_data_and_statuses(self):
        """Test statuses are kept for every item and data only when present."""
        grouping = combine_data(combine_time_series, "location-clientIsp", self.items)

        first = grouping.get(1)
        self.assertEqual(first.statuses, [Status.SUCCESS, Status.SUCCESS])
        self.assertEqual(len(first.data), 2)
        self.assertEqual(first.status, Status.SUCCESS)
        self.assertEqual(first.counts, [
            {"date": "2024-01-01", "count": 4},
            {"date": "2024-01-02", "count": 4},
        ])

        second = grouping.get(2)
        self.assertEqual(second.statuses, [Status.FETCHING, Status.ERROR])
        self.assertEqual(len(second.data), 1)

    def test_error_status_wins(self):
        """Test any error in a group makes the group an error."""
        grouping = combine_data(combine_time_series, "location-clientIsp", self.items)

        self.assertEqual(grouping.get(2).status, Status.ERROR)

    def test_empty_input_is_none(self):
        """Test no items gives None rather than an empty grouping."""
        self.assertIsNone(combine_data(combine_time_series, "location-clientIsp", []))
        self.assertIsNone(combine_data(combine_time_series, "location-clientIsp", None))

    def test_inputs_not_mutated(self):
        """Test combining leaves the stored series untouched."""
        before = [list(record.time.time_series.data or []) for record in self.store.values()]

        combine_data(combine_time_series, "location-clientIsp", self.items)

        after = [list(record.time.time_series.data or []) for record in self.store.values()]
        self.assertEqual(before, after)

    def test_idempotent(self):
        """Test combining twice gives equal results."""
        first = combine_data(combine_time_series, "location-clientIsp", self.items)
        second = combine_data(combine_time_series, "location-clientIsp", self.items)

        self.assertEqual(first, second)
        self.assertIsNot(first, second)


class TestCombineThreeDimensions(unittest.TestCase):
    """Test cases for the nested three-dimension grouping."""

    def setUp(self):
        """Set up test fixtures."""
        self.type_and_ids = expand(
            "location", [1, 2], filter1_ids=[10, 20], filter2_ids=[100, 200], breakdown_by="filter1"
        )
        self.store = {
            combined_id.combined: make_record(
                make_series(("2024-01-01", float(combined_id.filter_item_id), 1)),
                hourly=[{"hour": 3, DOWNLOAD.data_key: 12.0, "count": 2}]
            )
            for combined_id in self.type_and_ids.combined_ids
        }
        self.items = get_combined_items(
            self.type_and_ids, {"location-clientIsp-transitIsp": self.store}
        )

    def test_nested_by_facet_then_breakdown(self):
        """Test facet -> breakdown -> combined series nesting."""
        grouping = combine_data(combine_time_series, "location-clientIsp-transitIsp", self.items)

        self.assertTrue(grouping.nested)
        self.assertEqual(list(grouping.groups), [1, 2])
        self.assertEqual(list(grouping.groups[1]), [10, 20])

        leaf = grouping.get(1, 10)
        self.assertEqual(len(leaf.data), 2)  # transit ISPs 100 and 200
        self.assertEqual(leaf.status, Status.SUCCESS)
        self.assertEqual(len(list(grouping.leaves())), 4)

    def test_hourly_entries_use_filter_item_id(self):
        """Test hourly entries keep one entry per item, keyed by filter id."""
        grouping = combine_data(combine_hourly, "location-clientIsp-transitIsp", self.items, DOWNLOAD)

        entries = grouping.get(2, 20)
        self.assertEqual([entry.id for entry in entries], [100, 200])
        for entry in entries:
            self.assertIsInstance(entry, HourlyEntry)
            self.assertEqual(entry.status, Status.SUCCESS)
            self.assertEqual(entry.wrangled["averages"][3][DOWNLOAD.data_key], 12.0)

    def test_nested_lookup_of_single_combined_key(self):
        """Test the item for one triple lands in the expected leaf."""
        key = make_location_client_isp_transit_isp_id(2, 20, 200)
        grouping = combine_data(combine_time_series, "location-clientIsp-transitIsp", self.items)

        self.assertIn(self.store[key].time.time_series.data, grouping.get(2, 20).data)


class TestCombineHourly(unittest.TestCase):
    """Test cases for the hourly combiner."""

    def test_unfetched_hourly_kept_with_status(self):
        """Test an item without hourly data still yields an entry."""
        type_and_ids = expand("location", [1], filter1_ids=[10, 20])
        store = {
            make_location_client_isp_id(1, 10): make_record(hourly=[{"hour": 0, DOWNLOAD.data_key: 5.0}]),
            make_location_client_isp_id(1, 20): make_record(hourly=None, hourly_status=Status.NOT_FETCHED),
        }
        items = get_combined_items(type_and_ids, {"location-clientIsp": store})

        grouping = combine_data(combine_hourly, type_and_ids.combined_type, items, DOWNLOAD)
        entries = grouping.get(1)

        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[1].id, 20)
        self.assertIsNone(entries[1].data)
        self.assertIsNone(entries[1].wrangled)
        self.assertEqual(entries[1].status, Status.NOT_FETCHED)


class TestFacetItemSeries(unittest.TestCase):
    """Test cases for facet item (unfiltered) series."""

    def setUp(self):
        """Set up test fixtures."""
        self.facet_items = [
            Entity(id="a", time=EntityTime(
                time_series=FetchableResource(Status.SUCCESS, make_series(("2024-01-01", 10.0, 2))),
                hourly=FetchableResource(Status.SUCCESS, [{"hour": 1, DOWNLOAD.data_key: 4.0, "count": 1}])
            )),
            Entity(id="b", time=EntityTime(
                time_series=FetchableResource(Status.NOT_FETCHED, None)
            )),
        ]

    def test_time_series_combined_and_listed(self):
        """Test per item series and their merge."""
        result = combine_facet_item_time_series(self.facet_items)

        self.assertEqual([series.id for series in result.time_series], ["a", "b"])
        self.assertEqual(result.combined.statuses, [Status.SUCCESS, Status.NOT_FETCHED])
        self.assertEqual(result.combined.status, Status.NOT_FETCHED)
        self.assertEqual(len(result.combined.data), 1)
        self.assertEqual(result.combined.counts, [{"date": "2024-01-01", "count": 2}])

    def test_hourly_per_facet_item(self):
        """Test one hourly entry per facet item keyed by entity id."""
        entries = combine_facet_item_hourly(self.facet_items, DOWNLOAD)

        self.assertEqual([entry.id for entry in entries], ["a", "b"])
        self.assertEqual(entries[0].wrangled["averages"][1][DOWNLOAD.data_key], 4.0)
        self.assertIsNone(entries[1].wrangled)

    def test_none_facet_items(self):
        """Test None input is passed through as None."""
        self.assertIsNone(combine_facet_item_time_series(None))
        self.assertIsNone(combine_facet_item_hourly(None, DOWNLOAD))


if __name__ == "__main__":
    unittest.main()
