"""
NetPerfCompare - Command Line Tests

Tests for configuration loading and the JSON command line pipeline.
"""

import json

import pytest

from src.main import load_state, main
from src.utils.config import Config, SelectionConfig


SNAPSHOT = {
    "locations": {
        "nyc": {
            "info": {"status": "success", "data": {"name": "New York"}},
            "time": {
                "timeSeries": {"status": "success", "data": [
                    {"date": "2024-01-01", "download_speed_mbps_median": 11.0, "count": 3}
                ]},
                "hourly": {"status": "fetching"}
            }
        }
    },
    "clientIsps": {
        "AS1": {"info": {"status": "success", "data": {"name": "Comcast"}}}
    },
    "locationClientIsps": {
        "nyc_AS1": {
            "time": {
                "timeSeries": {"status": "success", "data": [
                    {"date": "2024-01-01", "download_speed_mbps_median": 21.0, "count": 4},
                    {"date": "2024-01-02", "download_speed_mbps_median": 25.0, "count": 6}
                ]},
                "hourly": {"status": "success", "data": [
                    {"hour": 4, "download_speed_mbps_median": 19.0, "count": 2}
                ]}
            }
        }
    },
    "top": {
        "clientIspsForLocations": {"status": "success", "data": [
            {"client_asn_number": "AS1"}, {"client_asn_number": "AS2"}
        ]}
    }
}


class TestConfig:
    """Test suite for environment configuration."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Verify defaults when no variables are set."""
        monkeypatch.chdir(tmp_path)
        for key in ("NETPERF_ENV", "TOP_FILTER_LIMIT", "HOURLY_MAX_DAYS", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

        config = Config()

        assert config.selection == SelectionConfig()
        assert config.selection.top_filter_limit == 20

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Verify environment variables override defaults."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("NETPERF_ENV", "development")
        monkeypatch.setenv("TOP_FILTER_LIMIT", "5")
        monkeypatch.setenv("HOURLY_MAX_DAYS", "7")

        config = Config()

        assert config.selection.development is True
        assert config.selection.top_filter_limit == 5
        assert config.selection.hourly_max_days == 7

    def test_invalid_integer(self, monkeypatch, tmp_path):
        """Verify a non-integer limit is rejected."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TOP_FILTER_LIMIT", "lots")

        with pytest.raises(ValueError):
            Config()


class TestMain:
    """Test suite for the command line entry point."""

    @pytest.fixture
    def snapshot_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TOP_FILTER_LIMIT", raising=False)
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
        return path

    def test_writes_pipeline_output(self, snapshot_path, tmp_path):
        """Verify the pipeline output for one location and one client ISP."""
        output = tmp_path / "out.json"

        code = main([
            "--state", str(snapshot_path),
            "--facet-type", "location",
            "--facet-ids", "nyc",
            "--filter1-ids", "AS1",
            "--start", "2024-01-01",
            "--end", "2024-01-31",
            "--output", str(output),
            "--no-log-file",
        ])

        assert code == 0
        result = json.loads(output.read_text(encoding="utf-8"))
        assert result["combinedType"] == "location-clientIsp"
        assert result["timeAggregation"] == "daily"
        assert result["combinedIds"] == [{"facetItemId": "nyc", "filterItemId": "AS1", "combined": "nyc_AS1"}]
        assert result["combinedTimeSeries"]["nyc"]["status"] == "success"
        assert result["combinedTimeSeriesExtents"] == {
            "download_speed_mbps_median": [21.0, 25.0],
            "count": [4, 6],
        }
        assert result["combinedHourly"]["nyc"][0]["id"] == "AS1"
        assert result["facetItemTimeSeries"]["status"] == "success"
        assert result["facetItemHourly"][0]["status"] == "fetching"
        assert result["topFilter1"] == [{"client_asn_number": "AS2"}]
        assert list(result["colors"]) == ["nyc", "AS1"]

    def test_missing_snapshot(self, tmp_path, monkeypatch):
        """Verify a missing snapshot returns a failure code."""
        monkeypatch.chdir(tmp_path)

        assert main(["--state", str(tmp_path / "absent.json"), "--no-log-file"]) == 1

    def test_null_store_entries_are_dropped(self, tmp_path, monkeypatch):
        """Verify null entities and combined records are skipped, not fatal."""
        monkeypatch.chdir(tmp_path)
        snapshot = dict(SNAPSHOT)
        snapshot["locations"] = dict(SNAPSHOT["locations"], sea=None)
        snapshot["locationClientIsps"] = dict(SNAPSHOT["locationClientIsps"], nyc_AS2=None)
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot), encoding="utf-8")
        output = tmp_path / "out.json"

        state = load_state(path)
        code = main([
            "--state", str(path),
            "--facet-ids", "nyc,sea",
            "--filter1-ids", "AS1,AS2",
            "--output", str(output),
            "--no-log-file",
        ])

        assert list(state.locations) == ["nyc"]
        assert list(state.location_client_isps) == ["nyc_AS1"]
        assert code == 0
        result = json.loads(output.read_text(encoding="utf-8"))
        assert len(result["combinedIds"]) == 4
        assert list(result["combinedTimeSeries"]) == ["nyc"]
        assert len(result["combinedHourly"]["nyc"]) == 1
        assert len(result["facetItemHourly"]) == 1
