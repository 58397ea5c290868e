"""Unit tests for flange record loading and the record store."""

import threading
from unittest.mock import Mock

import pytest
import requests

from frontend.flange_dashboard.exceptions import DataSourceError
from frontend.flange_dashboard.records import (
    FETCH_ERROR_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    FlangeLogClient,
    MockFlangeLoader,
    RecordStore,
)


def make_response(status_code=200, payload=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class StubLoader:
    """Loader returning queued results, raising queued exceptions."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def load(self):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestFlangeLogClient:
    """Test the HTTP flange log client."""

    def test_successful_load(self):
        """Test records are parsed from the response envelope."""
        session = Mock()
        session.get.return_value = make_response(
            payload={
                "success": True,
                "data": [{"id": 1, "status": "Completed", "system": "CA1-030"}],
                "count": 1,
            }
        )
        client = FlangeLogClient("http://api.local/", limit=50, timeout=2, session=session)

        records = client.load()

        assert records[0]["id"] == 1
        assert records[0]["system"] == "CA1-030"
        session.get.assert_called_once_with(
            "http://api.local/api/flange-log", params={"limit": 50}, timeout=2
        )

    def test_transport_error(self):
        """Test connection failures."""
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")
        client = FlangeLogClient("http://api.local", session=session)

        with pytest.raises(DataSourceError) as exc_info:
            client.load()

        assert exc_info.value.message == FETCH_ERROR_MESSAGE
        assert exc_info.value.details["reason"] == "refused"

    def test_http_error_status(self):
        """Test non-2xx responses."""
        session = Mock()
        session.get.return_value = make_response(status_code=500)
        client = FlangeLogClient("http://api.local", session=session)

        with pytest.raises(DataSourceError) as exc_info:
            client.load()

        assert exc_info.value.status_code == 500

    def test_malformed_payload(self):
        """Test non-JSON bodies."""
        session = Mock()
        session.get.return_value = make_response(json_error=ValueError("no json"))
        client = FlangeLogClient("http://api.local", session=session)

        with pytest.raises(DataSourceError, match="Malformed"):
            client.load()

    def test_unsuccessful_envelope(self):
        """Test ``success: false`` responses carry the server's error."""
        session = Mock()
        session.get.return_value = make_response(
            payload={"success": False, "error": "Database unavailable"}
        )
        client = FlangeLogClient("http://api.local", session=session)

        with pytest.raises(DataSourceError) as exc_info:
            client.load()

        assert exc_info.value.message == "Database unavailable"


class TestMockFlangeLoader:
    """Test the demo loader."""

    def test_sleeps_for_delay(self):
        """Test the artificial delay."""
        sleeps = []
        loader = MockFlangeLoader(delay=0.5, records_factory=lambda: [], sleep=sleeps.append)

        loader.load()

        assert sleeps == [0.5]

    def test_zero_delay_does_not_sleep(self):
        """Test that a zero delay skips sleeping."""
        sleep = Mock()
        loader = MockFlangeLoader(delay=0, records_factory=lambda: [], sleep=sleep)

        loader.load()

        sleep.assert_not_called()

    def test_records_generated_once(self):
        """Test that refreshes see the same demo records."""
        factory = Mock(return_value=[{"id": 1, "status": "Completed"}])
        loader = MockFlangeLoader(delay=0, records_factory=factory)

        first = loader.load()
        first[0]["status"] = "Delayed"
        second = loader.load()

        assert factory.call_count == 1
        assert second == [{"id": 1, "status": "Completed"}]

    def test_default_demo_records(self):
        """Test the default factory."""
        records = MockFlangeLoader(delay=0).load()

        assert len(records) == 24
        assert [r["id"] for r in records[:4]] == [1, 2, 3, 4]


class TestRecordStore:
    """Test record store state transitions."""

    def test_initial_state(self):
        """Test a store before its first refresh."""
        store = RecordStore(StubLoader())

        assert store.records == []
        assert store.error is None
        assert store.last_loaded_at is None
        assert not store.is_loading

    def test_successful_refresh(self, sample_records):
        """Test records replace the previous set."""
        store = RecordStore(StubLoader(sample_records))

        assert store.refresh()

        assert store.records == sample_records
        assert store.error is None
        assert store.last_loaded_at is not None
        assert not store.is_loading

    def test_failed_refresh_keeps_records(self, sample_records):
        """Test that a failure keeps the last good records."""
        store = RecordStore(
            StubLoader(sample_records, DataSourceError(FETCH_ERROR_MESSAGE, status_code=503))
        )
        store.refresh()

        store.refresh()

        assert store.records == sample_records
        assert store.error == FETCH_ERROR_MESSAGE
        assert not store.is_loading

    def test_success_clears_error(self, sample_records):
        """Test recovery after a failure."""
        store = RecordStore(StubLoader(DataSourceError("boom"), sample_records))
        store.refresh()
        assert store.error == "boom"

        store.refresh()

        assert store.error is None

    def test_unexpected_exception(self):
        """Test messages for errors outside the data source."""
        store = RecordStore(StubLoader(RuntimeError("bad row")))

        store.refresh()

        assert store.error == "bad row"

    def test_empty_message_uses_fallback(self):
        """Test the unknown error fallback."""
        store = RecordStore(StubLoader(RuntimeError()))

        store.refresh()

        assert store.error == UNKNOWN_ERROR_MESSAGE

    def test_overlapping_refresh_is_ignored(self, sample_records):
        """Test that a refresh during a load does nothing."""
        loader = StubLoader(sample_records)
        store = RecordStore(loader)
        store._lock.acquire()

        try:
            assert store.is_loading
            assert store.refresh() is False
        finally:
            store._lock.release()

        assert loader.calls == 0
        assert store.records == []

    def test_concurrent_refresh_from_thread(self, sample_records):
        """Test a second caller while the loader is blocked."""
        started, release = threading.Event(), threading.Event()

        class BlockingLoader:
            def load(self):
                started.set()
                release.wait(timeout=5)
                return sample_records

        store = RecordStore(BlockingLoader())
        worker = threading.Thread(target=store.refresh)
        worker.start()
        started.wait(timeout=5)

        assert store.refresh() is False

        release.set()
        worker.join(timeout=5)
        assert store.records == sample_records
