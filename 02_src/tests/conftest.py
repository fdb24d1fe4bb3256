"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def valid_payload():
    """A body that passes validation."""
    return {
        "level": "error",
        "message": "Database connection failed",
        "resourceId": "server-1234",
        "timestamp": "2024-01-15T14:00:00.000Z",
        "traceId": "t1",
        "spanId": "s1",
        "commit": "c1",
        "metadata": {"parentResourceId": "server-0987"},
    }


@pytest.fixture
def make_entry():
    """Factory for LogEntry objects with overridable fields."""
    from logstream.models import LogEntry

    def _make(**overrides):
        fields = {
            "level": "info",
            "message": "Request processed",
            "resource_id": "server-1234",
            "timestamp": "2024-01-15T12:00:00.000Z",
            "trace_id": "t2",
            "span_id": "s2",
            "commit": "c2",
            "metadata": {},
        }
        fields.update(overrides)
        return LogEntry(**fields)

    return _make


@pytest.fixture
def sample_entries(make_entry):
    """Three entries in storage order, not chronological."""
    return [
        make_entry(
            level="info",
            message="Request processed",
            timestamp="2024-01-15T12:00:00.000Z",
            trace_id="t2",
            span_id="s2",
            commit="c2",
        ),
        make_entry(
            level="error",
            message="Database connection failed",
            timestamp="2024-01-15T14:00:00.000Z",
            trace_id="t1",
            span_id="s1",
            commit="c1",
        ),
        make_entry(
            level="warn",
            message="High memory usage",
            resource_id="server-5678",
            timestamp="2024-01-14T10:00:00.000Z",
            trace_id="t3",
            span_id="s3",
            commit="c3",
        ),
    ]


@pytest_asyncio.fixture
async def json_storage(tmp_path):
    """JSON file storage in a temporary directory."""
    from logstream.storage import JsonFileStorage

    st = JsonFileStorage(tmp_path / "logs.json")
    await st.init()
    yield st
    await st.close()


@pytest_asyncio.fixture
async def sqlite_storage():
    """Create in-memory SQLite storage for testing."""
    from logstream.storage import SqliteStorage

    st = SqliteStorage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest_asyncio.fixture(params=["json", "sqlite"])
async def storage(request, tmp_path):
    """Each storage backend in turn."""
    from logstream.storage import create_storage

    path = tmp_path / ("logs.json" if request.param == "json" else "logs.db")
    st = create_storage(path)
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def hub():
    """Create Hub with a small queue so overflow is easy to trigger."""
    from logstream.hub import Hub

    return Hub(queue_size=4)


@pytest_asyncio.fixture
async def application(tmp_path):
    """Started Application backed by a temporary JSON file."""
    from logstream.app import Application

    app = Application(store_path=tmp_path / "logs.json")
    await app.start()
    yield app
    await app.stop()
