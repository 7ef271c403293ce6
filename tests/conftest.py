import pytest

from core import log_sink
from tests.helpers import FakeClient, ListSink
from utils import wordpress


@pytest.fixture
def fake_client():
    client = FakeClient()
    wordpress.set_client(client)
    yield client
    wordpress.set_client(None)


@pytest.fixture(autouse=True)
def list_sink():
    previous = log_sink.get_log_sink()
    sink = ListSink()
    log_sink.set_log_sink(sink)
    yield sink
    log_sink.set_log_sink(previous)
