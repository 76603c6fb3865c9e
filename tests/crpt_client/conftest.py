"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import json
import threading
import time

import httpx
import pytest
from typer.testing import CliRunner

from crpt_client.core.domain.errors import SerializationError, TransportError
from crpt_client.core.domain.models import Document, Product
from crpt_client.core.ports.ticker_port import TickerPort


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


class ManualTicker(TickerPort):
    """Ticker driven explicitly by the test; simulates window boundaries without sleeping."""

    def __init__(self) -> None:
        self.interval = None
        self._callback = None
        self.stopped = False
        self.ticks = 0

    def start(self, interval, callback) -> None:
        self.interval = interval
        self._callback = callback

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            if self.stopped or self._callback is None:
                return
            self.ticks += 1
            self._callback()

    def stop(self) -> None:
        self.stopped = True


@pytest.fixture
def ticker() -> ManualTicker:
    """A ticker that only fires when the test calls tick()."""
    return ManualTicker()


@pytest.fixture
def document() -> Document:
    return Document(
        participant_inn="123123123554",
        doc_id="docID",
        doc_status="status",
        doc_type="doc_type",
        import_request=True,
        owner_inn="981737129398",
        production_date="2024-02-23",
        production_type="ProductionType",
        products=(
            Product(
                certificate_document="Certificate",
                certificate_document_date="2024-02-23",
                certificate_document_number="CertificateDocumentNumber",
                owner_inn="981737129398",
                producer_inn="8971892739217",
                production_date="2024-02-23",
                tnved_code="TnvedCode",
                uit_code="31231",
                uitu_code="1231",
            ),
        ),
        reg_date="2024-02-23",
        reg_number="81763263",
    )


class StubSerializer:
    """Serializer that fails for documents whose doc_id is listed in ``fail_ids``."""

    def __init__(self, fail_ids: set[str] | None = None) -> None:
        self.fail_ids = set(fail_ids or ())
        self.calls = 0

    def serialize(self, document: Document) -> bytes:
        self.calls += 1
        if document.doc_id in self.fail_ids:
            raise SerializationError(f"cannot encode {document.doc_id}")
        return json.dumps({"docId": document.doc_id}).encode("utf-8")


class RecordingTransport:
    """Transport stub recording calls and the peak number of concurrent sends."""

    def __init__(self, status: int = 200, delay: float = 0.0, error: Exception | None = None) -> None:
        self.status = status
        self.delay = delay
        self.error = error
        self.calls: list[tuple[str, bytes, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def send(self, url: str, body: bytes, signature: str) -> int:
        with self._lock:
            self.calls.append((url, body, signature))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.status
        finally:
            with self._lock:
                self.in_flight -= 1


@pytest.fixture
def serializer() -> StubSerializer:
    return StubSerializer()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def failing_transport() -> RecordingTransport:
    return RecordingTransport(error=TransportError("connection refused"))


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll predicate until it is true or timeout elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request is recorded in ``add_response.calls``.
    """
    responses = {}
    calls_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(url: str, method: str = "POST", status_code: int = 200, json_payload: dict | None = None):
        """Register a mock response for a given URL and method."""
        body = json.dumps(json_payload).encode("utf-8") if json_payload is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """Return the registered response or a 404."""
        request.read()
        calls_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, body = responses[key]
            return httpx.Response(status, content=body)
        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response


@pytest.fixture(name="wait_until")
def wait_until_fixture():
    return wait_until


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport with custom status/delay/error."""
    return RecordingTransport


@pytest.fixture
def make_serializer():
    """Factory for StubSerializer failing on selected doc ids."""
    return StubSerializer
