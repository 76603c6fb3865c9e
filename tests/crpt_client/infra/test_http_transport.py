from __future__ import annotations

import httpx
import pytest

from crpt_client.core.domain.errors import TransportError
from crpt_client.infra.http_transport import HttpTransport


def _transport_with(handler) -> HttpTransport:
    ht = HttpTransport()
    ht._client = httpx.Client(transport=httpx.MockTransport(handler), timeout=0.1)
    return ht


def test_send_posts_body_with_json_and_bearer_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        seen.append(request)
        return httpx.Response(200)

    ht = _transport_with(handler)
    status = ht.send("https://api.test/create", b'{"docId":"1"}', "sig-123")

    assert status == 200
    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == "https://api.test/create"
    assert req.content == b'{"docId":"1"}'
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["Authorization"] == "Bearer sig-123"


def test_send_returns_non_2xx_status_without_raising():
    ht = _transport_with(lambda request: httpx.Response(403))
    assert ht.send("https://api.test/create", b"{}", "sig") == 403


def test_send_wraps_network_errors_in_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    ht = _transport_with(handler)
    with pytest.raises(TransportError) as excinfo:
        ht.send("https://api.test/create", b"{}", "sig")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert excinfo.value.status_code is None


def test_transport_follows_redirects():
    ht = HttpTransport()
    assert ht._client.follow_redirects is True
    ht.close()


def test_transport_applies_base_headers(mock_httpx_client):
    mock_httpx_client("https://api.test/create", status_code=201)
    ht = HttpTransport(base_headers={"User-Agent": "crpt-client-test"})
    try:
        assert ht.send("https://api.test/create", b"{}", "sig") == 201
    finally:
        ht.close()
    assert mock_httpx_client.calls[0].headers["User-Agent"] == "crpt-client-test"


def test_send_accepts_non_ascii_signature():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    ht = _transport_with(handler)
    assert ht.send("https://api.test/create", b"{}", "Подпись") == 200
    raw = [v for k, v in seen[0].headers.raw if k.lower() == b"authorization"]
    assert raw == ["Bearer Подпись".encode("utf-8")]
