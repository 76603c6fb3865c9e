from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..config.signature import fingerprint_signature
from ..core.domain.errors import TransportError
from ..core.ports.transport_port import TransportPort

logger = logging.getLogger(__name__)


class HttpTransport(TransportPort):
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10
        )

    def send(self, url: str, body: bytes, signature: str) -> int:
        headers = {
            "Content-Type": "application/json",
            # bytes: the signature may be non-ASCII
            "Authorization": f"Bearer {signature}".encode("utf-8"),
        }
        logger.debug(f"POST {url} ({len(body)} bytes, signature={fingerprint_signature(signature)})")
        try:
            resp = self._client.post(url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"POST {url} failed: {e}") from e
        logger.debug(f"POST {url} -> {resp.status_code}")
        return resp.status_code

    def close(self) -> None:
        self._client.close()
