from __future__ import annotations

from typing import Protocol


class TransportPort(Protocol):
    def send(self, url: str, body: bytes, signature: str) -> int:
        """POST body to url with a bearer signature and return the HTTP status code.

        Implementations raise TransportError when no response could be obtained.
        """
        ...
