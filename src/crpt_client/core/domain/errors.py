from __future__ import annotations


class CrptClientError(Exception):
    """Base class for every error raised by crpt_client."""


class ConfigError(CrptClientError, ValueError):
    """Invalid pool or client configuration (fatal at construction)."""


class PoolClosedError(CrptClientError):
    """A permit was requested from a pool that has been shut down."""


class PermitTimeoutError(CrptClientError, TimeoutError):
    """A pending acquire was abandoned after its timeout elapsed."""


class SerializationError(CrptClientError):
    """The document could not be encoded into a request body."""


class TransportError(CrptClientError):
    """The request could not be delivered or was answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
