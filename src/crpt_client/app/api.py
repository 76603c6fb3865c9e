from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import ValidationError

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import TimeUnit
from ..core.domain.errors import ConfigError
from ..core.domain.models import Document, SubmissionRequest, SubmissionResult


class CrptClient:
    """Thread-safe client for the CRPT document creation API.

    At most ``request_limit`` requests leave the process per ``time_unit``,
    however many threads call ``create_document`` concurrently. The permit
    pool and HTTP connection are created once and reused until ``close``.

    Example:
        # 5 requests per second (defaults, or CRPT_CLIENT_* environment variables)
        with CrptClient() as client:
            result = client.create_document(document, signature)
            if not result.ok:
                print(result.reason)

        # 100 requests per minute
        with CrptClient(time_unit=TimeUnit.MINUTES, request_limit=100) as client:
            results = client.create_documents(documents, signature)
    """

    def __init__(
        self,
        *,
        time_unit: TimeUnit | str | None = None,
        request_limit: int | None = None,
        api_url: str | None = None,
        http_timeout_seconds: float | None = None,
        max_workers: int | None = None,
    ):
        """Initialize the client.

        Args:
            time_unit: Window length. If None, uses CRPT_CLIENT_TIME_UNIT or SECONDS.
            request_limit: Requests allowed per window. If None, uses
                          CRPT_CLIENT_REQUEST_LIMIT or default (5).
            api_url: Endpoint override (e.g., a sandbox). If None, uses the production URL.
            http_timeout_seconds: Per-request timeout. If None, uses default (20s).
            max_workers: Worker threads for ``create_documents``. If None, uses default (8).

        Raises:
            ConfigError: If any setting is out of range.
        """
        self._container = Container()

        # Build config dict with only provided values
        config_dict: dict[str, object] = {}
        if time_unit is not None:
            config_dict["time_unit"] = time_unit
        if request_limit is not None:
            config_dict["request_limit"] = request_limit
        if api_url is not None:
            config_dict["api_url"] = api_url
        if http_timeout_seconds is not None:
            config_dict["http_timeout_seconds"] = http_timeout_seconds
        if max_workers is not None:
            config_dict["max_workers"] = max_workers

        if config_dict:
            try:
                config = AppConfig(**config_dict)
            except ValidationError as e:
                raise ConfigError(f"Invalid client configuration: {e}") from e
            self._container.config.from_pydantic(config)

        self._container.init_resources()

    def create_document(
        self,
        document: Document,
        signature: str,
        *,
        timeout: float | None = None,
    ) -> SubmissionResult:
        """Submit one document, blocking while the current window is exhausted.

        Args:
            document: Document to create.
            signature: Signature sent as the bearer credential.
            timeout: Seconds to wait for a permit at most. None waits indefinitely.

        Returns:
            SubmissionResult with ``ok`` and ``status_code``, or the failure in ``error``.
        """
        client = self._container.submission_client()
        return client.submit(SubmissionRequest(document=document, signature=signature), timeout=timeout)

    def create_documents(
        self,
        documents: Iterable[Document],
        signature: str,
        *,
        timeout: float | None = None,
    ) -> Sequence[SubmissionResult]:
        """Submit many documents on a bounded worker pool.

        Returns:
            One SubmissionResult per document, in input order.
        """
        uc = self._container.submit_batch_uc()
        requests = [SubmissionRequest(document=d, signature=signature) for d in documents]
        return uc.execute(requests, timeout=timeout)

    def close(self) -> None:
        """Stop the window ticker and close the HTTP connection."""
        self._container.shutdown_resources()

    def __enter__(self) -> CrptClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CrptClient",
    "AppConfig",
]
