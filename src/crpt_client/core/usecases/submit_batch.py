from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from ..domain.errors import ConfigError
from ..domain.models import SubmissionRequest, SubmissionResult
from ..services.submission_client import SubmissionClient

logger = logging.getLogger(__name__)


class SubmitBatchUseCase:
    def __init__(self, client: SubmissionClient, max_workers: int = 8) -> None:
        if max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {max_workers!r}")
        self._client = client
        self._max_workers = max_workers

    def execute(
        self,
        requests: Iterable[SubmissionRequest],
        *,
        timeout: float | None = None,
    ) -> list[SubmissionResult]:
        items = list(requests)
        if not items:
            return []
        workers = min(self._max_workers, len(items))
        logger.info(f"Submitting {len(items)} documents with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="crpt-submit") as executor:
            results = list(executor.map(lambda r: self._client.submit(r, timeout=timeout), items))

        failed = sum(1 for r in results if not r.ok)
        logger.info(f"Batch finished: {len(results) - failed} succeeded, {failed} failed")
        return results
