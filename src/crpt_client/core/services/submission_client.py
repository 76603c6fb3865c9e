from __future__ import annotations

import logging

from ...config.signature import fingerprint_signature
from ...config.urls import DOCUMENT_CREATE_URL
from ..domain.errors import (
    PermitTimeoutError,
    PoolClosedError,
    SerializationError,
    TransportError,
)
from ..domain.models import SubmissionRequest, SubmissionResult
from ..ports.permit_pool_port import PermitPoolPort
from ..ports.serializer_port import DocumentSerializerPort
from ..ports.transport_port import TransportPort

logger = logging.getLogger(__name__)


class SubmissionClient:
    """Send documents through a PermitPool so calls per window stay bounded.

    Each ``submit`` holds exactly one permit from acquisition until the
    transport returns, and releases it exactly once whatever the outcome.
    Failures are reported in the returned SubmissionResult; nothing is retried.
    """

    def __init__(
        self,
        pool: PermitPoolPort,
        serializer: DocumentSerializerPort,
        transport: TransportPort,
        url: str = DOCUMENT_CREATE_URL,
    ) -> None:
        self._pool = pool
        self._serializer = serializer
        self._transport = transport
        self._url = url

    def submit(self, request: SubmissionRequest, *, timeout: float | None = None) -> SubmissionResult:
        doc_id = getattr(request.document, "doc_id", None)
        try:
            permit = self._pool.acquire(timeout)
        except (PoolClosedError, PermitTimeoutError) as e:
            logger.warning(f"Document {doc_id!r} not submitted: {e}")
            return SubmissionResult.failure(e)

        logger.debug(f"Acquired permit #{permit.serial} for document {doc_id!r}")
        try:
            result = self._send(request, doc_id)
        finally:
            self._pool.release(permit)
            logger.debug(f"Released permit #{permit.serial}")

        if result.ok:
            logger.info(f"Document {doc_id!r} submitted (status {result.status_code})")
        else:
            logger.info(f"Document {doc_id!r} failed: {result.reason}")
        return result

    def _send(self, request: SubmissionRequest, doc_id: object) -> SubmissionResult:
        try:
            body = self._serializer.serialize(request.document)
        except SerializationError as e:
            return SubmissionResult.failure(e)

        logger.debug(
            f"Sending document {doc_id!r} "
            f"(signature={fingerprint_signature(request.signature)})"
        )
        try:
            status = self._transport.send(self._url, body, request.signature)
        except TransportError as e:
            return SubmissionResult.failure(e, status_code=e.status_code)

        if 200 <= status < 300:
            return SubmissionResult.success(status)
        error = TransportError(f"Unexpected status {status} from {self._url}", status_code=status)
        return SubmissionResult.failure(error, status_code=status)
