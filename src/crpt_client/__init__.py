"""crpt_client package: app/core/infra/config.

Expose library-friendly API client at the package level.
"""

from .app.api import AppConfig, CrptClient
from .core.domain.enums import TimeUnit
from .core.domain.errors import (
    ConfigError,
    CrptClientError,
    PermitTimeoutError,
    PoolClosedError,
    SerializationError,
    TransportError,
)
from .core.domain.models import Document, Product, SubmissionRequest, SubmissionResult
from .core.services.submission_client import SubmissionClient
from .infra.permit_pool import PermitPool

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptClient",
    "AppConfig",
    "TimeUnit",
    "Document",
    "Product",
    "SubmissionRequest",
    "SubmissionResult",
    "SubmissionClient",
    "PermitPool",
    "CrptClientError",
    "ConfigError",
    "PoolClosedError",
    "PermitTimeoutError",
    "SerializationError",
    "TransportError",
]
