from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.domain.enums import TimeUnit
from ..core.services.submission_client import SubmissionClient
from ..core.usecases.submit_batch import SubmitBatchUseCase
from ..infra.http_transport import HttpTransport
from ..infra.json_serializer import JsonDocumentSerializer
from ..infra.permit_pool import PermitPool
from ..infra.ticker import ThreadTicker

logger = logging.getLogger(__name__)


def permit_pool_resource(time_unit, request_limit):
	"""Create the PermitPool with its background ticker; shut it down on cleanup."""
	unit = time_unit if isinstance(time_unit, TimeUnit) else TimeUnit.from_str(str(time_unit))
	logger.info(f"Initializing permit pool: {request_limit} requests per {unit.name.lower()}")
	pool = PermitPool(capacity=request_limit, window_seconds=unit.seconds, ticker=ThreadTicker())
	try:
		yield pool
	finally:
		logger.debug("Shutting down permit pool")
		pool.shutdown()


def http_transport_resource(http_timeout_seconds):
	logger.info("Initializing HTTP transport")
	transport = HttpTransport(timeout_seconds=http_timeout_seconds)
	try:
		yield transport
	finally:
		logger.debug("Closing HTTP transport")
		transport.close()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	permit_pool = providers.Resource(
		permit_pool_resource,
		time_unit=config.time_unit,
		request_limit=config.request_limit,
	)

	transport = providers.Resource(
		http_transport_resource,
		http_timeout_seconds=config.http_timeout_seconds,
	)

	serializer = providers.Factory(JsonDocumentSerializer)

	submission_client = providers.Singleton(
		SubmissionClient,
		pool=permit_pool,
		serializer=serializer,
		transport=transport,
		url=config.api_url,
	)

	submit_batch_uc = providers.Factory(
		SubmitBatchUseCase,
		client=submission_client,
		max_workers=config.max_workers,
	)
