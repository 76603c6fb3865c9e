from __future__ import annotations

import logging

from pydantic import ValidationError

from ..core.domain.errors import SerializationError
from ..core.domain.models import Document, Product
from ..core.ports.serializer_port import DocumentSerializerPort
from .schemas import DocumentSchema

logger = logging.getLogger(__name__)


class JsonDocumentSerializer(DocumentSerializerPort):
    """Encode a Document as the UTF-8 JSON body expected by the create endpoint.

    Field names are camelCase (``participantInn``, ``products[].uituCode``) and
    unset fields are emitted as ``null``. Output is deterministic: the same
    document always yields the same bytes.
    """

    def serialize(self, document: Document) -> bytes:
        if not isinstance(document, Document):
            raise SerializationError(f"Expected Document, got {type(document).__name__}")
        if not isinstance(document.products, (tuple, list)):
            raise SerializationError(
                f"Expected a sequence of Product in products, got {type(document.products).__name__}"
            )
        for product in document.products:
            if not isinstance(product, Product):
                raise SerializationError(f"Expected Product in products, got {type(product).__name__}")
        try:
            schema = DocumentSchema.from_domain(document)
        except ValidationError as e:
            raise SerializationError(f"Document {document.doc_id!r} is not serializable: {e}") from e
        body = schema.model_dump_json(by_alias=True).encode("utf-8")
        logger.debug(f"Serialized document {document.doc_id!r} ({len(body)} bytes)")
        return body
