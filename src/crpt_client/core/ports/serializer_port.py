from __future__ import annotations

from typing import Protocol

from ..domain.models import Document


class DocumentSerializerPort(Protocol):
    def serialize(self, document: Document) -> bytes:
        """Return a deterministic wire encoding of the document.

        Implementations raise SerializationError when the document cannot be encoded.
        """
        ...
