from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Product:
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[str] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None

    def with_updates(self, **kwargs) -> "Product":
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Document:
    participant_inn: Optional[str] = None
    doc_id: Optional[str] = None
    doc_status: Optional[str] = None
    doc_type: Optional[str] = None
    import_request: bool = False
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    production_type: Optional[str] = None
    products: tuple[Product, ...] = field(default_factory=tuple)
    reg_date: Optional[str] = None
    reg_number: Optional[str] = None

    def with_updates(self, **kwargs) -> "Document":
        return replace(self, **kwargs)


@dataclass(frozen=True)
class SubmissionRequest:
    document: Document
    signature: str = field(repr=False)


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    status_code: Optional[int] = None
    error: Optional[Exception] = None

    @staticmethod
    def success(status_code: int) -> "SubmissionResult":
        return SubmissionResult(ok=True, status_code=status_code)

    @staticmethod
    def failure(error: Exception, *, status_code: Optional[int] = None) -> "SubmissionResult":
        return SubmissionResult(ok=False, status_code=status_code, error=error)

    @property
    def reason(self) -> Optional[str]:
        if self.error is None:
            return None
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True, eq=False)
class Permit:
    """Authorization for one outbound call, issued by a PermitPool.

    Permits compare by identity; ``window`` is the replenishment window the
    permit was issued in.
    """

    serial: int
    window: int
