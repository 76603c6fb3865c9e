from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.domain.models import Document, Product


class _WireModel(BaseModel):
	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		extra="forbid",
		frozen=True,
	)


class ProductSchema(_WireModel):
	"""Товар в составе документа (product entry)"""
	certificate_document: Optional[str] = None
	certificate_document_date: Optional[str] = None
	certificate_document_number: Optional[str] = None
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[str] = None
	tnved_code: Optional[str] = None
	uit_code: Optional[str] = None
	uitu_code: Optional[str] = None

	@classmethod
	def from_domain(cls, product: Product) -> "ProductSchema":
		return cls(
			certificate_document=product.certificate_document,
			certificate_document_date=product.certificate_document_date,
			certificate_document_number=product.certificate_document_number,
			owner_inn=product.owner_inn,
			producer_inn=product.producer_inn,
			production_date=product.production_date,
			tnved_code=product.tnved_code,
			uit_code=product.uit_code,
			uitu_code=product.uitu_code,
		)

	def to_domain(self) -> Product:
		return Product(**self.model_dump())


class DocumentSchema(_WireModel):
	"""Документ ввода в оборот (document creation payload)"""
	participant_inn: Optional[str] = None
	doc_id: Optional[str] = None
	doc_status: Optional[str] = None
	doc_type: Optional[str] = None
	import_request: bool = False
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[str] = None
	production_type: Optional[str] = None
	products: Optional[list[ProductSchema]] = None
	reg_date: Optional[str] = None
	reg_number: Optional[str] = None

	@classmethod
	def from_domain(cls, document: Document) -> "DocumentSchema":
		return cls(
			participant_inn=document.participant_inn,
			doc_id=document.doc_id,
			doc_status=document.doc_status,
			doc_type=document.doc_type,
			import_request=document.import_request,
			owner_inn=document.owner_inn,
			producer_inn=document.producer_inn,
			production_date=document.production_date,
			production_type=document.production_type,
			products=[ProductSchema.from_domain(p) for p in document.products],
			reg_date=document.reg_date,
			reg_number=document.reg_number,
		)

	def to_domain(self) -> Document:
		data = self.model_dump(exclude={"products"})
		products = tuple(p.to_domain() for p in (self.products or []))
		return Document(products=products, **data)
