"""Document models for the goods-marking document API.

Field names are snake_case in Python and camelCase on the wire. Unset
fields are omitted from serialized payloads.
"""

from __future__ import annotations

import base64
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

DOCUMENT_FORMAT_MANUAL = "MANUAL"
DOCUMENT_TYPE_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_json(self) -> str:
        """Serialize with camelCase keys, dropping unset fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class Description(_WireModel):
    """Participant description attached to a document."""

    participant_inn: str | None = None


class Product(_WireModel):
    """Single product line of a document.

    Attributes:
        certificate_document: Conformity document type.
        certificate_document_date: Conformity document date.
        certificate_document_number: Conformity document number.
        owner_inn: Taxpayer number of the owner.
        producer_inn: Taxpayer number of the producer.
        production_date: Production date.
        tnved_code: Commodity nomenclature code.
        uit_code: Unique item identifier.
        uitu_code: Unique transport package identifier.
    """

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(_WireModel):
    """Goods introduction document."""

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = None
    import_request: bool | None = None
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: list[Product] | None = None
    reg_date: str | None = None
    reg_number: str | None = None


class CreateDocumentRequest(_WireModel):
    """Request body for the document creation endpoint.

    Attributes:
        document_format: Submission format, always "MANUAL" for JSON documents.
        product_document: Base64-encoded JSON of the document.
        type: Document type code.
        signature: Detached signature of the document.
    """

    document_format: str = Field(default=DOCUMENT_FORMAT_MANUAL)
    product_document: str
    type: str = Field(default=DOCUMENT_TYPE_INTRODUCE_GOODS)
    signature: str

    @classmethod
    def from_document(cls, document: Document, signature: str) -> CreateDocumentRequest:
        """Wrap a document and its signature into a request body."""
        encoded = base64.b64encode(document.to_json().encode("utf-8")).decode("ascii")
        return cls(product_document=encoded, signature=signature)


class SubmissionItem(_WireModel):
    """A document paired with its signature, as read from a batch file."""

    document: Document
    signature: str

    @classmethod
    def load_items(cls, path: Path) -> list[SubmissionItem]:
        """Load submission items from a JSONL file, one item per line.

        Blank lines are skipped.

        Raises:
            ValueError: If a line is not valid JSON or fails validation.
        """
        items: list[SubmissionItem] = []
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    items.append(cls.model_validate_json(line))
                except ValidationError as e:
                    raise ValueError(f"Invalid item on line {line_no}: {e}") from e
        return items
