"""Data models exchanged with the document API."""

from docgate.schemas.documents import (
    CreateDocumentRequest,
    Description,
    Document,
    Product,
    SubmissionItem,
)

__all__ = [
    "CreateDocumentRequest",
    "Description",
    "Document",
    "Product",
    "SubmissionItem",
]
