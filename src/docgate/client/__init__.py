"""HTTP clients whose calls are paced by an admission gate."""

from docgate.client.documents import DocumentClient

__all__ = ["DocumentClient"]
