"""HTTP adapters."""

from channelkit.adapters.http.document_client import DocumentClient

__all__ = ["DocumentClient"]
