"""HTTP access shared by content store adapters."""

from .http_client import ContentStoreHTTPClient, HTTPClient, HTTPResult

__all__ = ["ContentStoreHTTPClient", "HTTPClient", "HTTPResult"]
