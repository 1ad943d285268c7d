"""Public interface for the HTTP IPAM adapter."""

from __future__ import annotations

from .client import HttpIpamBackend, IpamApiError
from .schema import AssignRequest, AssignResponse, ErrorResponse, SearchResponse

__all__ = [
    "AssignRequest",
    "AssignResponse",
    "ErrorResponse",
    "HttpIpamBackend",
    "IpamApiError",
    "SearchResponse",
]
