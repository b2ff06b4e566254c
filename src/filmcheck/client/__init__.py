"""
HTTP client wrapper for the service under test.
"""

from filmcheck.client.client import FilmApiClient
from filmcheck.client.errors import ResponseFormatError, ServiceConnectionError
from filmcheck.client.types import ApiResponse, ClientResponse, FilmQuery, PerformanceMetrics

__all__ = [
    "ApiResponse",
    "ClientResponse",
    "FilmApiClient",
    "FilmQuery",
    "PerformanceMetrics",
    "ResponseFormatError",
    "ServiceConnectionError",
]
