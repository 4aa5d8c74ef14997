"""
Client for the urlfreezer link resolution service.
"""

from .api.models import (
    LinkAction, LinkToFetch, LinkInfo,
    UrlFreezerError, InvalidHostError, TransportError,
    ProtocolDecodeError, UrlParseError, IoError
)
from .api.client import Client
from .api.async_client import AsyncClient
from .batch.csv_adapter import fetch_with_csv, async_fetch_with_csv

__all__ = [
    'LinkAction', 'LinkToFetch', 'LinkInfo',
    'UrlFreezerError', 'InvalidHostError', 'TransportError',
    'ProtocolDecodeError', 'UrlParseError', 'IoError',
    'Client', 'AsyncClient', 'fetch_with_csv', 'async_fetch_with_csv',
]
