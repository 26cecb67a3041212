"""Protocols the authorization engine depends on."""

from .store_protocols import PermissionStoreProtocol
from .cache_protocols import CacheStoreProtocol

__all__ = [
    "PermissionStoreProtocol",
    "CacheStoreProtocol",
]
