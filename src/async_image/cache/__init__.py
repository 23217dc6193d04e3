"""
In-memory image cache package.

Provides the generic thread-safe store and the process-wide session cache.
"""

from .session import SessionImageCache, canonical_url, session_cache
from .store import CacheStore

__all__ = [
    "CacheStore",
    "SessionImageCache",
    "canonical_url",
    "session_cache",
]
