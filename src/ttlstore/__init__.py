"""
TTL Store

In-process key-value store with time-based expiration, capacity-bound
eviction and collision-safe random key generation.
"""

__version__ = "0.1.0"

from .config import StoreConfig, load_config
from .errors import InvalidKeyTypeError, KeyGenerationError, StoreError
from .eviction import EarliestExpiryEvictor
from .models import Entry, StorageResult
from .store import StorageManager

__all__ = [
    "StorageManager",
    "StoreConfig",
    "load_config",
    "Entry",
    "StorageResult",
    "EarliestExpiryEvictor",
    "StoreError",
    "InvalidKeyTypeError",
    "KeyGenerationError",
]
