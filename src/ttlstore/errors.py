"""Exceptions raised by the store.

Only programmer errors are raised. Expected outcomes such as adding a key
that already exists are reported through ``StorageResult`` instead.
"""


class StoreError(Exception):
    """Base error for ttlstore."""


class InvalidKeyTypeError(StoreError, TypeError):
    """Raised when a key is not a string."""


class KeyGenerationError(StoreError, RuntimeError):
    """Raised when every generated key collided with an existing one."""
