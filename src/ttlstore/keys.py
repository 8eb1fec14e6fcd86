"""Random hex key generation with collision retries."""

import secrets
from typing import Callable

from .errors import KeyGenerationError

MAX_RETRIES = 15


class KeyGenerator:
    """Generates ``key_length`` hex characters not already taken.

    Args:
        key_length: Number of hex characters (two per random byte)
        max_retries: Extra attempts after the first collision
    """

    def __init__(self, key_length: int, max_retries: int = MAX_RETRIES):
        self.key_length = key_length
        self.max_retries = max_retries

    def generate(self) -> str:
        return secrets.token_hex(self.key_length // 2)

    def unique(self, exists: Callable[[str], bool]) -> str:
        """Return a key for which ``exists(key)`` is False.

        Raises:
            KeyGenerationError: If all ``1 + max_retries`` candidates collide.
        """
        for _ in range(1 + self.max_retries):
            key = self.generate()
            if not exists(key):
                return key
        raise KeyGenerationError(
            f"No free key of length {self.key_length} after "
            f"{1 + self.max_retries} attempts"
        )
