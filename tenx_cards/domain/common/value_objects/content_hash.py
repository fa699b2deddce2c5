"""
ContentHash value object.

Fingerprint of the source text a generation was run on. Used for analytics
and duplicate detection, never for security.
"""

import hashlib
from dataclasses import dataclass
from typing import Self

_CONTENT_HASH_LENGTH = 64


@dataclass(frozen=True)
class ContentHash:
    """SHA-256 hex digest of UTF-8 encoded text."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != _CONTENT_HASH_LENGTH:
            raise ValueError("ContentHash must be 64 character hex string (SHA-256)")

        try:
            int(self.value, 16)
        except ValueError as err:
            raise ValueError("ContentHash must be valid hexadecimal string") from err

    @classmethod
    def compute(cls, content: str) -> Self:
        """
        Compute the hash of a piece of text.

        Args:
            content: Text to fingerprint

        Returns:
            ContentHash instance with computed digest
        """
        return cls(hashlib.sha256(content.encode("utf-8")).hexdigest())

    def __str__(self) -> str:
        return self.value


def utf16_length(text: str) -> int:
    """Length of ``text`` in UTF-16 code units, the unit browsers count in."""
    return len(text.encode("utf-16-le")) // 2
