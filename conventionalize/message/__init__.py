"""Commit Message Normalization Package"""

from conventionalize.message.normalizer import MessageNormalizer, CONVENTIONAL_RE, BREAKING_MARK

__all__ = [
    "MessageNormalizer",
    "CONVENTIONAL_RE",
    "BREAKING_MARK",
]
