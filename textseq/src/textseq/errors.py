"""Central exception hierarchy for text sequences."""
from __future__ import annotations

from .models import PositionFault


class TextSeqError(Exception):
    """Base exception for all text sequence failures"""


class EncodingError(TextSeqError, ValueError):
    """Raised when a byte buffer is not a valid UTF-8 encoding"""

    def __init__(self, message: str, *, offset: int | None = None, reason: str = "") -> None:
        super().__init__(message)
        self.offset = offset
        self.reason = reason


class InvalidPositionError(TextSeqError, IndexError):
    """Raised when an operation receives a byte offset that is not a usable boundary"""

    def __init__(self, message: str, *, position: int, fault: PositionFault) -> None:
        super().__init__(message)
        self.position = position
        self.fault = fault


__all__ = ["TextSeqError", "EncodingError", "InvalidPositionError"]
