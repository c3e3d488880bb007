"""
RC5 Core - Error Taxonomy.

Every failure the cipher reports to a caller derives from CryptoError. The
subclasses separate problems with the engine configuration (fatal, raised at
construction) from problems with the inputs of a single call (recoverable by
retrying with correct inputs).

Wrapping arithmetic is correct behavior for RC5, so there is no overflow
error. Mixing Words of different widths is a programming error and raises
TypeError instead.
"""

from typing import Any, Dict, Optional


class CryptoError(Exception):
    """
    Base exception for cryptographic errors.

    Attributes:
        message: Human readable description
        code: Numeric error code, grouped by error class
        details: Extra structured context (expected/actual sizes, widths, ...)
    """

    def __init__(self, message: str, code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        base = f"CryptoError: {self.message}"
        if self.code:
            base += f" (Code: {self.code})"
        return base


class ConfigurationError(CryptoError):
    """Unsupported word size, round count, key size or magic constants."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=1001, details=details)


class KeyLengthError(CryptoError):
    """The key does not have the configured number of bytes."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Invalid key length: expected {expected} bytes, got {actual}",
            code=2001,
            details={"expected": expected, "actual": actual},
        )


class BufferBoundsError(CryptoError):
    """The block is not exactly two words long."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Invalid block length: expected {expected} bytes, got {actual}",
            code=3001,
            details={"expected": expected, "actual": actual},
        )
