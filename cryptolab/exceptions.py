"""
Domain errors raised by the CryptoLab demonstration flows.

The low-level math in core_crypto raises plain ValueError; the flows
translate those into these types carrying a user-facing message.
"""


class CryptoLabError(Exception):
    """Base class for all CryptoLab errors."""
    pass


class InvalidInputError(CryptoLabError, ValueError):
    """Raised when user input is empty, malformed or out of range."""
    pass


class KeysNotGeneratedError(CryptoLabError):
    """Raised when an RSA operation runs before key generation."""

    def __init__(self, message: str = "Please generate keys first!"):
        super().__init__(message)


class MessageTooLargeError(InvalidInputError):
    """Raised when a message does not fit below the RSA modulus."""

    def __init__(self, max_bytes: int, actual_bytes: int):
        self.max_bytes = max_bytes
        self.actual_bytes = actual_bytes
        super().__init__(
            f"Message too large! Maximum message length: ~{max_bytes} bytes. "
            f"Your message: {actual_bytes} bytes."
        )


class UnsupportedAlgorithmError(CryptoLabError):
    """Raised for unknown hash algorithms or ones the backend lacks."""

    def __init__(self, algorithm: str, reason: str = "Invalid algorithm selected"):
        self.algorithm = algorithm
        super().__init__(f"{reason}: {algorithm}")
