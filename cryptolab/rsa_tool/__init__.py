# RSA Tool Module
"""
Textbook RSA walkthrough: key generation, encryption and decryption of
short text messages.
"""

from .session import (
    DecryptionResult,
    EncryptionResult,
    KeyGenerationResult,
    ProgressReporter,
    RSASession,
    describe_progress,
)

__all__ = [
    'DecryptionResult',
    'EncryptionResult',
    'KeyGenerationResult',
    'ProgressReporter',
    'RSASession',
    'describe_progress',
]
