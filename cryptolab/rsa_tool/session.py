"""
RSA Interactive Tool

Drives the three-step textbook RSA walkthrough:

1. Generate Keys: create a key pair, narrating each stage
2. Encrypt: turn a text message into an integer m and compute c = m^e mod n
3. Decrypt: recover m = c^d mod n and decode it back to text

Keys and the last ciphertext are held in memory for the lifetime of the
session and are never persisted.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..config import RSA_MAX_KEY_SIZE, RSA_MIN_KEY_SIZE
from ..core_crypto import rsa_math
from ..core_crypto.rsa_math import ProgressCallback, RSAKeyPair
from ..core_crypto.text_codec import (
    int_to_string,
    max_message_bytes,
    parse_big_int,
    string_to_int,
)
from ..exceptions import (
    InvalidInputError,
    KeysNotGeneratedError,
    MessageTooLargeError,
)
from ..integration.event_log import EventLog, EventType


log = logging.getLogger(__name__)


# ============================================================================
# Results
# ============================================================================

@dataclass
class KeyGenerationResult:
    keys: RSAKeyPair
    duration_s: float


@dataclass
class EncryptionResult:
    message: str
    message_int: int
    ciphertext: int
    duration_ms: float
    public_key: tuple


@dataclass
class DecryptionResult:
    ciphertext: int
    plaintext_int: int
    plaintext: str
    duration_ms: float
    private_key: tuple


# ============================================================================
# Progress narration
# ============================================================================

_STEP_MESSAGES = {
    rsa_math.STAGE_PRIME_P: 'Step 1/4: Generating prime p...',
    rsa_math.STAGE_PRIME_Q: 'Step 2/4: Generating prime q...',
    rsa_math.STAGE_MODULUS: 'Step 3/4: Computing modulus n = p × q...',
    rsa_math.STAGE_TOTIENT: "Step 3/4: Computing Euler's totient φ(n)...",
    rsa_math.STAGE_PRIVATE_EXPONENT: 'Step 4/4: Computing private exponent d...',
    rsa_math.STAGE_COMPLETE: '✓ Key generation complete!',
}


def describe_progress(stage: str, data: Optional[Dict[str, Any]] = None) -> str:
    """
    Human-readable line for a key generation stage.

    Prime stages append the attempt counter and mark the attempt that
    found the prime. Unknown stages yield an empty string.
    """
    message = _STEP_MESSAGES.get(stage, '')
    if message and data and stage in (rsa_math.STAGE_PRIME_P, rsa_math.STAGE_PRIME_Q):
        message += f" Attempt {data['attempt']}"
        if data.get('is_prime'):
            message += ' ✓ Prime found!'
    return message


class ProgressReporter:
    """
    Collects key generation progress and forwards each line to a sink.

    Used as the `progress` callback of RSASession.generate_keys. Failed
    prime attempts are only forwarded when show_attempts is set.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None,
                 show_attempts: bool = False):
        self.sink = sink
        self.show_attempts = show_attempts
        self.stages: List[str] = []
        self.attempts: Dict[str, int] = {}

    def __call__(self, stage: str, data: Optional[Dict[str, Any]] = None) -> None:
        if not self.stages or self.stages[-1] != stage:
            self.stages.append(stage)
        if data is not None:
            self.attempts[stage] = data['attempt']
            if not (self.show_attempts or data.get('is_prime')):
                return
        line = describe_progress(stage, data)
        if line and self.sink is not None:
            self.sink(line)


# ============================================================================
# Session
# ============================================================================

class RSASession:
    """
    Textbook RSA session state.

    Example:
        >>> session = RSASession()
        >>> _ = session.generate_keys(512)
        >>> enc = session.encrypt_message("Hi")
        >>> session.decrypt_ciphertext(str(enc.ciphertext)).plaintext
        'Hi'
    """

    def __init__(self, event_log: Optional[EventLog] = None):
        self.event_log = event_log if event_log is not None else EventLog()
        self.current_keys: Optional[RSAKeyPair] = None
        self.last_ciphertext: Optional[int] = None

    @property
    def has_keys(self) -> bool:
        return self.current_keys is not None

    def _require_keys(self) -> RSAKeyPair:
        if self.current_keys is None:
            raise KeysNotGeneratedError()
        return self.current_keys

    def generate_keys(self, key_size: int,
                      progress: Optional[ProgressCallback] = None) -> KeyGenerationResult:
        """
        Generate and store a new key pair.

        The previous ciphertext is discarded since it belongs to the old key.

        Raises:
            InvalidInputError: Key size outside the allowed range or odd
        """
        if (not isinstance(key_size, int) or key_size % 2
                or not RSA_MIN_KEY_SIZE <= key_size <= RSA_MAX_KEY_SIZE):
            raise InvalidInputError(
                f"Key size must be an even number of bits between "
                f"{RSA_MIN_KEY_SIZE} and {RSA_MAX_KEY_SIZE}"
            )

        self.current_keys = None
        self.last_ciphertext = None

        start = time.perf_counter()
        keys = rsa_math.generate_rsa_keypair(key_size, progress=progress)
        duration = time.perf_counter() - start

        self.current_keys = keys
        self.event_log.record(
            EventType.KEYS_GENERATED,
            key_size=keys.key_size,
            e=keys.public_exponent,
            duration_s=round(duration, 2),
        )
        return KeyGenerationResult(keys=keys, duration_s=duration)

    def encrypt_message(self, message: str) -> EncryptionResult:
        """
        Encrypt a text message with the current public key.

        Raises:
            KeysNotGeneratedError: No keys yet
            InvalidInputError: Blank message
            MessageTooLargeError: Message integer is not below n
        """
        keys = self._require_keys()
        message = message.strip()
        if not message:
            raise InvalidInputError("Please enter a message to encrypt")

        message_int = string_to_int(message)
        if message_int >= keys.modulus:
            error = MessageTooLargeError(
                max_bytes=max_message_bytes(keys.modulus),
                actual_bytes=len(message.encode('utf-8')),
            )
            self.event_log.record_failure('encrypt', error)
            raise error

        start = time.perf_counter()
        ciphertext = keys.encrypt(message_int)
        duration_ms = (time.perf_counter() - start) * 1000

        self.last_ciphertext = ciphertext
        self.event_log.record(
            EventType.MESSAGE_ENCRYPTED,
            message_bytes=len(message.encode('utf-8')),
            duration_ms=round(duration_ms, 2),
        )
        return EncryptionResult(
            message=message,
            message_int=message_int,
            ciphertext=ciphertext,
            duration_ms=duration_ms,
            public_key=keys.public_key,
        )

    def decrypt_ciphertext(self, ciphertext_text: str) -> DecryptionResult:
        """
        Decrypt a ciphertext given as decimal (or 0x-hex) text.

        Raises:
            KeysNotGeneratedError: No keys yet
            InvalidInputError: Blank, malformed or out-of-range ciphertext
        """
        keys = self._require_keys()
        ciphertext = parse_big_int(ciphertext_text)
        if ciphertext >= keys.modulus:
            error = InvalidInputError("Ciphertext must be smaller than the modulus n")
            self.event_log.record_failure('decrypt', error)
            raise error

        start = time.perf_counter()
        plaintext_int = keys.decrypt(ciphertext)
        duration_ms = (time.perf_counter() - start) * 1000
        plaintext = int_to_string(plaintext_int)

        self.event_log.record(
            EventType.MESSAGE_DECRYPTED,
            duration_ms=round(duration_ms, 2),
        )
        return DecryptionResult(
            ciphertext=ciphertext,
            plaintext_int=plaintext_int,
            plaintext=plaintext,
            duration_ms=duration_ms,
            private_key=keys.private_key,
        )
