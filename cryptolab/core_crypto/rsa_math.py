"""
Textbook RSA Mathematics

Implements the arithmetic behind the RSA interactive tool:
- Modular exponentiation (square-and-multiply algorithm)
- Extended Euclidean Algorithm for modular inverse
- Miller-Rabin primality testing
- Prime generation with per-attempt progress reporting
- RSA key pair generation (p, q, n, φ(n), e, d)
- Textbook encryption, decryption, signing and verification

Note: This is "textbook RSA" without padding. Real-world RSA uses OAEP
      (encryption) or PSS (signatures); see RSAKeyPair.export_pem() for how
      the same numbers are handed to a production library.
"""

import logging
import secrets
from typing import Any, Callable, Dict, Optional, Tuple

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..config import MILLER_RABIN_ROUNDS, RSA_PUBLIC_EXPONENT


log = logging.getLogger(__name__)

# (stage, data) callback used to narrate key generation
ProgressCallback = Callable[[str, Optional[Dict[str, Any]]], None]

STAGE_PRIME_P = 'Generating prime p'
STAGE_PRIME_Q = 'Generating prime q'
STAGE_MODULUS = 'Computing modulus n'
STAGE_TOTIENT = 'Computing φ(n)'
STAGE_PRIVATE_EXPONENT = 'Computing private exponent d'
STAGE_COMPLETE = 'Complete'

KEYGEN_STAGES = (
    STAGE_PRIME_P,
    STAGE_PRIME_Q,
    STAGE_MODULUS,
    STAGE_TOTIENT,
    STAGE_PRIVATE_EXPONENT,
    STAGE_COMPLETE,
)

_SMALL_PRIMES = (5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply.

    Computes (base^exponent) mod modulus by walking the exponent bits from
    least to most significant, squaring the base at every step and folding
    it into the result whenever the current bit is set.

    Time complexity: O(log exponent) multiplications

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base %= modulus
    result = 1
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def gcd(a: int, b: int) -> int:
    """Greatest common divisor (Euclid)."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Iterative form, so multi-thousand-bit inputs do not hit the recursion
    limit.

    Returns:
        Tuple (g, x, y) where a*x + b*y = g = gcd(a, b)
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y
    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """
    Modular multiplicative inverse: x such that (a * x) mod m = 1.

    Raises:
        ValueError: If the inverse doesn't exist (gcd(a, m) != 1)
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")
    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise ValueError(f"Modular inverse doesn't exist (gcd({a}, {m}) = {g})")
    return x % m


def is_probably_prime_miller_rabin(n: int, k: int = MILLER_RABIN_ROUNDS) -> bool:
    """
    Miller-Rabin primality test.

    Probability of a composite passing is at most (1/4)^k.

    Args:
        n: Number to test for primality
        k: Number of random witnesses

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False
    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    # n - 1 = 2^r * d with d odd
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(k):
        a = secrets.randbelow(n - 3) + 2  # witness in [2, n-2]
        x = mod_exp(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = mod_exp(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(
    bits: int,
    k: int = MILLER_RABIN_ROUNDS,
    on_attempt: Optional[Callable[[int, bool], None]] = None,
    accept: Optional[Callable[[int], bool]] = None,
) -> int:
    """
    Generate a random prime of exactly `bits` bits.

    The two most significant bits of every candidate are set, so the product
    of two such primes always has exactly 2 * bits bits.

    Args:
        bits: Desired bit length of the prime
        k: Number of Miller-Rabin rounds
        on_attempt: Called as on_attempt(attempt, is_prime) after each
            candidate; attempt counts from 1
        accept: Extra condition a prime must satisfy to be returned

    Raises:
        ValueError: If bits < 2
    """
    if bits < 2:
        raise ValueError("Bit length must be at least 2")

    top_bits = 0b11 << (bits - 2)
    attempt = 0
    while True:
        attempt += 1
        candidate = secrets.randbits(bits) | top_bits | 1
        found = is_probably_prime_miller_rabin(candidate, k)
        if found and accept is not None:
            found = accept(candidate)
        if on_attempt is not None:
            on_attempt(attempt, found)
        if found:
            log.debug("found %d-bit prime after %d attempts", bits, attempt)
            return candidate


def _report(progress: Optional[ProgressCallback], stage: str,
            data: Optional[Dict[str, Any]] = None) -> None:
    if progress is not None:
        progress(stage, data)


def _prime_reporter(progress: Optional[ProgressCallback], stage: str):
    if progress is None:
        return None

    def on_attempt(attempt: int, is_prime: bool) -> None:
        progress(stage, {'attempt': attempt, 'is_prime': is_prime})

    return on_attempt


def generate_rsa_keypair(
    bits: int = 2048,
    e: int = RSA_PUBLIC_EXPONENT,
    progress: Optional[ProgressCallback] = None,
) -> 'RSAKeyPair':
    """
    Generate a textbook RSA key pair.

    Steps:
    1. Generate prime p (bits/2 bits, gcd(e, p-1) = 1)
    2. Generate prime q (bits/2 bits, q != p, gcd(e, q-1) = 1)
    3. Compute n = p × q and φ(n) = (p-1)(q-1)
    4. Compute d = e^(-1) mod φ(n)

    Args:
        bits: Bit length of the modulus n (even, at least 16)
        e: Public exponent (odd, > 1)
        progress: Optional (stage, data) callback; see KEYGEN_STAGES

    Returns:
        RSAKeyPair with n.bit_length() == bits

    Raises:
        ValueError: For an odd or too small bit length, or a bad exponent
    """
    if bits < 16 or bits % 2:
        raise ValueError("Key size must be an even number of bits, at least 16")
    if e < 3 or e % 2 == 0:
        raise ValueError("Public exponent must be odd and greater than 1")

    prime_bits = bits // 2

    _report(progress, STAGE_PRIME_P)
    p = generate_prime(
        prime_bits,
        on_attempt=_prime_reporter(progress, STAGE_PRIME_P),
        accept=lambda c: gcd(e, c - 1) == 1,
    )

    _report(progress, STAGE_PRIME_Q)
    q = generate_prime(
        prime_bits,
        on_attempt=_prime_reporter(progress, STAGE_PRIME_Q),
        accept=lambda c: c != p and gcd(e, c - 1) == 1,
    )

    _report(progress, STAGE_MODULUS)
    n = p * q

    _report(progress, STAGE_TOTIENT)
    phi = (p - 1) * (q - 1)

    _report(progress, STAGE_PRIVATE_EXPONENT)
    d = mod_inverse(e, phi)

    _report(progress, STAGE_COMPLETE)
    log.info("generated %d-bit RSA key pair (e=%d)", n.bit_length(), e)
    return RSAKeyPair((e, n), (d, n), p=p, q=q, phi=phi)


def _check_range(value: int, n: int, what: str) -> None:
    if value < 0 or value >= n:
        raise ValueError(f"{what} must satisfy 0 <= {what.lower()} < n")


def rsa_encrypt(message: int, public_key: Tuple[int, int]) -> int:
    """Textbook encryption: c = m^e mod n."""
    e, n = public_key
    _check_range(message, n, "Message")
    return mod_exp(message, e, n)


def rsa_decrypt(ciphertext: int, private_key: Tuple[int, int]) -> int:
    """Textbook decryption: m = c^d mod n."""
    d, n = private_key
    _check_range(ciphertext, n, "Ciphertext")
    return mod_exp(ciphertext, d, n)


def rsa_sign(message: int, private_key: Tuple[int, int]) -> int:
    """Textbook signature: s = m^d mod n."""
    d, n = private_key
    _check_range(message, n, "Message")
    return mod_exp(message, d, n)


def rsa_verify(message: int, signature: int, public_key: Tuple[int, int]) -> bool:
    """Check s^e mod n == m."""
    e, n = public_key
    if not 0 <= signature < n:
        return False
    return mod_exp(signature, e, n) == message


def bytes_to_int(data: bytes) -> int:
    """Convert bytes to integer (big-endian)."""
    return int.from_bytes(data, byteorder='big')


def int_to_bytes(n: int, length: Optional[int] = None) -> bytes:
    """Convert integer to bytes (big-endian), at least one byte."""
    if length is None:
        length = max(1, (n.bit_length() + 7) // 8)
    return n.to_bytes(length, byteorder='big')


class RSAKeyPair:
    """
    RSA key pair container.

    Besides the public key (e, n) and private key (d, n) it keeps the
    educational values p, q and φ(n) so the tool can show how the key was
    built. None of these are ever persisted.

    Example:
        >>> keypair = RSAKeyPair.generate(bits=512)
        >>> keypair.decrypt(keypair.encrypt(12345))
        12345
    """

    def __init__(
        self,
        public_key: Tuple[int, int],
        private_key: Tuple[int, int],
        p: Optional[int] = None,
        q: Optional[int] = None,
        phi: Optional[int] = None,
    ):
        if public_key[1] != private_key[1]:
            raise ValueError("Public and private key moduli differ")
        self._public_key = public_key
        self._private_key = private_key
        self._e, self._n = public_key
        self._d = private_key[0]
        self.p = p
        self.q = q
        self.phi = phi

    @classmethod
    def generate(cls, bits: int = 2048,
                 progress: Optional[ProgressCallback] = None) -> 'RSAKeyPair':
        """Generate a new key pair; see generate_rsa_keypair."""
        return generate_rsa_keypair(bits, progress=progress)

    @property
    def public_key(self) -> Tuple[int, int]:
        """Public key (e, n)."""
        return self._public_key

    @property
    def private_key(self) -> Tuple[int, int]:
        """Private key (d, n)."""
        return self._private_key

    @property
    def modulus(self) -> int:
        return self._n

    @property
    def public_exponent(self) -> int:
        return self._e

    @property
    def private_exponent(self) -> int:
        return self._d

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self._n.bit_length()

    def encrypt(self, message: int) -> int:
        return rsa_encrypt(message, self._public_key)

    def decrypt(self, ciphertext: int) -> int:
        return rsa_decrypt(ciphertext, self._private_key)

    def sign(self, message: int) -> int:
        return rsa_sign(message, self._private_key)

    def verify(self, message: int, signature: int) -> bool:
        return rsa_verify(message, signature, self._public_key)

    def export_pem(self) -> Tuple[bytes, bytes]:
        """
        Serialize the key with the `cryptography` library.

        Shows the same textbook numbers in the formats real deployments
        store: PKCS#8 for the private key, SubjectPublicKeyInfo for the
        public key. CRT parameters are derived from p, q and d.

        Returns:
            Tuple (private_pem, public_pem)

        Raises:
            ValueError: If the primes are unknown or the numbers are
                rejected by the backend
        """
        if self.p is None or self.q is None:
            raise ValueError("PEM export needs the primes p and q")

        public_numbers = rsa.RSAPublicNumbers(self._e, self._n)
        private_numbers = rsa.RSAPrivateNumbers(
            p=self.p,
            q=self.q,
            d=self._d,
            dmp1=rsa.rsa_crt_dmp1(self._d, self.p),
            dmq1=rsa.rsa_crt_dmq1(self._d, self.q),
            iqmp=rsa.rsa_crt_iqmp(self.p, self.q),
            public_numbers=public_numbers,
        )
        private_key = private_numbers.private_key(default_backend())

        private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return private_pem, public_pem

    def __repr__(self) -> str:
        return f"RSAKeyPair(bits={self.key_size}, e={self._e})"
