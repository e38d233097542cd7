"""
Hash Core

Computes digests for the hash visualizer using the `cryptography` hash
primitives. Algorithm metadata (display name, output size, broken/secure)
lives in cryptolab.config; this module maps each entry to a primitive and
asks the backend whether it can actually run it (an OpenSSL build in FIPS
mode, for example, refuses MD5).
"""

import logging
from typing import Callable, Dict, List

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes

from ..config import AlgorithmInfo, get_algorithm_info
from ..core_crypto.text_codec import encode_text
from ..exceptions import UnsupportedAlgorithmError


log = logging.getLogger(__name__)

_PRIMITIVES: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    'MD5': hashes.MD5,
    'SHA-1': hashes.SHA1,
    'SHA-256': hashes.SHA256,
    'SHA-384': hashes.SHA384,
    'SHA-512': hashes.SHA512,
    'SHA3-256': hashes.SHA3_256,
    'SHA3-512': hashes.SHA3_512,
}


def resolve_algorithm(algorithm: str) -> AlgorithmInfo:
    """
    Look up registry metadata for an algorithm name.

    Raises:
        UnsupportedAlgorithmError: If the name is not registered
    """
    info = get_algorithm_info(algorithm)
    if info is None or info.key not in _PRIMITIVES:
        raise UnsupportedAlgorithmError(algorithm)
    return info


def is_algorithm_available(algorithm: str) -> bool:
    """True if the algorithm is registered and the backend supports it."""
    info = get_algorithm_info(algorithm)
    if info is None or info.key not in _PRIMITIVES:
        return False
    return default_backend().hash_supported(_PRIMITIVES[info.key]())


def unavailable_algorithms() -> List[str]:
    """
    Registered algorithms the backend cannot compute.

    Each one is logged as a warning so a missing digest is visible before
    the user selects it.
    """
    missing = [key for key in _PRIMITIVES if not is_algorithm_available(key)]
    for key in missing:
        log.warning("%s is not supported by the cryptography backend", key)
    return missing


def available_algorithms() -> List[str]:
    return [key for key in _PRIMITIVES if is_algorithm_available(key)]


def compute_digest(data: bytes, algorithm: str) -> bytes:
    """Hash raw bytes with the named algorithm."""
    info = resolve_algorithm(algorithm)
    try:
        digest = hashes.Hash(_PRIMITIVES[info.key]())
    except UnsupportedAlgorithm as exc:
        raise UnsupportedAlgorithmError(
            info.key, "Algorithm not supported by backend"
        ) from exc
    digest.update(data)
    return digest.finalize()


def compute_hash(text: str, algorithm: str) -> str:
    """
    Hash the UTF-8 encoding of `text`.

    Raises:
        InvalidInputError: If the text is not valid Unicode
        UnsupportedAlgorithmError: Unknown or unavailable algorithm

    Returns:
        Lowercase hexadecimal digest

    Example:
        >>> compute_hash("abc", "SHA-256")[:16]
        'ba7816bf8f01cfea'
    """
    return compute_digest(encode_text(text), algorithm).hex()
