"""
CryptoLab Configuration

Central constants shared by the RSA tool and the hash visualizer:
- RSA key sizes and public exponent
- Miller-Rabin round count
- Avalanche quality thresholds
- Birthday attack assumptions
- Hash algorithm registry (names, output sizes, security status)
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


# ============================================================================
# RSA
# ============================================================================

RSA_KEY_SIZE_PRESETS = (512, 1024, 2048)
RSA_DEFAULT_KEY_SIZE = 1024
RSA_MIN_KEY_SIZE = 64
RSA_MAX_KEY_SIZE = 4096
RSA_PUBLIC_EXPONENT = 65537  # 2^16 + 1
MILLER_RABIN_ROUNDS = 40

# ============================================================================
# Hash analysis
# ============================================================================

AVALANCHE_EXCELLENT_RANGE = (45.0, 55.0)
AVALANCHE_GOOD_RANGE = (40.0, 60.0)

# Aggressive single-attacker estimate used for collision timing
COLLISION_HASH_RATE = 1e9
SECONDS_PER_YEAR = 365.25 * 24 * 3600
COLLISION_RESISTANT_BITS = 256

# Exponent divisors for the birthday sample points: 2^(n/4), 2^(n/3), ...
BIRTHDAY_SAMPLE_DIVISORS = (4, 3, 2, 1.5)


@dataclass(frozen=True)
class AlgorithmInfo:
    """Static description of a hash algorithm."""
    key: str
    name: str
    output_bits: int
    broken: bool
    description: str

    @property
    def output_hex_length(self) -> int:
        return self.output_bits // 4


HASH_ALGORITHMS: Dict[str, AlgorithmInfo] = {
    info.key: info for info in (
        AlgorithmInfo(
            'MD5', 'MD5', 128, True,
            'Practical collisions since 2004. Included for comparison only.'
        ),
        AlgorithmInfo(
            'SHA-1', 'SHA-1', 160, True,
            'Collision demonstrated in 2017 (SHAttered). Deprecated.'
        ),
        AlgorithmInfo(
            'SHA-256', 'SHA-256', 256, False,
            'SHA-2 family, Merkle-Damgard construction. Widely deployed.'
        ),
        AlgorithmInfo(
            'SHA-384', 'SHA-384', 384, False,
            'Truncated SHA-512 variant, resistant to length extension.'
        ),
        AlgorithmInfo(
            'SHA-512', 'SHA-512', 512, False,
            'SHA-2 family with 64-bit words.'
        ),
        AlgorithmInfo(
            'SHA3-256', 'SHA-3 (256-bit)', 256, False,
            'Keccak sponge construction standardised in FIPS 202.'
        ),
        AlgorithmInfo(
            'SHA3-512', 'SHA-3 (512-bit)', 512, False,
            'Keccak sponge construction with 512-bit output.'
        ),
    )
}

DEFAULT_HASH_ALGORITHM = 'SHA-256'


def get_algorithm_info(algorithm: str) -> Optional[AlgorithmInfo]:
    """
    Look up an algorithm by key.

    Matching ignores case so 'sha-256' and 'SHA-256' are the same entry.
    Returns None for unknown names.
    """
    if algorithm in HASH_ALGORITHMS:
        return HASH_ALGORITHMS[algorithm]
    wanted = algorithm.strip().upper()
    for key, info in HASH_ALGORITHMS.items():
        if key.upper() == wanted:
            return info
    return None


def algorithm_keys() -> Tuple[str, ...]:
    """All registered algorithm keys in display order."""
    return tuple(HASH_ALGORITHMS)
