"""
Hash Function Statistics

Numeric helpers behind the hash visualizer:
- Hex/binary conversion and bit-level diffs
- Avalanche effect measurement and rating
- Birthday attack collision probability
- Collision time estimates and large-number formatting

Birthday bound: for an n-bit hash (N = 2^n outputs) and k attempts,

    P(collision) ≈ 1 - e^(-k² / 2N)

so roughly 2^(n/2) attempts give a 50% chance of a collision.
"""

import math
from dataclasses import dataclass
from typing import List

from ..config import (
    AVALANCHE_EXCELLENT_RANGE,
    AVALANCHE_GOOD_RANGE,
    COLLISION_HASH_RATE,
    SECONDS_PER_YEAR,
)


@dataclass(frozen=True)
class AvalancheResult:
    """Bit difference between two digests of equal length."""
    bits_changed: int
    total_bits: int
    percentage: float

    @property
    def percentage_text(self) -> str:
        return f"{self.percentage:.2f}"


@dataclass(frozen=True)
class BitDiff:
    """One bit position in a digest comparison."""
    bit1: str
    bit2: str

    @property
    def changed(self) -> bool:
        return self.bit1 != self.bit2


def hex_to_binary(hex_digest: str) -> str:
    """Expand a hex digest into a string of '0'/'1', 4 bits per digit."""
    try:
        return ''.join(format(int(ch, 16), '04b') for ch in hex_digest)
    except ValueError:
        raise ValueError(f"Not a hexadecimal digest: {hex_digest!r}") from None


def generate_bit_diff(binary1: str, binary2: str) -> List[BitDiff]:
    """Pair up the bits of two binary strings of the same length."""
    if len(binary1) != len(binary2):
        raise ValueError("Binary strings must have the same length")
    return [BitDiff(b1, b2) for b1, b2 in zip(binary1, binary2)]


def compute_avalanche(hash1: str, hash2: str) -> AvalancheResult:
    """
    Count the output bits that differ between two hex digests.

    An ideal hash flips about half of its output bits for any input change.

    Raises:
        ValueError: If the digests are empty or differ in length
    """
    binary1 = hex_to_binary(hash1)
    binary2 = hex_to_binary(hash2)
    if not binary1 or len(binary1) != len(binary2):
        raise ValueError("Digests must be non-empty and of equal length")

    bits_changed = sum(1 for d in generate_bit_diff(binary1, binary2) if d.changed)
    total_bits = len(binary1)
    return AvalancheResult(
        bits_changed=bits_changed,
        total_bits=total_bits,
        percentage=bits_changed / total_bits * 100,
    )


def rate_avalanche(percentage: float) -> str:
    """Excellent within 45-55%, Good within 40-60%, otherwise Poor."""
    low, high = AVALANCHE_EXCELLENT_RANGE
    if low <= percentage <= high:
        return 'Excellent'
    low, high = AVALANCHE_GOOD_RANGE
    if low <= percentage <= high:
        return 'Good'
    return 'Poor'


def birthday_attack_probability(hash_bits: int, attempts: float) -> float:
    """
    Probability of at least one collision after `attempts` hashes.

    Uses expm1 so probabilities far below float epsilon (e.g. 2^32 attempts
    against SHA-256) are still returned as tiny positive numbers rather
    than 0.0.
    """
    if hash_bits <= 0:
        raise ValueError("Hash size must be positive")
    if attempts <= 1:
        return 0.0
    exponent = attempts * attempts / (2.0 * math.ldexp(1.0, hash_bits))
    return -math.expm1(-exponent)


def attempts_for_50_percent_collision(hash_bits: int) -> float:
    """Attempts giving a 50% collision chance: sqrt(2 ln 2 · 2^n)."""
    if hash_bits <= 0:
        raise ValueError("Hash size must be positive")
    return math.sqrt(2 * math.log(2)) * 2 ** (hash_bits / 2)


def format_large_number(value: float) -> str:
    """Thousands separators below 1e15, scientific notation above."""
    if value >= 1e15:
        return f"{value:.2e}"
    if value >= 1000:
        return f"{value:,.0f}"
    if value >= 1:
        return f"{value:,.2f}"
    return f"{value:.2g}"


def estimate_collision_years(hash_bits: int,
                             hashes_per_second: float = COLLISION_HASH_RATE) -> float:
    """
    Years needed to reach ~2^(n/2) hashes at the given rate.

    Raises:
        ValueError: If the rate is not a positive number
    """
    if not hashes_per_second > 0:
        raise ValueError("Hash rate must be a positive number of hashes per second")
    attempts_needed = 2 ** (hash_bits / 2)
    return attempts_needed / hashes_per_second / SECONDS_PER_YEAR


def format_collision_time(years: float) -> str:
    if years > 1e20:
        return "> 10^20 (far exceeds age of universe)"
    if years > 1e10:
        return f"{years:.2e}"
    return format_large_number(years)
