# Hashing Module
"""
Hash function visualizer:
- Multi-algorithm digests via the cryptography library (hash_core)
- Avalanche effect and birthday attack demonstrations (hash_lab)
"""

from .hash_core import (
    available_algorithms,
    compute_digest,
    compute_hash,
    is_algorithm_available,
    resolve_algorithm,
    unavailable_algorithms,
)

from .hash_lab import (
    AvalancheReport,
    BirthdayReport,
    BirthdaySample,
    HashComputation,
    HashLab,
    HashOutput,
    assess_probability,
    flip_last_bit,
)

__all__ = [
    # Core
    'available_algorithms',
    'compute_digest',
    'compute_hash',
    'is_algorithm_available',
    'resolve_algorithm',
    'unavailable_algorithms',
    # Lab
    'AvalancheReport',
    'BirthdayReport',
    'BirthdaySample',
    'HashComputation',
    'HashLab',
    'HashOutput',
    'assess_probability',
    'flip_last_bit',
]
