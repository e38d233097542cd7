"""
Hash Function Visualizer

The three demonstrations offered by the hash tool:

1. Compute: digest one input with several algorithms at once
2. Avalanche effect: flip a single input bit and compare the digests
3. Birthday attack: collision probability for an algorithm's output size

Each flow validates input, returns a result dataclass for the display layer,
and records an event in the session log.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import (
    BIRTHDAY_SAMPLE_DIVISORS,
    COLLISION_HASH_RATE,
    COLLISION_RESISTANT_BITS,
    AlgorithmInfo,
)
from ..core_crypto.hash_utils import (
    AvalancheResult,
    BitDiff,
    attempts_for_50_percent_collision,
    birthday_attack_probability,
    compute_avalanche,
    estimate_collision_years,
    format_collision_time,
    generate_bit_diff,
    hex_to_binary,
    rate_avalanche,
)
from ..exceptions import InvalidInputError
from ..integration.event_log import EventLog, EventType
from .hash_core import compute_hash, resolve_algorithm


log = logging.getLogger(__name__)

# '~' ^ 1 is DEL (0x7f); '|' differs from '~' in exactly one other bit
_TILDE_REPLACEMENT = '|'


# ============================================================================
# Results
# ============================================================================

@dataclass
class HashOutput:
    algorithm: AlgorithmInfo
    hex_digest: str
    time_ms: float


@dataclass
class HashComputation:
    text: str
    outputs: Dict[str, HashOutput]
    total_time_ms: float

    @property
    def char_length(self) -> int:
        return len(self.text)

    @property
    def byte_size(self) -> int:
        return len(self.text.encode('utf-8'))


@dataclass
class AvalancheReport:
    algorithm: AlgorithmInfo
    original: str
    modified: str
    original_hash: str
    modified_hash: str
    result: AvalancheResult
    quality: str
    bit_diff: List[BitDiff] = field(repr=False)


@dataclass
class BirthdaySample:
    attempts: float
    label: str
    probability: float  # percent
    assessment: str


@dataclass
class BirthdayReport:
    algorithm: AlgorithmInfo
    attempts_50: float
    samples: List[BirthdaySample]
    collision_years: float
    collision_time_text: str
    hashes_per_second: float

    @property
    def collision_resistant(self) -> bool:
        return self.algorithm.output_bits >= COLLISION_RESISTANT_BITS


# ============================================================================
# Helpers
# ============================================================================

def flip_last_bit(text: str) -> str:
    """
    Return `text` with exactly one bit of its last character flipped.

    The lowest bit of the code point is toggled, except for '~' which
    becomes '|' to avoid producing the non-printable DEL character.

    Raises:
        InvalidInputError: If text is empty
    """
    if not text:
        raise InvalidInputError("Please enter base text for avalanche test")
    last = text[-1]
    if last == '~':
        replacement = _TILDE_REPLACEMENT
    else:
        replacement = chr(ord(last) ^ 1)
    return text[:-1] + replacement


def assess_probability(probability_percent: float) -> str:
    """Security verdict for a collision probability given in percent."""
    if probability_percent < 0.000001:
        return 'Effectively Impossible'
    if probability_percent < 0.01:
        return 'Highly Secure'
    if probability_percent < 10:
        return 'Possible with Resources'
    return 'Practical Attack'


def _exponent_label(hash_bits: int, divisor: float) -> str:
    exponent = hash_bits / divisor
    if exponent == int(exponent):
        return f"2^{int(exponent)}"
    return f"2^{exponent:.1f}"


# ============================================================================
# Hash Lab
# ============================================================================

class HashLab:
    """
    Hash visualizer session.

    Keeps the most recent computation so a caller can show it again
    without recomputing.
    """

    def __init__(self, event_log: Optional[EventLog] = None):
        self.event_log = event_log if event_log is not None else EventLog()
        self.current_hashes: Dict[str, HashOutput] = {}
        self.last_input = ''

    def compute_hashes(self, text: str,
                       algorithms: Sequence[str]) -> HashComputation:
        """
        Hash `text` with every selected algorithm, timing each one.

        Raises:
            InvalidInputError: Empty text, empty selection or invalid Unicode
            UnsupportedAlgorithmError: Unknown or unavailable algorithm
        """
        if not text:
            raise InvalidInputError("Please enter text to hash")
        if not algorithms:
            raise InvalidInputError("Please select at least one hash algorithm")

        infos = [resolve_algorithm(a) for a in algorithms]
        outputs: Dict[str, HashOutput] = {}
        start = time.perf_counter()
        try:
            for info in infos:
                algo_start = time.perf_counter()
                digest = compute_hash(text, info.key)
                outputs[info.key] = HashOutput(
                    algorithm=info,
                    hex_digest=digest,
                    time_ms=(time.perf_counter() - algo_start) * 1000,
                )
        except Exception as exc:
            self.event_log.record_failure('compute_hashes', exc)
            raise
        total_ms = (time.perf_counter() - start) * 1000

        self.current_hashes = outputs
        self.last_input = text
        self.event_log.record(
            EventType.HASHES_COMPUTED,
            algorithms=list(outputs),
            input_bytes=len(text.encode('utf-8')),
            total_ms=round(total_ms, 2),
        )
        log.info("computed %d digests in %.2f ms", len(outputs), total_ms)
        return HashComputation(text=text, outputs=outputs, total_time_ms=total_ms)

    def avalanche_test(self, text: str, algorithm: str) -> AvalancheReport:
        """
        Hash `text` and its one-bit-flipped twin and compare the digests.

        Raises:
            InvalidInputError: Empty text or text that is not valid Unicode
            UnsupportedAlgorithmError: Unknown or unavailable algorithm
        """
        try:
            modified = flip_last_bit(text)
            info = resolve_algorithm(algorithm)
            original_hash = compute_hash(text, info.key)
            modified_hash = compute_hash(modified, info.key)
        except Exception as exc:
            self.event_log.record_failure('avalanche_test', exc)
            raise

        result = compute_avalanche(original_hash, modified_hash)
        quality = rate_avalanche(result.percentage)
        bit_diff = generate_bit_diff(hex_to_binary(original_hash),
                                     hex_to_binary(modified_hash))

        self.event_log.record(
            EventType.AVALANCHE_TEST,
            algorithm=info.key,
            bits_changed=result.bits_changed,
            total_bits=result.total_bits,
            quality=quality,
        )
        return AvalancheReport(
            algorithm=info,
            original=text,
            modified=modified,
            original_hash=original_hash,
            modified_hash=modified_hash,
            result=result,
            quality=quality,
            bit_diff=bit_diff,
        )

    def birthday_analysis(self, algorithm: str,
                          hashes_per_second: float = COLLISION_HASH_RATE) -> BirthdayReport:
        """
        Collision probabilities at 2^(n/4), 2^(n/3), 2^(n/2) and 2^(n/1.5)
        attempts, plus the 50% point and a brute-force time estimate.

        Raises:
            InvalidInputError: Hash rate is not positive
            UnsupportedAlgorithmError: Unknown algorithm
        """
        try:
            info = resolve_algorithm(algorithm)
            years = estimate_collision_years(info.output_bits, hashes_per_second)
        except ValueError as exc:
            error = InvalidInputError(str(exc))
            self.event_log.record_failure('birthday_analysis', error)
            raise error from exc
        except Exception as exc:
            self.event_log.record_failure('birthday_analysis', exc)
            raise
        hash_bits = info.output_bits

        samples = []
        for divisor in BIRTHDAY_SAMPLE_DIVISORS:
            attempts = 2 ** (hash_bits / divisor)
            probability = birthday_attack_probability(hash_bits, attempts) * 100
            samples.append(BirthdaySample(
                attempts=attempts,
                label=_exponent_label(hash_bits, divisor),
                probability=probability,
                assessment=assess_probability(probability),
            ))

        report = BirthdayReport(
            algorithm=info,
            attempts_50=attempts_for_50_percent_collision(hash_bits),
            samples=samples,
            collision_years=years,
            collision_time_text=format_collision_time(years),
            hashes_per_second=hashes_per_second,
        )
        self.event_log.record(EventType.BIRTHDAY_ANALYSIS,
                              algorithm=info.key, output_bits=hash_bits)
        return report
