"""
Plain-text report rendering for the CLI.

Each function takes a result object from rsa_tool or hashing and returns a
multi-line string; nothing here prints.
"""

from typing import List, Optional, Sequence

from .core_crypto.hash_utils import BitDiff, format_large_number, hex_to_binary
from .core_crypto.rsa_math import RSAKeyPair
from .hashing.hash_lab import (
    AvalancheReport,
    BirthdayReport,
    HashComputation,
    HashOutput,
)
from .rsa_tool.session import (
    DecryptionResult,
    EncryptionResult,
    KeyGenerationResult,
)

RULE = "=" * 70
THIN_RULE = "-" * 70
BIT_ROW_WIDTH = 64


def _header(title: str) -> List[str]:
    return [RULE, f"  {title}", RULE]


def _wrap(value: str, width: int = 64, indent: str = "    ") -> List[str]:
    return [indent + value[i:i + width] for i in range(0, len(value), width)] or [indent]


def educational_note(text: str) -> str:
    return f"[Note] {text}"


# ============================================================================
# RSA
# ============================================================================

def render_key_card(result: KeyGenerationResult, show_private: bool = True) -> str:
    keys: RSAKeyPair = result.keys
    e, n = keys.public_key
    lines = _header(f"✓ RSA Keys Generated ({result.duration_s:.2f}s)")
    lines.append(f"  Key size: {keys.key_size} bits")
    lines.append("")
    lines.append("  Public key (e, n)")
    lines.append(f"    e = {e}")
    lines.append("    n =")
    lines.extend(_wrap(str(n), indent="      "))
    if show_private:
        lines.append("")
        lines.append("  Private key (d, n)")
        lines.append("    d =")
        lines.extend(_wrap(str(keys.private_exponent), indent="      "))
        if keys.p is not None:
            lines.append("")
            lines.append("  Educational values (never share these)")
            for label, value in (("p", keys.p), ("q", keys.q), ("φ(n)", keys.phi)):
                lines.append(f"    {label} =")
                lines.extend(_wrap(str(value), indent="      "))
    return "\n".join(lines)


def render_encryption(result: EncryptionResult) -> str:
    e, n = result.public_key
    lines = _header(f"✓ Encryption Complete ({result.duration_ms:.2f}ms)")
    lines.append(f'  Original message: "{result.message}"')
    lines.append("  Message as integer m:")
    lines.extend(_wrap(str(result.message_int)))
    lines.append(f"  Computation: c = m^{e} mod n")
    lines.append("  Ciphertext c:")
    lines.extend(_wrap(str(result.ciphertext)))
    return "\n".join(lines)


def render_decryption(result: DecryptionResult) -> str:
    lines = _header(f"✓ Decryption Complete ({result.duration_ms:.2f}ms)")
    lines.append("  Ciphertext c:")
    lines.extend(_wrap(str(result.ciphertext)))
    lines.append("  Computation: m = c^d mod n")
    lines.append("  Recovered integer m:")
    lines.extend(_wrap(str(result.plaintext_int)))
    lines.append(f'  Recovered message: "{result.plaintext}"')
    return "\n".join(lines)


# ============================================================================
# Hashing
# ============================================================================

def render_hash_output(output: HashOutput, show_binary: bool = True,
                       binary_preview_bits: int = 64) -> str:
    info = output.algorithm
    status = "BROKEN" if info.broken else "secure"
    lines = [
        f"  {info.name} ({info.output_bits}-bit, {status}) [{output.time_ms:.2f}ms]",
        f"    {output.hex_digest}",
    ]
    if show_binary:
        binary = hex_to_binary(output.hex_digest)
        preview = binary[:binary_preview_bits]
        suffix = "..." if len(binary) > binary_preview_bits else ""
        lines.append(f"    bin: {preview}{suffix}")
    return "\n".join(lines)


def render_hash_computation(computation: HashComputation) -> str:
    lines = _header(f"✓ Hash Computation Complete ({computation.total_time_ms:.2f}ms)")
    lines.append(f'  Input: "{computation.text}"')
    lines.append(
        f"  Length: {computation.char_length} characters "
        f"({computation.byte_size} bytes)"
    )
    lines.append(THIN_RULE)
    for output in computation.outputs.values():
        lines.append(render_hash_output(output))
    return "\n".join(lines)


def render_bit_strip(bit_diff: Sequence[BitDiff], width: int = BIT_ROW_WIDTH) -> str:
    """
    Two rows of bits per block with a marker row; '^' marks changed bits.
    """
    lines = []
    for start in range(0, len(bit_diff), width):
        row = bit_diff[start:start + width]
        lines.append("    " + "".join(d.bit1 for d in row))
        lines.append("    " + "".join(d.bit2 for d in row))
        lines.append("    " + "".join("^" if d.changed else " " for d in row).rstrip())
    return "\n".join(lines)


def render_avalanche(report: AvalancheReport, show_bits: bool = True) -> str:
    result = report.result
    lines = _header("✓ Avalanche Effect Analysis")
    lines.append(f"  Algorithm: {report.algorithm.name}")
    lines.append("")
    lines.append(f'  Original input: "{report.original}"')
    lines.append(f"    {report.original_hash}")
    lines.append(f'  Modified input (last bit flipped): "{report.modified}"')
    lines.append(f"    {report.modified_hash}")
    lines.append("")
    lines.append(
        f"  Bits changed: {result.bits_changed} / {result.total_bits} "
        f"({result.percentage_text}%)"
    )
    lines.append(f"  Quality: {report.quality} (ideal is ~50%)")
    if show_bits:
        lines.append("")
        lines.append("  Bit-Level Comparison")
        lines.append(render_bit_strip(report.bit_diff))
    return "\n".join(lines)


def render_birthday(report: BirthdayReport) -> str:
    info = report.algorithm
    lines = _header("Birthday Attack Analysis")
    lines.append(f"  Algorithm: {info.name} ({info.output_bits}-bit output)")
    lines.append("")
    lines.append(
        "  For an n-bit hash, about 2^(n/2) attempts find a collision with "
        "50% probability."
    )
    lines.append(
        f"  50% collision probability: {format_large_number(report.attempts_50)} attempts"
    )
    lines.append("")
    lines.append(f"  {'Attempts':<12}{'Probability':<18}Assessment")
    lines.append("  " + "-" * 50)
    for sample in report.samples:
        lines.append(
            f"  {sample.label:<12}{_format_probability(sample.probability):<18}"
            f"{sample.assessment}"
        )
    lines.append("")
    lines.append(
        f"  Time to 50% collision at {format_large_number(report.hashes_per_second)} "
        f"hashes/second: {report.collision_time_text} years"
    )
    if report.collision_resistant:
        lines.append("  ✓ Collision-resistant in practice (more time than age of universe)")
    else:
        lines.append("  ! May be vulnerable with sufficient computational resources")
    return "\n".join(lines)


def _format_probability(percent: float) -> str:
    if percent == 0:
        return "0%"
    if percent < 0.01:
        return f"{percent:.2e}%"
    return f"{percent:.2f}%"


def render_algorithm_table(rows: Sequence[tuple], title: Optional[str] = None) -> str:
    """Rows of (key, name, bits, broken, available)."""
    lines = _header(title or "Hash Algorithms")
    for key, name, bits, broken, available in rows:
        status = "BROKEN" if broken else "secure"
        avail = "" if available else "  (unavailable)"
        lines.append(f"  {key:<10}{name:<18}{bits:>4}-bit  {status}{avail}")
    return "\n".join(lines)
