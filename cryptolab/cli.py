"""
CryptoLab command-line interface.

    cryptolab rsa demo --bits 512 --message "Hello"
    cryptolab hash compute "hello" -a SHA-256 -a MD5
    cryptolab hash avalanche "hello" -a SHA-256
    cryptolab hash birthday -a SHA-1
    cryptolab algorithms
"""

import logging
from typing import List, Optional

import typer

from . import display
from .config import (
    DEFAULT_HASH_ALGORITHM,
    HASH_ALGORITHMS,
    COLLISION_HASH_RATE,
    RSA_DEFAULT_KEY_SIZE,
)
from .exceptions import CryptoLabError
from .hashing.hash_core import available_algorithms, is_algorithm_available, unavailable_algorithms
from .hashing.hash_lab import HashLab
from .rsa_tool.session import ProgressReporter, RSASession


log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Textbook RSA and hash function demonstrations")
rsa_app = typer.Typer(help="Textbook RSA walkthrough")
hash_app = typer.Typer(help="Hash function visualizer")
app.add_typer(rsa_app, name="rsa")
app.add_typer(hash_app, name="hash")


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """Interactive demonstrations of cryptographic concepts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def algorithms():
    """List hash algorithms and whether the backend supports them."""
    rows = [
        (info.key, info.name, info.output_bits, info.broken, is_algorithm_available(key))
        for key, info in HASH_ALGORITHMS.items()
    ]
    typer.echo(display.render_algorithm_table(rows))


@rsa_app.command("demo")
def rsa_demo(
    bits: int = typer.Option(RSA_DEFAULT_KEY_SIZE, "--bits", "-b", help="Modulus size in bits"),
    message: str = typer.Option("Hello, RSA!", "--message", "-m", help="Text to encrypt"),
    pem: bool = typer.Option(False, "--pem", help="Also print the keys as PEM"),
    show_attempts: bool = typer.Option(False, "--show-attempts", help="Print every prime candidate"),
):
    """Generate keys, encrypt a message and decrypt it again."""
    typer.echo(display.educational_note(
        'This tool implements "textbook RSA" without padding schemes. '
        'Real-world RSA uses OAEP padding and proper key management.'
    ))
    session = RSASession()
    reporter = ProgressReporter(sink=lambda line: typer.echo(f"  {line}"),
                                show_attempts=show_attempts)
    try:
        keygen = session.generate_keys(bits, progress=reporter)
        typer.echo(display.render_key_card(keygen))

        encrypted = session.encrypt_message(message)
        typer.echo(display.render_encryption(encrypted))

        decrypted = session.decrypt_ciphertext(str(encrypted.ciphertext))
        typer.echo(display.render_decryption(decrypted))

        if pem:
            private_pem, public_pem = keygen.keys.export_pem()
            typer.echo(public_pem.decode("ascii"))
            typer.echo(private_pem.decode("ascii"))
    except CryptoLabError as exc:
        _fail(exc)
    except ValueError as exc:
        log.debug("rsa demo failed", exc_info=True)
        _fail(exc)


@hash_app.command("compute")
def hash_compute(
    text: str = typer.Argument(..., help="Text to hash"),
    algorithm: Optional[List[str]] = typer.Option(
        None, "--algorithm", "-a", help="Algorithm (repeatable, default: all available)"
    ),
):
    """Hash TEXT with one or more algorithms."""
    unavailable_algorithms()
    selected = list(algorithm) if algorithm else available_algorithms()
    try:
        computation = HashLab().compute_hashes(text, selected)
    except CryptoLabError as exc:
        _fail(exc)
    typer.echo(display.render_hash_computation(computation))


@hash_app.command("avalanche")
def hash_avalanche(
    text: str = typer.Argument(..., help="Base text"),
    algorithm: str = typer.Option(DEFAULT_HASH_ALGORITHM, "--algorithm", "-a"),
    bits: bool = typer.Option(True, "--bits/--no-bits", help="Show the bit-level comparison"),
):
    """Flip the last bit of TEXT and compare both digests."""
    try:
        report = HashLab().avalanche_test(text, algorithm)
    except CryptoLabError as exc:
        _fail(exc)
    typer.echo(display.render_avalanche(report, show_bits=bits))


@hash_app.command("birthday")
def hash_birthday(
    algorithm: str = typer.Option(DEFAULT_HASH_ALGORITHM, "--algorithm", "-a"),
    rate: float = typer.Option(COLLISION_HASH_RATE, "--rate", help="Attacker hashes per second"),
):
    """Collision probabilities for ALGORITHM's output size."""
    try:
        report = HashLab().birthday_analysis(algorithm, hashes_per_second=rate)
    except CryptoLabError as exc:
        _fail(exc)
    typer.echo(display.render_birthday(report))


def app_main():
    app()


if __name__ == "__main__":
    app_main()
