"""
Conversions between user text and the integers textbook RSA operates on.

Text is encoded as UTF-8 and the bytes are read as one big-endian integer,
so the integer grows by 8 bits per encoded byte.
"""

from ..exceptions import InvalidInputError
from .rsa_math import bytes_to_int, int_to_bytes


def encode_text(text: str) -> bytes:
    """
    UTF-8 encode user text.

    Undecodable command-line bytes reach Python as lone surrogates, which
    UTF-8 cannot represent.

    Raises:
        InvalidInputError: If the text contains lone surrogates
    """
    try:
        return text.encode('utf-8')
    except UnicodeEncodeError as exc:
        raise InvalidInputError("Input is not valid Unicode text") from exc


def string_to_int(text: str) -> int:
    """
    UTF-8 encode `text` and read it as a big-endian integer.

    Leading zero bytes would vanish from the integer, so text starting with
    a NUL character is rejected rather than decrypting to a shorter string.
    """
    if not text:
        raise InvalidInputError("Cannot convert an empty message")
    if text[0] == '\x00':
        raise InvalidInputError("Message cannot start with a NUL character")
    return bytes_to_int(encode_text(text))


def int_to_string(value: int) -> str:
    """
    Inverse of string_to_int.

    Decryption with the wrong key yields arbitrary bytes, so invalid UTF-8
    is decoded with replacement characters instead of raising.
    """
    if value < 0:
        raise InvalidInputError("Cannot convert a negative integer to text")
    if value == 0:
        return ''
    return int_to_bytes(value).decode('utf-8', errors='replace')


def bit_length(value: int) -> int:
    return value.bit_length()


def max_message_bytes(modulus: int) -> int:
    """Largest message size (bytes) that is guaranteed to stay below n."""
    return max(0, bit_length(modulus) // 8 - 1)


def parse_big_int(text: str) -> int:
    """
    Parse a ciphertext typed by the user.

    Accepts decimal digits or a 0x-prefixed hexadecimal string, with
    surrounding whitespace.

    Raises:
        InvalidInputError: If the text is not a non-negative integer
    """
    cleaned = text.strip()
    if not cleaned:
        raise InvalidInputError("Please enter ciphertext to decrypt")
    try:
        if cleaned.lower().startswith('0x'):
            digits = cleaned[2:]
            if not digits.isalnum():
                raise ValueError(cleaned)
            value = int(digits, 16)
        elif cleaned.isdigit():
            value = int(cleaned, 10)
        else:
            raise ValueError(cleaned)
    except ValueError:
        raise InvalidInputError(
            f"Cannot convert {cleaned[:40]!r} to an integer"
        ) from None
    return value
