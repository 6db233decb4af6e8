"""Small text and future helpers shared across the client code."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import Future

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def to_ascii(text: str) -> str:
    """Narrow every character to its low byte, as a plain char cast would."""
    return "".join(chr(ord(char) & 0xFF) for char in text)


def decode_utf8(data: bytes) -> str:
    """Decode UTF-8 bytes; malformed sequences become U+FFFD."""
    return data.decode("utf-8", errors="replace")


def encode_utf8(text: str) -> bytes:
    """Encode text as UTF-8 bytes."""
    return text.encode("utf-8")


def to_lower(text: str) -> str:
    """Lower-case the ASCII letters A-Z only, leaving everything else as is."""
    return text.translate(_ASCII_LOWER)


def remove_characters(text: str, characters: Iterable[str]) -> str:
    """Drop every occurrence of the given characters.

    The text is treated as NUL-terminated: anything from the first NUL on
    is discarded.
    """
    unwanted = set(characters)
    head = text.split("\0", 1)[0]
    return "".join(char for char in head if char not in unwanted)


def is_future_ready(future: Future | None) -> bool:
    """Tell whether a future exists and has finished without waiting."""
    return future is not None and future.done()