"""Base64 encoding used for the client's basic-auth header."""

from __future__ import annotations

import base64


def encode_base64(text: str) -> str:
    """Encode text as Base64.

    The input is read up to its first NUL. A trailing partial group is
    completed with ``A`` characters (zero bits) instead of ``=`` padding.
    """
    data = text.split("\0", 1)[0].encode("utf-8")
    encoded = base64.b64encode(data).decode("ascii")
    return encoded.replace("=", "A")


def basic_auth_header(user: str, secret: str) -> str:
    """Build the ``Authorization: Basic ...`` header line."""
    return f"Authorization: Basic {encode_base64(f'{user}:{secret}')}"