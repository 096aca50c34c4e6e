"""Text to seed hashing."""

import hashlib


def hash_text(text: str) -> int:
    """Hash text into a signed 64-bit seed.

    The seed is the first 8 bytes of the SHA-256 digest of the UTF-8 encoded
    text, read as a big-endian two's complement integer.

    Args:
        text: Any string, including the empty string.

    Returns:
        Integer in ``[-2**63, 2**63)``.
    """
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)
