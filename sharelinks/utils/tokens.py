"""Share token generation utility

This module provides a helper function for generating short, random,
URL-safe tokens used as keys for share links.

Functions:
    generate_token(length=6):
        Generate a random URL-safe token of exactly `length` characters.

Example:
    >>> from sharelinks.utils import generate_token
    >>> generate_token()
    'aZ3kQ9'
    >>> len(generate_token(10))
    10
"""

import base64
import secrets
import string


ALPHABET = string.ascii_letters + string.digits + '-_'  # base64url alphabet


def generate_token(length: int = 6) -> str:
    """Generate a random URL-safe token.

    Draws `length` bytes from the operating system's CSPRNG (via `secrets`),
    encodes them with the base64url alphabet (A-Z, a-z, 0-9, '-', '_') and
    truncates the result to exactly `length` characters.

    Args:
        length (int, optional):
            Number of characters in the resulting token.
            Defaults to 6.

    Returns:
        str: A random token over the base64url alphabet.

    Raises:
        TypeError: If `length` is not an integer.
        ValueError: If `length` is smaller than 1.

    NOTE:
        - Every `n` random bytes encode into at least `n` base64 characters,
          so truncation alone yields a fixed-length token.
        - Tokens are independent of each other. Uniqueness is NOT guaranteed
          and must be checked against the data store.
        - Failure of the entropy source propagates to the caller.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Token length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Token length must be a positive integer (given value: {length}).')

    encoded = base64.urlsafe_b64encode(secrets.token_bytes(length)).rstrip(b'=')
    return encoded.decode('ascii')[:length]
