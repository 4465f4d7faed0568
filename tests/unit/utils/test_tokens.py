"""Unit tests for the generate_token function in tokens.py.

Test coverage includes:

1. Basic functionality
   - Returns a string of exactly the requested length.

2. Output format
   - All characters belong to the base64url alphabet.

3. Randomness
   - Consecutive tokens are independent (no repeats in a large sample).
   - Tokens come from the OS entropy source.

4. Error handling
   - Invalid length types and values raise appropriate exceptions.
   - Entropy source failures propagate.
"""

import pytest

from sharelinks.utils import generate_token
from sharelinks.utils import tokens
from sharelinks.utils.tokens import ALPHABET


# -------------------------------
# 1. Basic functionality
# -------------------------------


def test_generate_token_default_length():
    result = generate_token()
    assert isinstance(result, str)
    assert len(result) == 6


@pytest.mark.parametrize('length', [1, 2, 3, 4, 5, 7, 8, 16, 43, 100])
def test_generate_token_respects_length(length):
    """Every length yields exactly that many characters (no padding, no shortfall)."""
    assert len(generate_token(length)) == length


# -------------------------------
# 2. Output format
# -------------------------------


def test_generate_token_is_url_safe():
    alphabet = set(ALPHABET)
    for _ in range(1000):
        assert set(generate_token(12)) <= alphabet


def test_single_character_tokens_cover_the_alphabet():
    seen = {generate_token(1) for _ in range(5000)}
    assert seen == set(ALPHABET)


# -------------------------------
# 3. Randomness
# -------------------------------


def test_generate_token_is_not_repeating():
    sample = [generate_token(12) for _ in range(10_000)]
    assert len(set(sample)) == len(sample)


def test_generate_token_uses_secrets(monkeypatch):
    monkeypatch.setattr(tokens.secrets, 'token_bytes', lambda n: b'\xff' * n)
    assert generate_token(6) == '______'


# -------------------------------
# 4. Error handling
# -------------------------------


@pytest.mark.parametrize('length', [None, '6', 6.0, True])
def test_invalid_length_type_raises_error(length):
    with pytest.raises(TypeError):
        generate_token(length)


@pytest.mark.parametrize('length', [0, -1])
def test_invalid_length_value_raises_error(length):
    with pytest.raises(ValueError):
        generate_token(length)


def test_entropy_failure_propagates(monkeypatch):
    def broken_source(n):
        raise NotImplementedError('no entropy source available')

    monkeypatch.setattr(tokens.secrets, 'token_bytes', broken_source)
    with pytest.raises(NotImplementedError):
        generate_token()
