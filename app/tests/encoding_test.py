import pytest

from app.core.exceptions import ConfigurationError, DecodeError
from app.utils.encoding import (
    BASE,
    CANONICAL_ALPHABET,
    decode,
    encode,
    offset_for_min_length,
    validate_alphabet,
)


def test_canonical_alphabet_shape():
    assert BASE == 62
    assert CANONICAL_ALPHABET.startswith("0123456789abc")
    assert CANONICAL_ALPHABET.endswith("XYZ")
    assert len(set(CANONICAL_ALPHABET)) == 62


def test_encode_zero_is_first_symbol():
    assert encode(0) == "0"
    assert encode(0, "xyz") == "x"


def test_encode_known_values():
    assert encode(61) == "Z"
    assert encode(62) == "10"
    # 11157 = 2*62^2 + 55*62 + 59
    assert encode(11157) == "2" + CANONICAL_ALPHABET[55] + CANONICAL_ALPHABET[59]
    assert encode(5, "01") == "101"


@pytest.mark.parametrize("num", [0, 1, 61, 62, 3843, 3844, 14_000_000, 2**64, 10**40])
def test_decode_inverts_encode(num):
    assert decode(encode(num)) == num


@pytest.mark.parametrize("alphabet", ["01", "abc", "0123456789", CANONICAL_ALPHABET[::-1]])
def test_round_trip_other_alphabets(alphabet):
    for num in list(range(200)) + [987654321]:
        assert decode(encode(num, alphabet), alphabet) == num


def test_encode_is_injective_over_a_range():
    tokens = {encode(n) for n in range(20_000)}
    assert len(tokens) == 20_000


def test_encode_never_empty():
    assert all(encode(n, "ab") for n in range(50))


def test_encode_rejects_negative_and_non_int():
    with pytest.raises(ValueError):
        encode(-1)
    with pytest.raises(ValueError):
        encode(1.5)
    with pytest.raises(ValueError):
        encode(True)


def test_decode_rejects_foreign_symbol():
    with pytest.raises(DecodeError):
        decode("ab-c")
    with pytest.raises(DecodeError):
        decode("2", "01")


def test_decode_rejects_empty_token():
    with pytest.raises(DecodeError):
        decode("")


def test_validate_alphabet():
    assert validate_alphabet("ab") == "ab"
    with pytest.raises(ConfigurationError):
        validate_alphabet("a")
    with pytest.raises(ConfigurationError, match="duplicate"):
        validate_alphabet("abca")


@pytest.mark.parametrize("alphabet", ["", "a", "aba"])
def test_encode_rejects_invalid_alphabet(alphabet):
    for num in (0, 5):
        with pytest.raises(ConfigurationError):
            encode(num, alphabet)


@pytest.mark.parametrize("alphabet", ["", "a", "aba"])
def test_decode_rejects_invalid_alphabet(alphabet):
    with pytest.raises(ConfigurationError):
        decode("a", alphabet)


def test_offset_for_min_length():
    assert offset_for_min_length(1) == 0
    assert offset_for_min_length(4) == 62 ** 3
    assert len(encode(offset_for_min_length(6))) == 6
    assert len(encode(offset_for_min_length(6) - 1)) == 5
    with pytest.raises(ConfigurationError):
        offset_for_min_length(0)
