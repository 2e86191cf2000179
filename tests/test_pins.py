"""Unit tests for PIN digests."""

from evaluaciones.utils.pins import is_valid_pin, normalize_pin, pin_digest, pin_hint


def test_digest_deterministic():
    """Same PIN always yields the same digest."""
    assert pin_digest("4837") == pin_digest("4837")


def test_digest_distinct_pins():
    """No collisions among a spread of PINs."""
    pins = ["4837", "9999", "0000", "4838", "abcd", "ABCD", "123456789012"]
    digests = {pin_digest(p) for p in pins}
    assert len(digests) == len(pins)


def test_digest_is_sha256_hex():
    digest = pin_digest("4837")
    assert len(digest) == 64
    int(digest, 16)


def test_pepper_changes_digest():
    assert pin_digest("4837", "pepper") != pin_digest("4837")
    assert pin_digest("4837", "pepper") == pin_digest("4837", "pepper")


def test_hint_and_normalization():
    assert pin_hint("4837") == "37"
    assert normalize_pin("  4837 ") == "4837"
    assert normalize_pin(None) == ""


def test_pin_length_bounds():
    assert not is_valid_pin("123")
    assert is_valid_pin("1234")
    assert is_valid_pin("1" * 12)
    assert not is_valid_pin("1" * 13)
