"""Student PIN digests.

Digests are unsalted SHA-256 so a lookup can recompute them from the PIN
alone. PINs are 4-12 characters, so the digest space is small enough to
brute-force offline; set PIN_PEPPER to keep a leaked database from being
enough on its own. Changing the pepper invalidates every stored PIN.
"""

import hashlib

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 12


def normalize_pin(raw: str | None) -> str:
    return (raw or "").strip()


def pin_digest(pin: str, pepper: str = "") -> str:
    """Deterministic hex digest for storage and lookup."""
    material = f"{pepper}:{pin}" if pepper else pin
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def pin_hint(pin: str) -> str:
    """Last two characters, shown to the teacher to tell records apart."""
    return pin[-2:]


def is_valid_pin(pin: str) -> bool:
    return PIN_MIN_LENGTH <= len(pin) <= PIN_MAX_LENGTH
