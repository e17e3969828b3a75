"""Email privacy helpers: encryption contract, hashing and masking."""

import hashlib
import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)

ANONYMOUS_LABEL = "Anonymous"
_EMAIL_PARTS = 2


class EmailCipher(Protocol):
    """Reversible encryption for stored email addresses."""

    def encrypt(self, plaintext: str) -> str:
        """Return ciphertext for the plaintext email."""

    def decrypt(self, ciphertext: str) -> str:
        """Return the plaintext email, raising ValueError on failure."""


def normalize_email(email: str | None) -> str | None:
    """Trim and lowercase an email, returning None when empty."""
    if email is None:
        return None
    cleaned = email.strip().lower()
    return cleaned or None


def is_plausible_email(email: str) -> bool:
    """Return True for addresses with a single @ and no whitespace."""
    if any(char.isspace() for char in email):
        return False
    local, sep, domain = email.partition("@")
    return bool(sep and local and domain and "@" not in domain)


def hash_email(email: str | None) -> str | None:
    """Return the SHA-256 hex digest of the normalized email."""
    normalized = normalize_email(email)
    if normalized is None:
        return None
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def mask_email(email: str | None) -> str:
    """Mask an email for display, e.g. ``jo****@example.com``."""
    if not email:
        return ANONYMOUS_LABEL
    parts = email.split("@")
    if len(parts) != _EMAIL_PARTS:
        return ANONYMOUS_LABEL
    local, domain = parts
    return f"{local[:2]}{'*' * max(2, len(local) - 2)}@{domain}"


@dataclass
class EmailPrivacyService:
    """Encrypts, hashes and reveals emails through an EmailCipher."""

    cipher: EmailCipher

    def protect(self, email: str | None) -> tuple[str | None, str | None]:
        """Return (ciphertext, hash) for a raw email."""
        normalized = normalize_email(email)
        if normalized is None:
            return None, None
        return self.cipher.encrypt(normalized), hash_email(normalized)

    def reveal(self, ciphertext: str | None) -> str | None:
        """Return the normalized email, or None when absent or undecryptable."""
        if not ciphertext:
            return None
        try:
            plaintext = self.cipher.decrypt(ciphertext)
        except ValueError:
            _logger.warning("Email decryption failed; treating entry as anonymous")
            return None
        return normalize_email(plaintext)
