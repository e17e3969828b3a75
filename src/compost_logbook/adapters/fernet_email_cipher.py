"""Fernet-based email cipher."""

from dataclasses import dataclass

from cryptography.fernet import Fernet, InvalidToken

from compost_logbook.services.privacy import EmailCipher


@dataclass
class FernetEmailCipher(EmailCipher):
    """Encrypts emails with a symmetric Fernet key."""

    fernet: Fernet

    @classmethod
    def create(cls, key: str) -> "FernetEmailCipher":
        """Build a cipher from a urlsafe base64 Fernet key."""
        return cls(Fernet(key.encode("ascii")))

    def encrypt(self, plaintext: str) -> str:
        """Return a Fernet token for the email."""
        return self.fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """Return the email, raising ValueError for invalid tokens."""
        try:
            return self.fernet.decrypt(ciphertext.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            raise ValueError("Invalid email ciphertext") from exc
