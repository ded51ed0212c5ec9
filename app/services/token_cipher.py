"""Symmetric encryption for the access token carried in the session cookie."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken


class TokenCipherService:
    """Encrypt and decrypt session tokens using a derived Fernet key."""

    def __init__(self, *, secret: str, max_age_seconds: int | None = None) -> None:
        if not secret:
            raise ValueError("Session secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest)
        self._fernet = Fernet(key)
        self._max_age = max_age_seconds

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a plaintext string and return the ciphertext."""
        token = self._fernet.encrypt(plaintext.encode("utf-8"))
        return token.decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a ciphertext string and return the plaintext.

        Tokens older than ``max_age_seconds`` are rejected like tampered ones.
        """
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"), ttl=self._max_age)
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt session token; invalid or expired ciphertext."
            ) from exc
        return plaintext.decode("utf-8")


__all__ = ["TokenCipherService"]
