"""AES-GCM encryption of single env var values under a passphrase."""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

_NONCE_SIZE = 12


class DecryptionError(ValueError):
    """A value could not be decoded or decrypted."""


class Encryptor:
    """Encrypts and decrypts values with a key derived from a passphrase.

    The key is the SHA-256 digest of the passphrase; ciphertexts are the
    base64 encoding of nonce followed by the sealed data.
    """

    def __init__(self, passphrase: str) -> None:
        self._aead = AESGCM(hashlib.sha256(passphrase.encode("utf-8")).digest())

    def encrypt(self, plaintext: str) -> str:
        """Encrypt ``plaintext`` with a fresh random nonce."""
        nonce = os.urandom(_NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, encoded: str) -> str:
        """Decrypt a value produced by :meth:`encrypt`."""
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecryptionError(f"encrypt: invalid base64: {exc}") from exc
        if len(data) < _NONCE_SIZE:
            raise DecryptionError("encrypt: ciphertext too short")
        nonce, sealed = data[:_NONCE_SIZE], data[_NONCE_SIZE:]
        try:
            plaintext = self._aead.decrypt(nonce, sealed, None)
        except InvalidTag:
            raise DecryptionError("encrypt: decryption failed, wrong passphrase?") from None
        return plaintext.decode("utf-8", errors="replace")