"""
Encryption Service

AES-256-GCM encryption of text content for storage at rest.
"""

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from pydantic import BaseModel

MIN_KEY_LENGTH = 32
NONCE_BYTES = 12


class DecryptionError(Exception):
    """Ciphertext or IV is malformed, or was produced under another key"""


class EncryptedPayload(BaseModel):
    ciphertext: str  # base64
    iv: str  # hex


class EncryptionService:
    """
    Encrypts and decrypts text under a server-side key.

    The 256-bit AES key is the SHA-256 digest of the configured secret.
    A fresh random nonce is generated for every encryption and returned
    as the IV; GCM authentication makes a wrong key or tampered data fail
    loudly instead of producing garbage.
    """

    def __init__(self, secret: str):
        if not secret or len(secret) < MIN_KEY_LENGTH:
            raise ValueError(
                f"ENCRYPTION_KEY must be at least {MIN_KEY_LENGTH} characters long"
            )
        self._aesgcm = AESGCM(hashlib.sha256(secret.encode("utf-8")).digest())

    def encrypt(self, plaintext: str) -> EncryptedPayload:
        nonce = os.urandom(NONCE_BYTES)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return EncryptedPayload(
            ciphertext=base64.b64encode(ciphertext).decode("ascii"),
            iv=nonce.hex(),
        )

    def decrypt(self, ciphertext: str, iv: str) -> str:
        try:
            nonce = bytes.fromhex(iv)
            data = base64.b64decode(ciphertext, validate=True)
        except (ValueError, TypeError, binascii.Error) as exc:
            raise DecryptionError("Malformed ciphertext or IV") from exc

        if len(nonce) != NONCE_BYTES:
            raise DecryptionError("Malformed ciphertext or IV")

        try:
            plaintext = self._aesgcm.decrypt(nonce, data, None)
        except InvalidTag as exc:
            raise DecryptionError("Decryption failed - invalid encrypted data") from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError("Decrypted data is not valid text") from exc
