"""
AEAD Cipher
===========
Authenticated encryption of entry payloads using AES-256-GCM.
"""

import secrets
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .models import EncryptedPayload
from ..exceptions import AuthenticationFailure

KEY_BYTES = 32
NONCE_BYTES = 12
TAG_BYTES = 16


class EntryCipher:
    """
    Symmetric cipher holding a key that exists only in this process.
    
    The key is generated on construction and never persisted, logged or
    returned. Anything encrypted by one instance cannot be decrypted after
    the instance (or the process) is gone.
    
    Example:
        cipher = EntryCipher()
        payload = cipher.encrypt(b"hello")
        assert cipher.decrypt(payload) == b"hello"
    """
    
    __slots__ = ("_aead",)
    
    def __init__(self, key: Optional[bytes] = None):
        """
        Args:
            key: Explicit 32-byte key, for tests only. A fresh random key
                is generated when omitted.
        """
        if key is None:
            key = AESGCM.generate_key(bit_length=KEY_BYTES * 8)
        elif len(key) != KEY_BYTES:
            raise ValueError(f"Key must be {KEY_BYTES} bytes")
        self._aead = AESGCM(key)
    
    def __repr__(self) -> str:
        return "EntryCipher(key=<hidden>)"
    
    def encrypt(self, plaintext: bytes) -> EncryptedPayload:
        """
        Encrypt plaintext under a fresh random nonce.
        
        Args:
            plaintext: Raw payload bytes
            
        Returns:
            EncryptedPayload with ciphertext, nonce and tag split apart
        """
        nonce = secrets.token_bytes(NONCE_BYTES)
        sealed = self._aead.encrypt(nonce, bytes(plaintext), None)
        return EncryptedPayload(
            ciphertext=sealed[:-TAG_BYTES],
            nonce=nonce,
            auth_tag=sealed[-TAG_BYTES:],
        )
    
    def decrypt(self, payload: EncryptedPayload) -> bytes:
        """
        Decrypt and verify a payload.
        
        Args:
            payload: Output of a previous encrypt() on this instance
            
        Returns:
            Original plaintext
            
        Raises:
            AuthenticationFailure: If the tag does not verify or the
                nonce/tag have the wrong length
        """
        if len(payload.nonce) != NONCE_BYTES or len(payload.auth_tag) != TAG_BYTES:
            raise AuthenticationFailure("Malformed payload")
        
        try:
            return self._aead.decrypt(
                payload.nonce,
                payload.ciphertext + payload.auth_tag,
                None,
            )
        except InvalidTag as e:
            raise AuthenticationFailure("Payload failed authentication") from e
