"""
Payload Cipher
==============
AES-256-GCM encryption with a per-process, memory-only key.
"""

from .models import EncryptedPayload
from .aead import EntryCipher, KEY_BYTES, NONCE_BYTES, TAG_BYTES
from ..exceptions import AuthenticationFailure

__all__ = [
    "EncryptedPayload",
    "EntryCipher",
    "KEY_BYTES",
    "NONCE_BYTES",
    "TAG_BYTES",
    "AuthenticationFailure",
]
