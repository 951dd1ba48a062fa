"""
Cipher Models
=============
Data container for encrypted entry payloads.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EncryptedPayload:
    """Opaque output of the cipher. The store never looks inside."""
    ciphertext: bytes
    nonce: bytes
    auth_tag: bytes
    
    def __repr__(self) -> str:
        return f"EncryptedPayload(ciphertext=<{len(self.ciphertext)} bytes>)"
