"""
Client Identifiers
==================
Reduce a client address to a hashed network prefix before it is stored.
"""

import hashlib

IPV4_PREFIX_OCTETS = 3
IPV6_PREFIX_GROUPS = 3
IDENTIFIER_LENGTH = 16
IPV4_MAPPED_PREFIX = "::ffff:"


def client_prefix(address: str) -> str:
    """
    Truncate an address to its network prefix.
    
    IPv4 keeps the first 3 octets (/24), IPv6 the first 3 groups.
    IPv4-mapped IPv6 addresses (::ffff:a.b.c.d) are unwrapped and treated
    as IPv4. Anything else is split the IPv4 way, which leaves short
    opaque strings unchanged.
    """
    address = address.strip()
    if address.lower().startswith(IPV4_MAPPED_PREFIX) and "." in address:
        address = address[len(IPV4_MAPPED_PREFIX):]
    if ":" in address:
        return ":".join(address.split(":")[:IPV6_PREFIX_GROUPS])
    return ".".join(address.split(".")[:IPV4_PREFIX_OCTETS])


def hash_client_identifier(address: str) -> str:
    """
    Hash a client address prefix for privacy.
    
    Args:
        address: Client IP address as received from the transport
        
    Returns:
        First 16 hex chars of SHA-256 over the prefix
    """
    prefix = client_prefix(address)
    return hashlib.sha256(prefix.encode()).hexdigest()[:IDENTIFIER_LENGTH]
