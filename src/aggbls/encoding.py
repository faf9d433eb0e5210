"""Multibase text encoding of BLS public keys.

Keys are prefixed with their multicodec and encoded as Base58btc multibase
strings (prefix 'z'), so the encoded form also names the group the key
lives in.
"""
from __future__ import annotations

from typing import Tuple

import multibase

from .engine import EngineBLS
from .errors import DeserializationError
from .single import PublicKey

# --- Constants ---

# Multicodec prefixes for public key types.
_MB_G1_PREFIX: bytes = b"\xea\x01"  # 0xea: bls12_381-g1-pub
_MB_G2_PREFIX: bytes = b"\xeb\x01"  # 0xeb: bls12_381-g2-pub

_PREFIXES = {"G1": _MB_G1_PREFIX, "G2": _MB_G2_PREFIX}

__all__ = [
    "public_key_to_multibase",
    "multibase_to_public_key_bytes",
    "public_key_from_multibase",
]


def _mb58(data: bytes) -> str:
    """Encodes data into a Base58-btc multibase string (prefix 'z')."""
    return multibase.encode("base58btc", data).decode("ascii")


def public_key_to_multibase(public_key: PublicKey) -> str:
    """Encodes a public key as a multicodec-prefixed multibase string."""
    prefix = _PREFIXES[public_key.engine.public_key_group.name]
    return _mb58(prefix + public_key.to_bytes())


def multibase_to_public_key_bytes(mb: str) -> Tuple[str, bytes]:
    """Decodes a multibase public key into its group name and raw bytes.

    Args:
        mb: A multibase string encoding a multicodec-prefixed BLS12-381 key.

    Returns:
        A tuple of the group name ("G1" or "G2") and the compressed key.

    Raises:
        DeserializationError: If the string is not multibase or the prefix is
            not a BLS12-381 public key multicodec.
    """
    try:
        data = multibase.decode(mb)
    except (ValueError, TypeError) as e:
        raise DeserializationError(f"Invalid multibase string: {e}") from e
    for name, prefix in _PREFIXES.items():
        if data.startswith(prefix):
            return name, data[len(prefix):]
    raise DeserializationError(f"Unknown multicodec prefix in multibase data: {data[:2].hex()}")


def public_key_from_multibase(engine: EngineBLS, mb: str) -> PublicKey:
    """Decodes a multibase public key for `engine`.

    The group named by the multicodec must be the engine's public-key group,
    and the engine must allow trivial deserialization.
    """
    name, raw = multibase_to_public_key_bytes(mb)
    if name != engine.public_key_group.name:
        raise DeserializationError(
            f"Multibase key is a {name} key, engine expects {engine.public_key_group.name}"
        )
    return PublicKey.from_bytes(engine, raw)
