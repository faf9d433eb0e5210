"""Defines the hash-to-curve configuration carried by every engine.

The only tunable of the pairing layer is the domain separation tag (DST)
handed to the RFC 9380 hash-to-curve routines of `py_ecc`. Each engine value
owns one frozen `HashToCurveSuite`, so hashing stays a pure function of the
engine and the input bytes.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

# Default tags, one per signature group. Messages are pre-hashed by
# `aggbls.message.Message`, so these are not the IETF BLS ciphersuite tags.
DST_G1: bytes = b"AGGBLS_BLS12381G1_XMD:SHA-256_SSWU_RO_"
DST_G2: bytes = b"AGGBLS_BLS12381G2_XMD:SHA-256_SSWU_RO_"


class HashToCurveSuite(BaseModel):
    """Hash-to-curve parameters of an engine.

    Attributes:
        dst: The domain separation tag, 1-255 bytes long.
    """
    model_config = ConfigDict(frozen=True)

    dst: bytes

    @field_validator("dst")
    @classmethod
    def _check_dst_length(cls, value: bytes) -> bytes:
        if not 1 <= len(value) <= 255:
            raise ValueError(f"DST length must be between 1 and 255 bytes (got {len(value)}).")
        return value

    @classmethod
    def default_for(cls, group_name: str) -> "HashToCurveSuite":
        """Returns the default suite for hashing onto `group_name` ("G1" or "G2")."""
        if group_name == "G1":
            return cls(dst=DST_G1)
        if group_name == "G2":
            return cls(dst=DST_G2)
        raise ValueError(f"Unknown pairing group: {group_name!r}")
