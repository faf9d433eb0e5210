"""Single-signer BLS keys and signatures over any `EngineBLS`.

A secret key is a scalar `s`; its public key is `s * g` on the engine's
public-key group and a signature on a `Message` is `s * H(m)` on the
signature group. Which group is which depends on the engine, so every value
here carries the engine it belongs to.

Encodings:
  - secret keys: 32-byte big-endian scalars;
  - public keys and signatures: the compressed affine encoding of their
    group (48 bytes for G1, 96 bytes for G2).

Public keys can only be trivially decoded under engines that are
`DeserializePublicKey`; under `PoP` use
`aggbls.pop.i_have_checked_this_proof_of_possession` instead.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Iterator, Tuple

from eth_typing import BLSPubkey, BLSSignature
from py_ecc.optimized_bls12_381 import curve_order
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .engine import DeserializePublicKey, EngineBLS, Scalar
from .errors import CapabilityError, DeserializationError, InvalidParameterError
from .groups import Point
from .message import Message
from .signed import Signed, check_engine

SECRET_KEY_SIZE: int = 32

__all__ = [
    "SecretKey", "PublicKey", "Signature", "Keypair", "SignedMessage",
    "aggregate_public_keys", "aggregate_signatures",
]


class SecretKey(BaseModel):
    """A BLS secret scalar bound to an engine.

    Attributes:
        engine: The engine the key signs under.
        scalar: The secret, in [1, curve_order). Hidden from repr.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    engine: EngineBLS
    scalar: int = Field(repr=False)

    @field_validator("scalar")
    @classmethod
    def _check_scalar_range(cls, value: int) -> int:
        if not 0 < value < curve_order:
            raise InvalidParameterError("Secret scalar must be in [1, curve_order)")
        return value

    @classmethod
    def generate(cls, engine: EngineBLS, rng: random.Random) -> "SecretKey":
        return cls(engine=engine, scalar=engine.generate(rng))

    def sign(self, message: Message) -> "Signature":
        """Signs `message` as `scalar * H(message)`."""
        h = message.hash_to_signature_curve(self.engine)
        return Signature(self.engine, self.engine.signature_group.multiply(h, self.scalar))

    def into_public(self) -> "PublicKey":
        group = self.engine.public_key_group
        return PublicKey(self.engine, group.multiply(group.generator, self.scalar))

    def to_bytes(self) -> bytes:
        return int(self.scalar).to_bytes(SECRET_KEY_SIZE, "big")

    @classmethod
    def from_bytes(cls, engine: EngineBLS, data: bytes) -> "SecretKey":
        """Deserializes a 32-byte big-endian secret scalar.

        Raises:
            DeserializationError: If the length is wrong or the scalar is zero
                or not below the curve order.
        """
        if len(data) != SECRET_KEY_SIZE:
            raise DeserializationError(f"Secret key must be {SECRET_KEY_SIZE} bytes, got {len(data)}")
        scalar = int.from_bytes(data, "big")
        if not 0 < scalar < curve_order:
            raise DeserializationError("Secret key scalar out of range")
        return cls(engine=engine, scalar=Scalar(scalar))


@dataclass(frozen=True, eq=False)
class PublicKey:
    """A BLS public key, a point on the engine's public-key group."""
    engine: EngineBLS
    point: Point

    def to_bytes(self) -> BLSPubkey:
        return BLSPubkey(self.engine.public_key_group.compress(self.point))

    @classmethod
    def from_bytes(cls, engine: EngineBLS, data: bytes) -> "PublicKey":
        """Trivially deserializes a compressed public key.

        Raises:
            CapabilityError: If `engine` is not `DeserializePublicKey`, which
                is the case for the proof-of-possession wrapper.
            DeserializationError: If the bytes are not a valid key.
        """
        if not isinstance(engine, DeserializePublicKey):
            raise CapabilityError(
                f"{type(engine).__name__} public keys cannot be trivially deserialized; "
                "check a proof of possession instead"
            )
        return cls._decode(engine, data)

    @classmethod
    def _decode(cls, engine: EngineBLS, data: bytes) -> "PublicKey":
        point = engine.public_key_group.decompress(data)
        if engine.public_key_group.is_identity(point):
            raise DeserializationError("Public key is the identity point")
        return cls(engine, point)

    def __add__(self, other: "PublicKey") -> "PublicKey":
        check_engine(self.engine, other.engine)
        return PublicKey(self.engine, self.engine.public_key_group.add(self.point, other.point))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.engine == other.engine and self.engine.public_key_group.eq(self.point, other.point)

    def __hash__(self) -> int:
        return hash(self.to_bytes())


@dataclass(frozen=True, eq=False)
class Signature:
    """A BLS signature, a point on the engine's signature group."""
    engine: EngineBLS
    point: Point

    def to_bytes(self) -> BLSSignature:
        return BLSSignature(self.engine.signature_group.compress(self.point))

    @classmethod
    def from_bytes(cls, engine: EngineBLS, data: bytes) -> "Signature":
        """Deserializes a compressed signature.

        Raises:
            DeserializationError: If the bytes are not a valid signature.
        """
        return cls(engine, engine.signature_group.decompress(data))

    def __add__(self, other: "Signature") -> "Signature":
        check_engine(self.engine, other.engine)
        return Signature(self.engine, self.engine.signature_group.add(self.point, other.point))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.engine == other.engine and self.engine.signature_group.eq(self.point, other.point)

    def __hash__(self) -> int:
        return hash(self.to_bytes())


class Keypair(BaseModel):
    """A secret key together with its public key.

    Attributes:
        secret: The secret key; `public` is derived from it on first use.
    """
    model_config = ConfigDict(frozen=True)

    secret: SecretKey

    @cached_property
    def public(self) -> PublicKey:
        return self.secret.into_public()

    @property
    def engine(self) -> EngineBLS:
        return self.secret.engine

    @classmethod
    def generate(cls, engine: EngineBLS, rng: random.Random) -> "Keypair":
        return cls(secret=SecretKey.generate(engine, rng))

    def sign(self, message: Message) -> "SignedMessage":
        return SignedMessage(message, self.public, self.secret.sign(message))


class SignedMessage(Signed):
    """One message signed by one public key."""

    def __init__(self, message: Message, public_key: PublicKey, signature: Signature) -> None:
        check_engine(public_key.engine, signature.engine)
        self.message = message
        self.public_key = public_key
        self._signature = signature

    @property
    def engine(self) -> EngineBLS:
        return self.public_key.engine

    def signature(self) -> Signature:
        return self._signature

    def messages_and_publickeys(self) -> Iterator[Tuple[Message, PublicKey]]:
        return iter([(self.message, self.public_key)])

    def verify(self) -> bool:
        engine = self.engine
        h = self.message.hash_to_signature_curve(engine)
        return engine.verify_prepared(
            engine.prepare_signature(self._signature.point),
            [(engine.prepare_public_key(self.public_key.point), engine.prepare_signature(h))],
        )

    def __repr__(self) -> str:
        return f"SignedMessage(message={self.message!r}, public_key={self.public_key.to_bytes().hex()})"


def aggregate_public_keys(engine: EngineBLS, keys: Iterable[PublicKey]) -> PublicKey:
    """Adds up public keys, returning the identity key for an empty input."""
    points = []
    for key in keys:
        check_engine(engine, key.engine)
        points.append(key.point)
    return PublicKey(engine, engine.public_key_group.aggregate(points))


def aggregate_signatures(engine: EngineBLS, signatures: Iterable[Signature]) -> Signature:
    """Adds up signatures, returning the identity signature for an empty input."""
    points = []
    for sig in signatures:
        check_engine(engine, sig.engine)
        points.append(sig.point)
    return Signature(engine, engine.signature_group.aggregate(points))
