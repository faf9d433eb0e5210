"""Describes the two BLS12-381 pairing groups provided by `py_ecc`.

`py_ecc` hard-codes G1 as the group over FQ and G2 as the group over FQ2, and
its Miller loop always takes a G2 point first. The engines in
`aggbls.engine` need to assign either group to the public-key role, so this
module wraps each group in a `PairingGroup` descriptor exposing the same
operations under the same names:

  - point arithmetic: addition, scalar multiplication, negation, equality;
  - affine conversion and batch normalization;
  - compressed encoding (48 bytes for G1, 96 bytes for G2);
  - hash-to-curve (RFC 9380, SHA-256, Simplified SWU);
  - preparation of a point for the Miller loop, with a membership check.

Points are `py_ecc` optimized (projective, 3-coordinate) points throughout.
"""
from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Callable, Iterable, List, Optional, Tuple

from py_ecc.bls.g2_primitives import subgroup_check
from py_ecc.bls.hash_to_curve import hash_to_G1, hash_to_G2
from py_ecc.bls.point_compression import compress_G1, compress_G2, decompress_G1, decompress_G2
from py_ecc.bls.typing import G1Compressed, G2Compressed
from py_ecc.optimized_bls12_381 import (
    FQ, FQ2, G1, G2, Z1, Z2,
    b, b2,
    add, is_inf, is_on_curve, multiply, neg, normalize,
)
from py_ecc.optimized_bls12_381.optimized_curve import eq

from .errors import DeserializationError, InvalidParameterError
from .suite import HashToCurveSuite

# --- Type Aliases ---
Point = Tuple[Any, Any, Any]

__all__ = [
    "Point", "Prepared", "PairingGroup",
    "G1_GROUP", "G2_GROUP",
]


@dataclass(frozen=True)
class Prepared:
    """A group point in affine form, tagged with its group for the Miller loop.

    Attributes:
        group: Name of the group the point came from ("G1" or "G2").
        value: The affine point, or None for the identity, which contributes
            nothing to a Miller loop.
    """
    group: str
    value: Optional[Point]

    @property
    def is_identity(self) -> bool:
        return self.value is None



@dataclass(frozen=True)
class PairingGroup:
    """One of the two source groups of the BLS12-381 pairing."""
    name: str
    generator: Point
    identity: Point
    field: type
    coefficient: Any
    compressed_size: int
    _compress: Callable[[Point], bytes]
    _decompress: Callable[[bytes], Point]
    _hash: Callable[[bytes, bytes, Any], Point]

    # --- Arithmetic ---

    def add(self, p: Point, q: Point) -> Point:
        return add(p, q)

    def multiply(self, p: Point, n: int) -> Point:
        return multiply(p, n)

    def neg(self, p: Point) -> Point:
        return neg(p)

    def eq(self, p: Point, q: Point) -> bool:
        return eq(p, q)

    def is_identity(self, p: Point) -> bool:
        return is_inf(p)

    def is_on_curve(self, p: Point) -> bool:
        """True if `p` has coordinates over this group's field and satisfies its curve equation."""
        if len(p) != 3 or not all(isinstance(c, self.field) for c in p):
            return False
        return is_on_curve(p, self.coefficient)

    def check(self, p: Point) -> Point:
        """Returns `p` unchanged, or raises if it is not a point of this curve.

        Raises:
            InvalidParameterError: If `p` belongs to the other group or is
                off the curve.
        """
        if not self.is_on_curve(p):
            raise InvalidParameterError(f"Not a {self.name} point")
        return p

    def aggregate(self, points: Iterable[Point]) -> Point:
        """Adds up `points`, returning the identity for an empty input."""
        total = self.identity
        for p in points:
            total = add(total, p)
        return total

    # --- Normalization ---

    def normalize(self, p: Point) -> Point:
        """Converts `p` to affine form (z == 1), leaving the identity as is."""
        if is_inf(p):
            return p
        x, y = normalize(p)
        return x, y, x.one()

    def batch_normalize(self, points: Iterable[Point]) -> List[Point]:
        return [self.normalize(p) for p in points]

    # --- Encoding ---

    def compress(self, p: Point) -> bytes:
        """Serializes `p` into its compressed affine encoding."""
        return self._compress(p)

    def decompress(self, data: bytes) -> Point:
        """Deserializes a compressed point and checks subgroup membership.

        Args:
            data: Exactly `compressed_size` bytes.

        Returns:
            The decoded point.

        Raises:
            DeserializationError: If the length or flags are wrong, the point
                is not on the curve, or it lies outside the prime-order
                subgroup.
        """
        if len(data) != self.compressed_size:
            raise DeserializationError(
                f"{self.name} point must be {self.compressed_size} bytes, got {len(data)}"
            )
        try:
            point = self._decompress(bytes(data))
        except ValueError as e:
            raise DeserializationError(f"Invalid {self.name} point encoding: {e}") from e
        if not is_inf(point) and not subgroup_check(point):
            raise DeserializationError(f"{self.name} point is not in the prime-order subgroup")
        return point

    # --- Pairing Support ---

    def hash_to_curve(self, message: bytes, suite: HashToCurveSuite) -> Point:
        """Hashes `message` onto this group with the suite's DST."""
        return self._hash(message, suite.dst, sha256)

    def prepare(self, p: Point) -> Prepared:
        """Checks `p` and converts it to the affine form the Miller loop takes.

        Raises:
            InvalidParameterError: If `p` is not a point of this curve.
        """
        self.check(p)
        if is_inf(p):
            return Prepared(self.name, None)
        return Prepared(self.name, self.normalize(p))


# --- Internal Encoding Helpers ---

def _compress_g1(p: Point) -> bytes:
    return int(compress_G1(p)).to_bytes(48, "big")


def _decompress_g1(data: bytes) -> Point:
    return decompress_G1(G1Compressed(int.from_bytes(data, "big")))


def _compress_g2(p: Point) -> bytes:
    z1, z2 = compress_G2(p)
    return z1.to_bytes(48, "big") + z2.to_bytes(48, "big")


def _decompress_g2(data: bytes) -> Point:
    z1 = int.from_bytes(data[:48], "big")
    z2 = int.from_bytes(data[48:], "big")
    return decompress_G2(G2Compressed((z1, z2)))


G1_GROUP = PairingGroup(
    name="G1",
    field=FQ,
    generator=G1,
    identity=Z1,
    coefficient=b,
    compressed_size=48,
    _compress=_compress_g1,
    _decompress=_decompress_g1,
    _hash=hash_to_G1,
)

G2_GROUP = PairingGroup(
    name="G2",
    field=FQ2,
    generator=G2,
    identity=Z2,
    coefficient=b2,
    compressed_size=96,
    _compress=_compress_g2,
    _decompress=_decompress_g2,
    _hash=hash_to_G2,
)
