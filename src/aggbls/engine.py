"""Adapts the BLS12-381 pairing of `py_ecc` to BLS-style signatures.

A BLS signature `sigma = s * H(msg)` by a public key `S = s * g` is checked
with `e(g, sigma) == e(S, H(msg))`. Which of the two pairing groups holds
public keys and which holds signatures is a free choice with large
performance consequences, so this module defines an `EngineBLS` interface in
which the two roles are named (`public_key_group`, `signature_group`) rather
than fixed, plus:

  - `CurveBLS`: the concrete engine, tagged with an `Orientation`.
    `Orientation.USUAL` keeps 48-byte public keys in G1 and 96-byte
    signatures in G2; `Orientation.TINY` swaps them.
  - `PoP`: a wrapper that forwards every operation to an inner engine but
    drops the `DeserializePublicKey` capability, so public keys can only be
    trusted through an explicit proof-of-possession acknowledgment.

The Miller loop is kept apart from the final exponentiation so that
verification accumulates every pair before paying for a single final
exponentiation: `e(-g, sigma) * prod e(S_i, H(m_i)) == 1`.
"""
from __future__ import annotations

import abc
import enum
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, NewType, Optional, Tuple

from py_ecc.optimized_bls12_381 import FQ12, curve_order, final_exponentiate
from py_ecc.optimized_bls12_381.optimized_pairing import miller_loop as _miller_loop

from .errors import InvalidParameterError
from .groups import G1_GROUP, G2_GROUP, PairingGroup, Point, Prepared
from .suite import HashToCurveSuite

logger = logging.getLogger(__name__)

# --- Type Aliases ---
Scalar = NewType("Scalar", int)
PreparedPair = Tuple[Prepared, Prepared]

__all__ = [
    "Scalar", "PreparedPair",
    "EngineBLS", "UnmutatedKeys", "DeserializePublicKey",
    "Orientation", "CurveBLS", "PoP",
    "Z_BLS", "TINY_BLS",
]


class EngineBLS(abc.ABC):
    """Pairing operations with transposable public-key and signature groups.

    Concrete engines only choose the two groups, hash onto the signature
    group and run the Miller loop in the argument order `py_ecc` expects.
    Everything else, including the verification equation, is shared.
    """

    @property
    @abc.abstractmethod
    def public_key_group(self) -> PairingGroup:
        """Group where public keys live."""

    @property
    @abc.abstractmethod
    def signature_group(self) -> PairingGroup:
        """Group where signatures and hashed messages live."""

    def generate(self, rng: random.Random) -> Scalar:
        """Draws a uniformly random non-zero scalar from `rng`.

        Args:
            rng: The caller's randomness source, e.g. `secrets.SystemRandom()`.
                No global source is ever consulted.
        """
        return Scalar(rng.randrange(1, curve_order))

    @abc.abstractmethod
    def hash_to_signature_curve(self, message: bytes) -> Point:
        """Hashes `message` onto the signature group."""

    def prepare_public_key(self, point: Point) -> Prepared:
        return self.public_key_group.prepare(point)

    def prepare_signature(self, point: Point) -> Prepared:
        return self.signature_group.prepare(point)

    @abc.abstractmethod
    def miller_loop(self, pairs: Iterable[PreparedPair]) -> FQ12:
        """Runs one batched Miller loop over `(public key, signature)` pairs.

        Args:
            pairs: Prepared public-key-group and signature-group points,
                consumed in a single pass.

        Returns:
            The product of the Miller loops, before final exponentiation.
        """

    def final_exponentiation(self, e: FQ12) -> Optional[FQ12]:
        """Completes a pairing, returning None for a degenerate input."""
        if e == FQ12.zero():
            logger.debug("Degenerate Miller loop output; no final exponentiation")
            return None
        return final_exponentiate(e)

    def pairing(self, p: Point, q: Point) -> FQ12:
        """Computes `e(p, q)` for a public-key-group `p` and signature-group `q`."""
        pair = (self.prepare_public_key(p), self.prepare_signature(q))
        result = self.final_exponentiation(self.miller_loop([pair]))
        if result is None:
            raise ValueError("Pairing inputs are degenerate")
        return result

    def verify_prepared(self, signature: Prepared, inputs: Iterable[PreparedPair]) -> bool:
        """Checks the aggregate verification equation on prepared points.

        The pair `(-g, signature)` is appended to `inputs`, and the check
        `e(-g, signature) * prod e(pk_i, h_i) == 1` is done with one Miller
        loop and one final exponentiation.

        This routine performs no policy checks such as message distinctness;
        those belong to the aggregation strategies.

        Args:
            signature: The prepared (aggregate) signature.
            inputs: Prepared `(public key, hashed message)` pairs.

        Returns:
            True if the equation holds, False otherwise.
        """
        group = self.public_key_group
        minus_generator = self.prepare_public_key(group.neg(group.generator))
        pairs = itertools.chain(inputs, [(minus_generator, signature)])
        result = self.final_exponentiation(self.miller_loop(pairs))
        return result is not None and result == FQ12.one()


class UnmutatedKeys(abc.ABC):
    """Any engine whose public keys are used exactly as deserialized.

    Engines that transform keys on load (e.g. delinearization) must not
    carry this marker.
    """


class DeserializePublicKey(UnmutatedKeys):
    """Any engine whose public keys may be trivially deserialized.

    The proof-of-possession wrapper deliberately lacks this marker, so that
    callers must use `aggbls.pop.i_have_checked_this_proof_of_possession`.
    """


class Orientation(enum.Enum):
    """Assignment of the two pairing groups to the public key and signature roles."""
    # Public keys in G1 (48 bytes), signatures in G2 (96 bytes).
    USUAL = "usual"
    # Public keys in G2 (96 bytes), signatures in G1 (48 bytes).
    TINY = "tiny"


_GROUP_ROLES = {
    Orientation.USUAL: (G1_GROUP, G2_GROUP),
    Orientation.TINY: (G2_GROUP, G1_GROUP),
}


@dataclass(frozen=True)
class CurveBLS(EngineBLS, DeserializePublicKey):
    """BLS over BLS12-381 in one of the two orientations.

    `Orientation.USUAL` is the better default: verifiers perform O(signers)
    additions, or scalar multiplications with delinearization, on the
    public-key group, so it should be the cheaper G1. `Orientation.TINY`
    fits workloads dominated by signature size.

    Attributes:
        orientation: Which group holds public keys.
        suite: Hash-to-curve parameters; defaults to the tag of the
            signature group.
    """
    orientation: Orientation = Orientation.USUAL
    suite: Optional[HashToCurveSuite] = None

    def __post_init__(self) -> None:
        if self.suite is None:
            object.__setattr__(self, "suite", HashToCurveSuite.default_for(self.signature_group.name))

    @classmethod
    def usual(cls, suite: Optional[HashToCurveSuite] = None) -> "CurveBLS":
        return cls(Orientation.USUAL, suite)

    @classmethod
    def tiny(cls, suite: Optional[HashToCurveSuite] = None) -> "CurveBLS":
        return cls(Orientation.TINY, suite)

    @property
    def public_key_group(self) -> PairingGroup:
        return _GROUP_ROLES[self.orientation][0]

    @property
    def signature_group(self) -> PairingGroup:
        return _GROUP_ROLES[self.orientation][1]

    def hash_to_signature_curve(self, message: bytes) -> Point:
        return self.signature_group.hash_to_curve(bytes(message), self.suite)

    def miller_loop(self, pairs: Iterable[PreparedPair]) -> FQ12:
        pk_name = self.public_key_group.name
        sig_name = self.signature_group.name
        f = FQ12.one()
        for public_key, signature in pairs:
            if public_key.group != pk_name or signature.group != sig_name:
                raise InvalidParameterError(
                    f"Expected ({pk_name}, {sig_name}) pair, got ({public_key.group}, {signature.group})"
                )
            if public_key.is_identity or signature.is_identity:
                # e(O, x) == e(x, O) == 1
                continue
            # py_ecc takes the G2 point first.
            if self.orientation is Orientation.USUAL:
                f = f * _miller_loop(signature.value, public_key.value, False)
            else:
                f = f * _miller_loop(public_key.value, signature.value, False)
        return f


@dataclass(frozen=True)
class PoP(EngineBLS, UnmutatedKeys):
    """Rogue-key defense by proof-of-possession.

    Changes no algebra: every operation is forwarded to `inner`. Only the
    capabilities differ, since a `PoP` engine is not `DeserializePublicKey`.

    Attributes:
        inner: The wrapped engine.
    """
    inner: EngineBLS = field(default_factory=CurveBLS)

    @property
    def public_key_group(self) -> PairingGroup:
        return self.inner.public_key_group

    @property
    def signature_group(self) -> PairingGroup:
        return self.inner.signature_group

    def generate(self, rng: random.Random) -> Scalar:
        return self.inner.generate(rng)

    def hash_to_signature_curve(self, message: bytes) -> Point:
        return self.inner.hash_to_signature_curve(message)

    def prepare_public_key(self, point: Point) -> Prepared:
        return self.inner.prepare_public_key(point)

    def prepare_signature(self, point: Point) -> Prepared:
        return self.inner.prepare_signature(point)

    def miller_loop(self, pairs: Iterable[PreparedPair]) -> FQ12:
        return self.inner.miller_loop(pairs)

    def final_exponentiation(self, e: FQ12) -> Optional[FQ12]:
        return self.inner.final_exponentiation(e)

    def pairing(self, p: Point, q: Point) -> FQ12:
        return self.inner.pairing(p, q)

    def verify_prepared(self, signature: Prepared, inputs: Iterable[PreparedPair]) -> bool:
        return self.inner.verify_prepared(signature, inputs)


# Usual aggregate BLS on BLS12-381: 48-byte public keys, 96-byte signatures.
Z_BLS = CurveBLS.usual()

# Inverted aggregate BLS on BLS12-381: 96-byte public keys, 48-byte signatures.
TINY_BLS = CurveBLS.tiny()
