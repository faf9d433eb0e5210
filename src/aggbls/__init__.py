"""Aggregate BLS signatures with transposable pairing groups.

This package separates three concerns that are usually fused together:

  - engine: the pairing layer (`EngineBLS`), with `CurveBLS` in either
    orientation (`Z_BLS`: public keys in G1, `TINY_BLS`: public keys in G2)
    and the `PoP` rogue-key defense wrapper.
  - message: domain-separated 32-byte message digests.
  - signed / verifiers: the `Signed` contract for aggregate signatures and
    the routines that verify any value implementing it.

Aggregation strategies built on top: `single` (one signer), `pop`
(same-message aggregation with proofs of possession) and `distinct`
(distinct-message aggregation). `encoding` provides multibase key strings.
"""
from .errors import (
    AggBLSError,
    InvalidParameterError,
    DeserializationError,
    CapabilityError,
    AggregationError,
)
from .suite import HashToCurveSuite
from .groups import G1_GROUP, G2_GROUP, PairingGroup, Prepared
from .engine import (
    Scalar,
    EngineBLS,
    UnmutatedKeys,
    DeserializePublicKey,
    Orientation,
    CurveBLS,
    PoP,
    Z_BLS,
    TINY_BLS,
)
from .message import MESSAGE_SIZE, Message
from .signed import Signed
from .single import (
    SecretKey,
    PublicKey,
    Signature,
    Keypair,
    SignedMessage,
    aggregate_public_keys,
    aggregate_signatures,
)
from .verifiers import verify_unoptimized, verify_simple, verify_with_distinct_messages
from .pop import (
    prove_possession,
    verify_possession,
    i_have_checked_this_proof_of_possession,
    check_proof_of_possession,
    SignatureAggregatorAssumingPoP,
)
from .distinct import DistinctMessages
from .encoding import public_key_to_multibase, multibase_to_public_key_bytes, public_key_from_multibase


__all__ = [
    # from .errors
    "AggBLSError",
    "InvalidParameterError",
    "DeserializationError",
    "CapabilityError",
    "AggregationError",

    # from .suite / .groups
    "HashToCurveSuite",
    "G1_GROUP",
    "G2_GROUP",
    "PairingGroup",
    "Prepared",

    # from .engine
    "Scalar",
    "EngineBLS",
    "UnmutatedKeys",
    "DeserializePublicKey",
    "Orientation",
    "CurveBLS",
    "PoP",
    "Z_BLS",
    "TINY_BLS",

    # from .message / .signed
    "MESSAGE_SIZE",
    "Message",
    "Signed",

    # from .single
    "SecretKey",
    "PublicKey",
    "Signature",
    "Keypair",
    "SignedMessage",
    "aggregate_public_keys",
    "aggregate_signatures",

    # from .verifiers
    "verify_unoptimized",
    "verify_simple",
    "verify_with_distinct_messages",

    # from .pop
    "prove_possession",
    "verify_possession",
    "i_have_checked_this_proof_of_possession",
    "check_proof_of_possession",
    "SignatureAggregatorAssumingPoP",

    # from .distinct / .encoding
    "DistinctMessages",
    "public_key_to_multibase",
    "multibase_to_public_key_bytes",
    "public_key_from_multibase",
]
