"""Proof-of-possession and same-message aggregation under the `PoP` engine.

Linear same-message aggregation is only sound when no signer registered a
rogue key, i.e. a combination of other signers' keys whose secret it does
not know. Requiring a proof of possession (a signature on the key's own
encoding) rules this out. The `PoP` engine cannot decode public keys
trivially; the only way to obtain a trusted key from bytes is the explicitly
named `i_have_checked_this_proof_of_possession`, or
`check_proof_of_possession`, which verifies the proof first.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .engine import EngineBLS, PoP
from .errors import AggregationError, CapabilityError
from .message import Message
from .signed import Signed, check_engine
from .single import Keypair, PublicKey, Signature, SignedMessage

# Context of the message signed by a proof of possession.
POP_CONTEXT: bytes = b"aggbls-proof-of-possession"

__all__ = [
    "POP_CONTEXT",
    "prove_possession",
    "verify_possession",
    "i_have_checked_this_proof_of_possession",
    "check_proof_of_possession",
    "SignatureAggregatorAssumingPoP",
]


def _require_pop(engine: EngineBLS) -> None:
    if not isinstance(engine, PoP):
        raise CapabilityError(f"Expected a PoP engine, got {type(engine).__name__}")


def _possession_message(public_key: PublicKey) -> Message:
    return Message.new(POP_CONTEXT, public_key.to_bytes())


def prove_possession(keypair: Keypair) -> Signature:
    """Signs the keypair's own public key encoding."""
    return keypair.secret.sign(_possession_message(keypair.public))


def verify_possession(public_key: PublicKey, proof: Signature) -> bool:
    """Checks a proof of possession produced by `prove_possession`."""
    return SignedMessage(_possession_message(public_key), public_key, proof).verify()


def i_have_checked_this_proof_of_possession(engine: PoP, data: bytes) -> PublicKey:
    """Decodes a public key whose proof of possession the caller has checked.

    Args:
        engine: A `PoP` engine.
        data: The compressed public key.

    Returns:
        The trusted public key.

    Raises:
        CapabilityError: If `engine` is not a `PoP` engine.
        DeserializationError: If the bytes are not a valid key.
    """
    _require_pop(engine)
    return PublicKey._decode(engine, data)


def check_proof_of_possession(engine: PoP, public_key: bytes, proof: bytes) -> Optional[PublicKey]:
    """Decodes a public key and its proof, returning the key only if the proof verifies.

    Raises:
        CapabilityError: If `engine` is not a `PoP` engine.
        DeserializationError: If either encoding is invalid.
    """
    _require_pop(engine)
    key = PublicKey._decode(engine, public_key)
    if not verify_possession(key, Signature.from_bytes(engine, proof)):
        return None
    return key


class SignatureAggregatorAssumingPoP(Signed):
    """Aggregates signatures on one message by keys with checked proofs of possession.

    Both the signatures and the public keys are summed, so verification
    costs two Miller loop pairs regardless of the number of signers.
    """

    def __init__(self, engine: PoP, message: Message) -> None:
        _require_pop(engine)
        self._engine = engine
        self.message = message
        self._signature = engine.signature_group.identity
        self._public_key = engine.public_key_group.identity
        self._count = 0

    @property
    def engine(self) -> PoP:
        return self._engine

    def __len__(self) -> int:
        return self._count

    def add_signature(self, signature: Signature) -> None:
        check_engine(self._engine, signature.engine)
        self._signature = self._engine.signature_group.add(self._signature, signature.point)

    def add_public_key(self, public_key: PublicKey) -> None:
        check_engine(self._engine, public_key.engine)
        self._public_key = self._engine.public_key_group.add(self._public_key, public_key.point)
        self._count += 1

    def aggregate(self, signed: Signed) -> None:
        """Adds every key and the signature of `signed`.

        Raises:
            AggregationError: If `signed` covers a different message. Nothing
                is added in that case.
        """
        check_engine(self._engine, signed.engine)
        keys: List[PublicKey] = []
        for message, public_key in signed.messages_and_publickeys():
            if message != self.message:
                raise AggregationError(f"Expected {self.message!r}, got {message!r}")
            keys.append(public_key)
        for public_key in keys:
            self.add_public_key(public_key)
        self.add_signature(signed.signature())

    def signature(self) -> Signature:
        return Signature(self._engine, self._signature)

    def public_key(self) -> PublicKey:
        return PublicKey(self._engine, self._public_key)

    def messages_and_publickeys(self) -> Iterator[Tuple[Message, PublicKey]]:
        return iter([(self.message, self.public_key())])
