"""Aggregation of signatures on pairwise distinct messages.

Distinct messages make linear aggregation safe without proofs of
possession, since a rogue key cannot cancel a key that signed a different
message. Each message appears once, together with its signer's key.
"""
from __future__ import annotations

from typing import Dict, Iterator, Tuple

from .engine import EngineBLS
from .errors import AggregationError
from .message import Message
from .signed import Signed, check_engine
from .single import PublicKey, Signature

__all__ = ["DistinctMessages"]


class DistinctMessages(Signed):
    """An aggregate signature over distinct messages."""

    def __init__(self, engine: EngineBLS) -> None:
        self._engine = engine
        self._messages: Dict[Message, PublicKey] = {}
        self._signature = engine.signature_group.identity

    @property
    def engine(self) -> EngineBLS:
        return self._engine

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message: Message) -> bool:
        return message in self._messages

    def add_message_n_publickey(self, message: Message, public_key: PublicKey) -> None:
        """Records a message and its signer without a signature.

        Raises:
            AggregationError: If `message` is already present.
        """
        check_engine(self._engine, public_key.engine)
        if message in self._messages:
            raise AggregationError(f"Attempted to aggregate duplicate message {message!r}")
        self._messages[message] = public_key

    def add_signature(self, signature: Signature) -> None:
        check_engine(self._engine, signature.engine)
        self._signature = self._engine.signature_group.add(self._signature, signature.point)

    def add(self, signed: Signed) -> None:
        """Adds all pairs and the signature of `signed`.

        Raises:
            AggregationError: If any message of `signed` is already present or
                repeated. Nothing is added in that case.
        """
        check_engine(self._engine, signed.engine)
        pairs = list(signed.messages_and_publickeys())
        seen = set()
        for message, _ in pairs:
            if message in self._messages or message in seen:
                raise AggregationError(f"Attempted to aggregate duplicate message {message!r}")
            seen.add(message)
        for message, public_key in pairs:
            self.add_message_n_publickey(message, public_key)
        self.add_signature(signed.signature())

    def merge(self, other: "DistinctMessages") -> None:
        """Merges another distinct-message aggregate into this one."""
        self.add(other)

    def signature(self) -> Signature:
        return Signature(self._engine, self._signature)

    def messages_and_publickeys(self) -> Iterator[Tuple[Message, PublicKey]]:
        return iter(list(self._messages.items()))
