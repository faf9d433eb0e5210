"""The minimal contract every aggregate-signature representation satisfies.

Any aggregation strategy (single, same-message, distinct-message, ...) that
implements `Signed` can be handed to any routine in `aggbls.verifiers`.
"""
from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Iterator, Tuple

from .errors import InvalidParameterError
from .verifiers import verify_simple

if TYPE_CHECKING:
    from .engine import EngineBLS
    from .message import Message
    from .single import PublicKey, Signature

__all__ = ["Signed", "check_engine"]


class Signed(abc.ABC):
    """An aggregated BLS signature with the messages and keys it covers."""

    @property
    @abc.abstractmethod
    def engine(self) -> "EngineBLS":
        """The engine all keys and signatures of this value belong to."""

    @abc.abstractmethod
    def signature(self) -> "Signature":
        """Returns the aggregated signature."""

    @abc.abstractmethod
    def messages_and_publickeys(self) -> Iterator[Tuple["Message", "PublicKey"]]:
        """Returns a one-shot iterator over (message, public key) pairs.

        Producing the pairs may itself do partial aggregation work, so the
        iterator is not restartable and must be consumed by a single reader.
        """

    def verify(self) -> bool:
        """Verifies this value with `verify_simple`.

        `verify_simple` consumes `messages_and_publickeys()` exactly once and
        does not expect normalized public keys. Strategies with a cheaper
        check override this method.
        """
        return verify_simple(self)


def check_engine(expected: "EngineBLS", actual: "EngineBLS") -> None:
    """Raises InvalidParameterError unless both engines are the same."""
    if expected != actual:
        raise InvalidParameterError(f"Engine mismatch: expected {expected!r}, got {actual!r}")
