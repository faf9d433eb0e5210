"""Domain-separated internal message digests.

Application messages are never hashed onto a curve directly. They are first
condensed into a 32-byte `Message` with SHAKE128, which keeps curve hashing
independent of the message length and gives a cheap, hashable map key.
256 bits is enough that birthday-bound attacks cannot find two
(context, message) pairs with the same digest.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from Crypto.Hash import SHAKE128

from .errors import InvalidParameterError

if TYPE_CHECKING:
    from .engine import EngineBLS
    from .groups import Point

MESSAGE_SIZE: int = 32


@dataclass(frozen=True, order=True)
class Message:
    """A 32-byte digest of a context and an application message.

    Attributes:
        digest: The SHAKE128 output.
    """
    digest: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.digest, (bytes, bytearray, memoryview)):
            raise InvalidParameterError(f"Message digest must be bytes, got {type(self.digest).__name__}")
        object.__setattr__(self, "digest", bytes(self.digest))
        if len(self.digest) != MESSAGE_SIZE:
            raise InvalidParameterError(f"Message digest must be {MESSAGE_SIZE} bytes, got {len(self.digest)}")

    @classmethod
    def new(cls, context: Union[str, bytes], message: Union[str, bytes]) -> "Message":
        """Digests `message` under the domain separation `context`.

        The XOF absorbs the context, the 8-byte little-endian length of the
        message and then the message itself, so distinct (context, message)
        pairs never produce the same input stream.

        Args:
            context: Domain separation context; str is UTF-8 encoded.
            message: The application message; str is UTF-8 encoded.

        Returns:
            The resulting Message.
        """
        ctx = context.encode("utf-8") if isinstance(context, str) else bytes(context)
        msg = message.encode("utf-8") if isinstance(message, str) else bytes(message)

        h = SHAKE128.new()
        h.update(ctx)
        h.update(len(msg).to_bytes(8, "little"))
        h.update(msg)
        return cls(h.read(MESSAGE_SIZE))

    @classmethod
    def from_bytes(cls, message: bytes) -> "Message":
        """Digests `message` with an empty context."""
        return cls.new(b"", message)

    def hash_to_signature_curve(self, engine: "EngineBLS") -> "Point":
        """Hashes the digest, not the application message, onto `engine`'s signature group."""
        return engine.hash_to_signature_curve(self.digest)

    def __bytes__(self) -> bytes:
        return self.digest

    def __repr__(self) -> str:
        return f"Message({self.digest.hex()})"
