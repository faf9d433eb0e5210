class AggBLSError(Exception):
    """
    Base class for all aggbls errors.

    This exception serves as the root of the aggbls error hierarchy.
    """
    pass


class InvalidParameterError(AggBLSError):
    """
    Raised when a provided parameter is invalid or malformed.

    Examples include mixing points of a different orientation into a
    Miller loop, or signed values produced under two different engines.
    """
    pass


class DeserializationError(AggBLSError, ValueError):
    """
    Raised when bytes cannot be decoded into a scalar or curve point.

    This covers wrong lengths, invalid compression flags, points that are
    off the curve and points outside the prime-order subgroup.
    """
    pass


class CapabilityError(AggBLSError, TypeError):
    """
    Raised when an engine lacks the capability an operation requires.

    Trivially deserializing a public key under the proof-of-possession
    wrapper is the main example.
    """
    pass


class AggregationError(AggBLSError):
    """
    Raised when a signature cannot be added to an aggregate.

    Examples include a repeated message in a distinct-message aggregate or
    a different message in a same-message aggregate.
    """
    pass
