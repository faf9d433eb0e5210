"""Verification routines for any `aggbls.signed.Signed` value.

Every routine calls `messages_and_publickeys()` exactly once and reports only
success or failure; forged, malformed and degenerate inputs all yield False.
Points from the wrong group, such as keys of an engine with the other
orientation, count as malformed.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

from .errors import InvalidParameterError

if TYPE_CHECKING:
    from .groups import Point
    from .message import Message
    from .signed import Signed

logger = logging.getLogger(__name__)

__all__ = [
    "verify_unoptimized",
    "verify_simple",
    "verify_with_distinct_messages",
]


def verify_unoptimized(signed: "Signed") -> bool:
    """Checks `e(g, sigma) == prod e(pk_i, H(m_i))` with both sides computed.

    Slowest variant, with one final exponentiation per side. Useful as a
    reference for the single-sided equation used everywhere else.
    """
    engine = signed.engine
    try:
        generator = engine.prepare_public_key(engine.public_key_group.generator)
        signature = engine.prepare_signature(signed.signature().point)
        lhs = engine.final_exponentiation(engine.miller_loop([(generator, signature)]))

        rhs_pairs = (
            (engine.prepare_public_key(public_key.point),
             engine.prepare_signature(message.hash_to_signature_curve(engine)))
            for message, public_key in signed.messages_and_publickeys()
        )
        rhs = engine.final_exponentiation(engine.miller_loop(rhs_pairs))
    except InvalidParameterError as e:
        logger.debug("Unoptimized verification rejected its input: %s", e)
        return False

    if lhs is None or rhs is None:
        logger.debug("Unoptimized verification failed on a degenerate pairing")
        return False
    return lhs == rhs


def verify_simple(signed: "Signed") -> bool:
    """Checks an aggregate with a single batched Miller loop.

    Pairs are prepared lazily as the Miller loop consumes them, so large
    aggregates are never materialized. No deduplication or normalization is
    done.
    """
    engine = signed.engine
    try:
        signature = engine.prepare_signature(signed.signature().point)
        inputs = (
            (engine.prepare_public_key(public_key.point),
             engine.prepare_signature(message.hash_to_signature_curve(engine)))
            for message, public_key in signed.messages_and_publickeys()
        )
        result = engine.verify_prepared(signature, inputs)
    except InvalidParameterError as e:
        logger.debug("Simple verification rejected its input: %s", e)
        return False
    logger.debug("Simple verification result: %s", result)
    return result


def verify_with_distinct_messages(signed: "Signed", normalize_public_keys: bool = False) -> bool:
    """Checks an aggregate after merging public keys that share a message.

    By bilinearity `e(pk_1, H(m)) * e(pk_2, H(m)) == e(pk_1 + pk_2, H(m))`,
    so one Miller loop pair per distinct message suffices.

    Args:
        signed: The aggregate to verify.
        normalize_public_keys: Convert merged keys to affine form before
            preparing them. Whether this pays off depends on the signer set
            size, so it is left to the caller.

    Returns:
        True if the aggregate verifies, False otherwise.
    """
    engine = signed.engine
    try:
        group = engine.public_key_group
        signature = engine.prepare_signature(signed.signature().point)

        merged: Dict["Message", "Point"] = {}
        for message, public_key in signed.messages_and_publickeys():
            point = group.check(public_key.point)
            if message in merged:
                merged[message] = group.add(merged[message], point)
            else:
                merged[message] = point

        messages = list(merged)
        points = list(merged.values())
        if normalize_public_keys:
            points = group.batch_normalize(points)

        inputs = (
            (engine.prepare_public_key(point), engine.prepare_signature(message.hash_to_signature_curve(engine)))
            for message, point in zip(messages, points)
        )
        result = engine.verify_prepared(signature, inputs)
    except InvalidParameterError as e:
        logger.debug("Distinct-message verification rejected its input: %s", e)
        return False
    logger.debug("Verified %d distinct messages: %s", len(messages), result)
    return result
