import pytest

from aggbls import (
    TINY_BLS,
    Z_BLS,
    Keypair,
    Signature,
    Signed,
    SignedMessage,
    aggregate_signatures,
    verify_simple,
    verify_unoptimized,
    verify_with_distinct_messages,
)


class OneShotAggregate(Signed):
    """Minimal strategy that hands out a generator and counts how often it is asked."""

    def __init__(self, engine, pairs, signature):
        self._engine = engine
        self._pairs = pairs
        self._signature = signature
        self.calls = 0

    @property
    def engine(self):
        return self._engine

    def signature(self):
        return self._signature

    def messages_and_publickeys(self):
        self.calls += 1
        return (pair for pair in self._pairs)


@pytest.fixture(scope="module")
def signed_messages(keypairs, messages):
    return [kp.sign(m) for kp, m in zip(keypairs, messages)]


@pytest.fixture(scope="module")
def aggregate_parts(engine, signed_messages):
    pairs = [(s.message, s.public_key) for s in signed_messages]
    signature = aggregate_signatures(engine, [s.signature() for s in signed_messages])
    return pairs, signature


class TestVerifiers:

    def test_default_verify_consumes_once(self, engine, aggregate_parts):
        pairs, signature = aggregate_parts
        signed = OneShotAggregate(engine, pairs, signature)
        assert signed.verify()
        assert signed.calls == 1

    @pytest.mark.parametrize("verifier", [verify_unoptimized, verify_simple, verify_with_distinct_messages])
    def test_valid_aggregate(self, engine, aggregate_parts, verifier):
        pairs, signature = aggregate_parts
        signed = OneShotAggregate(engine, pairs, signature)
        assert verifier(signed)
        assert signed.calls == 1

    @pytest.mark.parametrize("verifier", [verify_unoptimized, verify_simple, verify_with_distinct_messages])
    def test_invalid_aggregate(self, engine, aggregate_parts, verifier):
        pairs, signature = aggregate_parts
        # Swap the keys of the first two messages.
        swapped = [(pairs[0][0], pairs[1][1]), (pairs[1][0], pairs[0][1]), pairs[2]]
        assert not verifier(OneShotAggregate(engine, swapped, signature))
        # Drop one signer.
        assert not verifier(OneShotAggregate(engine, pairs[:2], signature))

    def test_unoptimized_agrees_with_single_sided(self, engine, signed_messages):
        for signed in signed_messages:
            assert verify_unoptimized(signed) == verify_simple(signed) == signed.verify()
        forged = SignedMessage(
            signed_messages[0].message, signed_messages[1].public_key, signed_messages[0].signature()
        )
        assert verify_unoptimized(forged) == verify_simple(forged) == forged.verify() is False

    @pytest.mark.parametrize("normalize", [False, True])
    def test_distinct_messages_merges_shared_message(self, engine, keypairs, messages, normalize):
        # Two signers on messages[0], one on messages[1].
        sigs = [keypairs[0].sign(messages[0]), keypairs[1].sign(messages[0]), keypairs[2].sign(messages[1])]
        pairs = [(s.message, s.public_key) for s in sigs]
        signature = aggregate_signatures(engine, [s.signature() for s in sigs])

        signed = OneShotAggregate(engine, pairs, signature)
        assert verify_with_distinct_messages(signed, normalize_public_keys=normalize)
        assert signed.calls == 1
        assert verify_simple(OneShotAggregate(engine, pairs, signature))

    def test_empty_aggregate(self, engine):
        identity = Signature(engine, engine.signature_group.identity)
        assert verify_simple(OneShotAggregate(engine, [], identity))

    @pytest.mark.parametrize("verifier", [verify_unoptimized, verify_simple, verify_with_distinct_messages])
    def test_other_orientation_points_are_false(self, engine, aggregate_parts, verifier, rng):
        pairs, signature = aggregate_parts
        other = TINY_BLS if engine == Z_BLS else Z_BLS
        stranger = Keypair.generate(other, rng)

        mixed = [(pairs[0][0], stranger.public)] + pairs[1:]
        assert verifier(OneShotAggregate(engine, mixed, signature)) is False

        foreign_signature = stranger.sign(pairs[0][0]).signature()
        assert verifier(OneShotAggregate(engine, pairs, foreign_signature)) is False
