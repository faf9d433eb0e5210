import random
import secrets

from aggbls import (
    TINY_BLS,
    Z_BLS,
    DistinctMessages,
    Keypair,
    Message,
    PoP,
    SignatureAggregatorAssumingPoP,
    check_proof_of_possession,
    prove_possession,
    public_key_to_multibase,
)

CONTEXT = b"aggbls-demo"


def run_same_message_demo(engine, rng: random.Random) -> None:
    """
    Same-message aggregation: every signer proves possession first.
    """
    pop = PoP(engine)
    print(f"\n--- Scenario A: same message, {engine.orientation.value} orientation ---")

    signers = [Keypair.generate(pop, rng) for _ in range(3)]
    registry = []
    for kp in signers:
        proof = prove_possession(kp)
        key = check_proof_of_possession(pop, kp.public.to_bytes(), proof.to_bytes())
        assert key is not None, "proof of possession rejected"
        registry.append(key)
        print(f"    registered {public_key_to_multibase(key)[:24]}...")

    message = Message.new(CONTEXT, b"All parties agree to transfer 100 tokens to Dave.")
    agg = SignatureAggregatorAssumingPoP(pop, message)
    for kp in signers:
        agg.aggregate(kp.sign(message))

    print(f"    aggregated {len(agg)} signatures into {len(agg.signature().to_bytes())} bytes")
    valid = agg.verify()
    print(f"    result: {'valid' if valid else 'INVALID'}")
    assert valid


def run_distinct_message_demo(engine, rng: random.Random) -> None:
    """
    Distinct-message aggregation: no proofs of possession needed.
    """
    print(f"\n--- Scenario B: distinct messages, {engine.orientation.value} orientation ---")
    payloads = [
        b"Alice authorizes payment of 10 tokens.",
        b"Bob authorizes payment of 20 tokens.",
        b"Carol authorizes payment of 30 tokens.",
    ]

    agg = DistinctMessages(engine)
    for payload in payloads:
        kp = Keypair.generate(engine, rng)
        agg.add(kp.sign(Message.new(CONTEXT, payload)))

    valid = agg.verify()
    print(f"    result: {'valid' if valid else 'INVALID'}")
    assert valid


if __name__ == "__main__":
    source = secrets.SystemRandom()
    for eng in (Z_BLS, TINY_BLS):
        run_same_message_demo(eng, source)
        run_distinct_message_demo(eng, source)
