"""Times aggregation and verification under both orientations.

Also compares `verify_with_distinct_messages` with and without public key
normalization, since whether normalizing pays off depends on the signer set
size and the platform.
"""
import random
import sys
import time

from aggbls import (
    TINY_BLS,
    Z_BLS,
    DistinctMessages,
    Keypair,
    Message,
    PoP,
    SignatureAggregatorAssumingPoP,
    verify_with_distinct_messages,
)


def same_message(engine, signers: int, rng: random.Random) -> None:
    pop = PoP(engine)
    message = Message.new(b"aggbls-eval", b"same")
    keypairs = [Keypair.generate(pop, rng) for _ in range(signers)]
    signed = [kp.sign(message) for kp in keypairs]

    start = time.time()
    agg = SignatureAggregatorAssumingPoP(pop, message)
    for s in signed:
        agg.aggregate(s)
    end = time.time()
    print(f"  same-message aggregation of {signers} {(end - start):.6f} s")

    start = time.time()
    assert agg.verify()
    end = time.time()
    print(f"  same-message verification {(end - start):.6f} s")


def distinct_messages(engine, signers: int, rng: random.Random) -> None:
    agg = DistinctMessages(engine)
    for i in range(signers):
        kp = Keypair.generate(engine, rng)
        agg.add(kp.sign(Message.new(b"aggbls-eval", i.to_bytes(4, "big"))))

    for normalize in (False, True):
        start = time.time()
        assert verify_with_distinct_messages(agg, normalize_public_keys=normalize)
        end = time.time()
        print(f"  distinct verification of {signers} (normalize={normalize}) {(end - start):.6f} s")


def main() -> None:
    signers = int(sys.argv[1]) if len(sys.argv) > 1 else 4
    rng = random.Random(0)
    for engine in (Z_BLS, TINY_BLS):
        print(f"{engine.orientation.value}: public keys in {engine.public_key_group.name}, "
              f"signatures in {engine.signature_group.name}")
        same_message(engine, signers, rng)
        distinct_messages(engine, signers, rng)


if __name__ == "__main__":
    main()
