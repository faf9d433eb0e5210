import multibase
import pytest

from aggbls import (
    TINY_BLS,
    Z_BLS,
    CapabilityError,
    DeserializationError,
    Keypair,
    PoP,
    multibase_to_public_key_bytes,
    public_key_from_multibase,
    public_key_to_multibase,
)


class TestMultibase:

    def test_round_trip(self, engine, keypairs):
        pk = keypairs[0].public
        mb = public_key_to_multibase(pk)
        assert mb.startswith("z")

        name, raw = multibase_to_public_key_bytes(mb)
        assert name == engine.public_key_group.name
        assert raw == pk.to_bytes()
        assert public_key_from_multibase(engine, mb) == pk

    def test_prefix_names_group(self, rng):
        g1_key = Keypair.generate(Z_BLS, rng).public
        g2_key = Keypair.generate(TINY_BLS, rng).public
        assert multibase.decode(public_key_to_multibase(g1_key)).startswith(b"\xea\x01")
        assert multibase.decode(public_key_to_multibase(g2_key)).startswith(b"\xeb\x01")

        with pytest.raises(DeserializationError, match="engine expects"):
            public_key_from_multibase(TINY_BLS, public_key_to_multibase(g1_key))

    def test_unknown_prefix(self):
        mb = multibase.encode("base58btc", b"\xed\x01" + bytes(32)).decode("ascii")
        with pytest.raises(DeserializationError, match="Unknown multicodec prefix"):
            multibase_to_public_key_bytes(mb)

    def test_pop_engine_rejected(self, engine, keypairs):
        mb = public_key_to_multibase(keypairs[0].public)
        with pytest.raises(CapabilityError):
            public_key_from_multibase(PoP(engine), mb)
