import hashlib

import pytest

from aggbls import MESSAGE_SIZE, TINY_BLS, Z_BLS, InvalidParameterError, Message


class TestMessage:

    def test_digest_size_and_determinism(self):
        m1 = Message.new(b"ctx", b"payload")
        m2 = Message.new(b"ctx", b"payload")
        assert len(m1.digest) == MESSAGE_SIZE == 32
        assert m1 == m2
        assert hash(m1) == hash(m2)

    def test_matches_shake128_construction(self):
        """The digest is SHAKE128(context || u64le(len) || message)."""
        context, payload = b"ctx", b"payload"
        expected = hashlib.shake_128(context + len(payload).to_bytes(8, "little") + payload).digest(32)
        assert Message.new(context, payload).digest == expected

    def test_domain_separation(self):
        assert Message.new(b"ctx1", b"same") != Message.new(b"ctx2", b"same")

    def test_length_prefix_prevents_concatenation_ambiguity(self):
        # Both inputs feed the same bytes "abc" without the length prefix.
        assert Message.new(b"ab", b"c") != Message.new(b"a", b"bc")

    def test_str_inputs_are_utf8(self):
        assert Message.new("ctx", "test") == Message.new(b"ctx", b"test")

    def test_from_bytes_uses_empty_context(self):
        assert Message.from_bytes(b"test") == Message.new(b"", b"test")

    def test_ordering_and_map_key(self):
        msgs = [Message.new(b"ctx", bytes([i])) for i in range(5)]
        assert sorted(msgs) == sorted(msgs, key=lambda m: m.digest)
        table = {m: i for i, m in enumerate(msgs)}
        assert table[Message.new(b"ctx", bytes([3]))] == 3

    def test_invalid_digest_length(self):
        with pytest.raises(InvalidParameterError, match="32 bytes"):
            Message(b"\x00" * 31)

    def test_mutable_digest_is_copied(self):
        raw = bytearray(Message.new(b"ctx", b"payload").digest)
        m = Message(raw)
        assert type(m.digest) is bytes
        assert {m: 1}[Message.new(b"ctx", b"payload")] == 1
        raw[0] ^= 0xFF
        assert m == Message.new(b"ctx", b"payload")

        with pytest.raises(InvalidParameterError, match="must be bytes"):
            Message(32)

    def test_bytes_conversion(self):
        m = Message.new(b"ctx", b"payload")
        assert bytes(m) == m.digest

    @pytest.mark.parametrize("engine", [Z_BLS, TINY_BLS], ids=["usual", "tiny"])
    def test_hash_to_signature_curve_uses_digest(self, engine):
        m = Message.new(b"ctx", b"payload")
        point = m.hash_to_signature_curve(engine)
        assert engine.signature_group.is_on_curve(point)
        assert engine.signature_group.eq(point, engine.hash_to_signature_curve(m.digest))
        assert not engine.signature_group.eq(point, engine.hash_to_signature_curve(b"payload"))
