import pytest

from aggbls import AggregationError, DistinctMessages, InvalidParameterError, PoP


class TestDistinctMessages:

    def test_aggregate_and_verify(self, engine, keypairs, messages):
        agg = DistinctMessages(engine)
        for kp, m in zip(keypairs, messages):
            agg.add(kp.sign(m))
        assert len(agg) == 3
        assert all(m in agg for m in messages)
        assert agg.verify()

    def test_duplicate_message_rejected(self, engine, keypairs, messages):
        agg = DistinctMessages(engine)
        agg.add(keypairs[0].sign(messages[0]))
        with pytest.raises(AggregationError, match="duplicate message"):
            agg.add(keypairs[1].sign(messages[0]))
        assert len(agg) == 1
        assert agg.verify()

    def test_merge(self, engine, keypairs, messages):
        left = DistinctMessages(engine)
        left.add(keypairs[0].sign(messages[0]))
        right = DistinctMessages(engine)
        right.add(keypairs[1].sign(messages[1]))
        right.add(keypairs[2].sign(messages[2]))

        left.merge(right)
        assert len(left) == 3
        assert left.verify()

        with pytest.raises(AggregationError):
            left.merge(right)

    def test_unsigned_pair_fails(self, engine, keypairs, messages):
        agg = DistinctMessages(engine)
        agg.add(keypairs[0].sign(messages[0]))
        agg.add_message_n_publickey(messages[1], keypairs[1].public)
        assert not agg.verify()

        agg.add_signature(keypairs[1].sign(messages[1]).signature())
        assert agg.verify()

    def test_engine_mismatch(self, engine, keypairs, messages):
        agg = DistinctMessages(PoP(engine))
        with pytest.raises(InvalidParameterError):
            agg.add(keypairs[0].sign(messages[0]))
