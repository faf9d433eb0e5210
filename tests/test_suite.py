import os

import pytest
from pydantic import ValidationError

from aggbls import CurveBLS, HashToCurveSuite, Orientation
from aggbls.suite import DST_G1, DST_G2


class TestHashToCurveSuite:

    def test_defaults_follow_signature_group(self):
        assert CurveBLS.usual().suite.dst == DST_G2
        assert CurveBLS.tiny().suite.dst == DST_G1

    def test_dst_validation(self):
        with pytest.raises(ValueError, match="DST length must be between 1 and 255 bytes"):
            HashToCurveSuite(dst=b"")
        with pytest.raises(ValueError, match="DST length must be between 1 and 255 bytes"):
            HashToCurveSuite(dst=os.urandom(256))

    def test_suite_is_frozen(self):
        suite = HashToCurveSuite(dst=b"CUSTOM_DST")
        with pytest.raises(ValidationError):
            suite.dst = b"OTHER"

    def test_unknown_group(self):
        with pytest.raises(ValueError, match="Unknown pairing group"):
            HashToCurveSuite.default_for("G3")

    def test_engine_equality_includes_suite(self):
        custom = CurveBLS(Orientation.USUAL, HashToCurveSuite(dst=b"CUSTOM_DST"))
        assert custom == CurveBLS(Orientation.USUAL, HashToCurveSuite(dst=b"CUSTOM_DST"))
        assert custom != CurveBLS.usual()

    def test_dst_changes_hash(self):
        custom = CurveBLS.usual(HashToCurveSuite(dst=b"CUSTOM_DST"))
        default = CurveBLS.usual()
        group = default.signature_group
        assert not group.eq(custom.hash_to_signature_curve(b"msg"), default.hash_to_signature_curve(b"msg"))
