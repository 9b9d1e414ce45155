import hashlib

import pytest

from app.core.security import chained_signature, md5_upper, signatures_match


class TestMd5Upper:
    """Tests for md5_upper()."""

    @pytest.mark.unit
    def test_known_digests(self):
        assert md5_upper("") == "D41D8CD98F00B204E9800998ECF8427E"
        assert md5_upper("abc") == "900150983CD24FB0D6963F7D28E17F72"

    @pytest.mark.unit
    def test_output_is_uppercase_hex(self):
        digest = md5_upper("payhere")
        assert len(digest) == 32
        assert digest == digest.upper()
        int(digest, 16)

    @pytest.mark.unit
    def test_hashes_utf8_bytes(self):
        expected = hashlib.md5("Colombo ශ්‍රී".encode("utf-8")).hexdigest().upper()
        assert md5_upper("Colombo ශ්‍රී") == expected


class TestChainedSignature:
    """Tests for chained_signature()."""

    @pytest.mark.unit
    def test_appends_hashed_secret(self):
        expected = md5_upper("1211149" + "ORDER_1" + "10.00" + "LKR" + md5_upper("secret"))
        assert chained_signature("1211149", "ORDER_1", "10.00", "LKR", secret="secret") == expected

    @pytest.mark.unit
    def test_field_order_matters(self):
        a = chained_signature("A", "B", secret="s")
        b = chained_signature("B", "A", secret="s")
        assert a != b

    @pytest.mark.unit
    def test_different_secrets_produce_different_signatures(self):
        assert chained_signature("A", secret="one") != chained_signature("A", secret="two")


class TestSignaturesMatch:
    """Tests for signatures_match()."""

    @pytest.mark.unit
    def test_equal_digests_match(self):
        digest = md5_upper("x")
        assert signatures_match(digest, digest) is True

    @pytest.mark.unit
    def test_comparison_is_exact(self):
        digest = md5_upper("x")
        assert signatures_match(digest, digest.lower()) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("received", [None, ""])
    def test_missing_signature_never_matches(self, received):
        assert signatures_match(md5_upper("x"), received) is False
