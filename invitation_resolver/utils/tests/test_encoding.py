import binascii

from unittest import TestCase

from ..encoding import b64_to_bytes, b64_to_str, bytes_to_b64, pad, str_to_b64, unpad


class TestEncoding(TestCase):
    def test_pad(self):
        assert pad("YQ") == "YQ=="
        assert pad("YWI") == "YWI="
        assert pad("YWJj") == "YWJj"
        assert unpad("YQ==") == "YQ"

    def test_b64_str(self):
        assert str_to_b64("Alice") == "QWxpY2U="
        assert b64_to_str("QWxpY2U=") == "Alice"
        assert b64_to_str("QWxpY2U") == "Alice"

    def test_b64_urlsafe(self):
        val = b"\xfb\xff\xfe"
        assert bytes_to_b64(val) == "+//+"
        assert bytes_to_b64(val, urlsafe=True) == "-__-"
        assert bytes_to_b64(val, urlsafe=True, pad=False) == "-__-"
        assert b64_to_bytes("-__-", urlsafe=True) == val
        assert b64_to_bytes("+//+") == val

    def test_b64_strict_alphabet(self):
        with self.assertRaises(binascii.Error):
            b64_to_bytes("-__-")
        with self.assertRaises(binascii.Error):
            b64_to_bytes("not base64!")

    def test_b64_to_str_not_utf8(self):
        with self.assertRaises(UnicodeDecodeError):
            b64_to_str("//4=")
