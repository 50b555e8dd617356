import hashlib
import unittest

from easypay_client.psp import signer


FIELDS = {
    "pid": "1001",
    "type": "epay",
    "out_trade_no": "ORD20240101",
    "name": "VIP 会员",
    "money": "10.00",
    "notify_url": "https://shop.example/api/payment/notify",
    "return_url": "https://shop.example/order/result?orderNo=ORD20240101",
}
SECRET = "s3cr3t"


class TestCanonicalize(unittest.TestCase):
    def test_sorted_by_name(self):
        self.assertEqual(signer.canonicalize({"b": "2", "a": "1"}), "a=1&b=2")

    def test_drops_empty_absent_and_sign_fields(self):
        fields = [("b", "2"), ("a", "1"), ("c", ""), ("d", None), ("sign", "xx"), ("sign_type", "MD5")]
        self.assertEqual(signer.canonicalize(fields), "a=1&b=2")

    def test_byte_order_not_locale(self):
        # uppercase sorts before lowercase, "_" (0x5f) between them
        fields = {"a": "1", "B": "2", "_c": "3"}
        self.assertEqual(signer.canonicalize(fields), "B=2&_c=3&a=1")

    def test_values_not_url_encoded(self):
        fields = {"return_url": "https://x.example/r?orderNo=1&x=2"}
        self.assertEqual(signer.canonicalize(fields), "return_url=https://x.example/r?orderNo=1&x=2")


class TestSign(unittest.TestCase):
    def test_known_vector(self):
        expected = hashlib.md5("money=10.00&pid=1abc".encode("utf-8")).hexdigest()
        self.assertEqual(signer.sign({"pid": "1", "money": "10.00"}, "abc"), expected)

    def test_secret_appended_without_separator(self):
        expected = hashlib.md5("a=1&b=2x".encode("utf-8")).hexdigest()
        self.assertEqual(signer.sign({"b": "2", "a": "1"}, "x"), expected)

    def test_lowercase_hex_32(self):
        sig = signer.sign(FIELDS, SECRET)
        self.assertEqual(len(sig), 32)
        self.assertEqual(sig, sig.lower())
        int(sig, 16)

    def test_utf8_digest(self):
        expected = hashlib.md5("name=会员k".encode("utf-8")).hexdigest()
        self.assertEqual(signer.sign({"name": "会员"}, "k"), expected)

    def test_order_independent(self):
        reversed_pairs = list(reversed(list(FIELDS.items())))
        self.assertEqual(signer.sign(FIELDS, SECRET), signer.sign(reversed_pairs, SECRET))

    def test_empty_or_absent_extra_fields_ignored(self):
        base = signer.sign(FIELDS, SECRET)
        self.assertEqual(signer.sign({**FIELDS, "device": ""}, SECRET), base)
        self.assertEqual(signer.sign({**FIELDS, "device": None}, SECRET), base)

    def test_sign_fields_excluded(self):
        base = signer.sign(FIELDS, SECRET)
        self.assertEqual(signer.sign({**FIELDS, "sign": "abc", "sign_type": "MD5"}, SECRET), base)

    def test_sign_malformed_does_not_raise(self):
        for fields, secret in [(None, "k"), ({"a": "1"}, None), ({1: "x"}, "k"), (42, "k"), ([("a",)], "k")]:
            digest = signer.sign(fields, secret)
            self.assertEqual(len(digest), 32)
            self.assertEqual(digest, digest.lower())

        self.assertEqual(signer.sign(None, "k"), hashlib.md5(b"k").hexdigest())
        self.assertEqual(signer.sign({"a": "1"}, None), signer.sign({"a": "1"}, ""))
        self.assertEqual(signer.sign({1: "x", "a": "1"}, "k"), signer.sign({"a": "1"}, "k"))
        self.assertEqual(signer.sign([("a", "1"), ("b",)], "k"), signer.sign({"a": "1"}, "k"))


class TestVerify(unittest.TestCase):
    def signed(self, fields=FIELDS, secret=SECRET):
        return {**fields, "sign": signer.sign(fields, secret), "sign_type": "MD5"}

    def test_round_trip(self):
        self.assertTrue(signer.verify(self.signed(), SECRET))
        self.assertTrue(signer.verify(self.signed(), SECRET, constant_time=True))

    def test_round_trip_pairs(self):
        self.assertTrue(signer.verify(list(self.signed().items()), SECRET))

    def test_tamper_any_value(self):
        payload = self.signed()
        for name in FIELDS:
            tampered = dict(payload)
            tampered[name] = tampered[name] + "0"
            self.assertFalse(signer.verify(tampered, SECRET), name)
            self.assertFalse(signer.verify(tampered, SECRET, constant_time=True), name)

    def test_wrong_secret(self):
        self.assertFalse(signer.verify(self.signed(), "other"))

    def test_missing_or_empty_sign(self):
        payload = self.signed()
        del payload["sign"]
        self.assertFalse(signer.verify(payload, SECRET))
        self.assertFalse(signer.verify({**payload, "sign": ""}, SECRET))
        self.assertFalse(signer.verify({**payload, "sign": None}, SECRET))

    def test_sign_type_ignored(self):
        payload = self.signed()
        payload["sign_type"] = "SHA256"
        self.assertTrue(signer.verify(payload, SECRET))

    def test_uppercase_signature_rejected(self):
        payload = self.signed()
        payload["sign"] = payload["sign"].upper()
        self.assertFalse(signer.verify(payload, SECRET))

    def test_malformed_payload_does_not_raise(self):
        self.assertFalse(signer.verify(None, SECRET))
        self.assertFalse(signer.verify("sign=abc", SECRET))
        self.assertFalse(signer.verify(42, SECRET))
        self.assertFalse(signer.verify([("only-one",)], SECRET))
        self.assertFalse(signer.verify({1: "x", "sign": "abc"}, SECRET))
        self.assertFalse(signer.verify(self.signed(), None))


if __name__ == "__main__":
    unittest.main()
