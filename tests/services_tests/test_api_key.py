import unittest

from services.api_key import normalize_api_key, strip_api_key_prefix


class TestApiKey(unittest.TestCase):
    def test_normalize_adds_prefix(self):
        self.assertEqual(normalize_api_key("abc123"), "Key abc123")

    def test_normalize_keeps_existing_prefix(self):
        self.assertEqual(normalize_api_key("Key abc123"), "Key abc123")

    def test_normalize_is_idempotent(self):
        for raw in ["abc", "Key abc", "", "key lower", "Keyabc"]:
            once = normalize_api_key(raw)
            self.assertEqual(normalize_api_key(once), once, raw)

    def test_strip_removes_prefix_and_extra_whitespace(self):
        self.assertEqual(strip_api_key_prefix("Key abc"), "abc")
        self.assertEqual(strip_api_key_prefix("Key    abc"), "abc")

    def test_strip_leaves_bare_token(self):
        self.assertEqual(strip_api_key_prefix("abc"), "abc")
        # only the leading "Key " word is a prefix
        self.assertEqual(strip_api_key_prefix("Keyabc"), "Keyabc")

    def test_strip_bare_and_lowercase_prefix(self):
        self.assertEqual(strip_api_key_prefix("Key"), "")
        self.assertEqual(strip_api_key_prefix("key abc"), "abc")
        self.assertEqual(normalize_api_key(strip_api_key_prefix("key abc")), "Key abc")
        self.assertEqual(normalize_api_key(strip_api_key_prefix("Key")), "Key ")

    def test_strip_none(self):
        self.assertEqual(strip_api_key_prefix(None), "")

    def test_strip_then_normalize_never_double_prefixes(self):
        self.assertEqual(normalize_api_key(strip_api_key_prefix("Key abc")), "Key abc")


if __name__ == "__main__":
    unittest.main()
