import unittest

from schemas.settings import IncompleteProfile, SenderProfile
from services.profile import validate_profile

COMPLETE = {
    "api_key": "abc123",
    "company_name": "Acme Trading (Pty) Ltd",
    "trading_name": "Acme",
    "registration_number": "2019/123456/07",
    "address": "1 Main Road\nCape Town\n8001",
}


class TestValidateProfile(unittest.TestCase):
    def test_complete_map_gives_sender_profile(self):
        state = validate_profile(COMPLETE)
        self.assertIsInstance(state, SenderProfile)
        self.assertEqual(state.company_name, "Acme Trading (Pty) Ltd")

    def test_empty_map_lists_every_field(self):
        state = validate_profile({})
        self.assertIsInstance(state, IncompleteProfile)
        self.assertEqual(
            set(state.errors),
            {"api_key", "company_name", "trading_name", "registration_number", "address"},
        )
        self.assertEqual(state.errors["api_key"], "API Key is required")

    def test_blank_values_count_as_missing(self):
        partial = dict(COMPLETE, trading_name="   ", address=None)
        state = validate_profile(partial)
        self.assertIsInstance(state, IncompleteProfile)
        self.assertEqual(set(state.errors), {"trading_name", "address"})

    def test_extra_keys_ignored(self):
        state = validate_profile(dict(COMPLETE, user_id="u1"))
        self.assertIsInstance(state, SenderProfile)


if __name__ == "__main__":
    unittest.main()
