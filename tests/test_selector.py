"""
Tests for the deterministic selector.
"""
from diary_insight.services.selector import pick_deterministic, stable_hash


class TestStableHash:
    def test_known_values(self):
        assert stable_hash("") == 0
        assert stable_hash("a") == 97
        assert stable_hash("ab") == 97 * 31 + 98

    def test_hashes_utf8_bytes(self):
        # "가" is EA B0 80 in UTF-8.
        assert stable_hash("가") == ((234 * 31 + 176) * 31 + 128)

    def test_stays_in_32_bits(self):
        h = stable_hash("x" * 500)
        assert 0 <= h <= 0xFFFFFFFF

    def test_repeatable(self):
        assert stable_hash("2024-01-01|u1") == stable_hash("2024-01-01|u1")


class TestPickDeterministic:
    CATALOG = ["a", "b", "c", "d", "e"]

    def test_same_seed_same_item(self):
        first = pick_deterministic(["2024-01-01", "u1"], self.CATALOG)
        second = pick_deterministic(["2024-01-01", "u1"], list(self.CATALOG))
        assert first == second
        assert first in self.CATALOG

    def test_owner_changes_selection(self):
        pair = ["left", "right"]
        assert pick_deterministic(["2024-01-01", "u1"], pair) != pick_deterministic(
            ["2024-01-01", "u2"], pair
        )

    def test_index_is_hash_mod_length(self):
        expected = self.CATALOG[stable_hash("2024-01-01|u1") % len(self.CATALOG)]
        assert pick_deterministic(["2024-01-01", "u1"], self.CATALOG) == expected

    def test_empty_candidates(self):
        assert pick_deterministic(["x"], []) is None
