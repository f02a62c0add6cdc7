"""Tests for seeding primitives."""

import pytest
from py_terrain.core.seeding import (
    Mulberry32, hash_identity, derive_seed, offset_seed, seeded_random
)


class TestHashIdentity:
    """Test identity hashing."""

    def test_empty_string_is_initial_accumulator(self):
        assert hash_identity("") == 5381

    def test_single_character(self):
        # 5381 * 33 = 177573; 177573 ^ ord("a") = 177604
        assert hash_identity("a") == 177604

    def test_deterministic(self):
        assert hash_identity("octocat") == hash_identity("octocat")

    def test_unsigned_32_bit_range(self):
        for identity in ["a", "octocat", "x" * 500, "ünïcødé", "🌲forest"]:
            h = hash_identity(identity)
            assert 0 <= h < 2**32

    def test_short_strings_spread(self):
        """Usernames differing by one character should land far apart."""
        hashes = {hash_identity(f"user{i}") for i in range(100)}
        assert len(hashes) == 100

    def test_derive_seed_appends_variant(self):
        assert derive_seed("octocat", "dark") == hash_identity("octocatdark")
        assert derive_seed("octocat", "dark") != derive_seed("octocat", "light")

    def test_offset_seed_wraps(self):
        assert offset_seed(2**32 - 1, 1) == 0
        assert offset_seed(100, 7919) == 8019


class TestMulberry32:
    """Test the seeded generator."""

    def test_same_seed_same_sequence(self):
        a = Mulberry32(42)
        b = Mulberry32(42)
        seq_a = [a.random() for _ in range(20)]
        seq_b = [b.random() for _ in range(20)]
        assert seq_a == seq_b

    def test_closure_form_matches_object(self):
        rand = seeded_random(42)
        gen = Mulberry32(42)
        assert [rand() for _ in range(20)] == [gen.random() for _ in range(20)]

    def test_values_in_unit_interval(self):
        gen = Mulberry32(12345)
        for _ in range(2000):
            v = gen.random()
            assert 0.0 <= v < 1.0

    def test_distribution_roughly_even(self):
        gen = Mulberry32(7)
        draws = [gen.random() for _ in range(1000)]
        low = sum(1 for v in draws if v < 0.5)
        assert 400 < low < 600

    def test_different_seeds_diverge(self):
        a = Mulberry32(1)
        b = Mulberry32(2)
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_call_count(self):
        gen = Mulberry32(3)
        for _ in range(7):
            gen.random()
        assert gen.call_count == 7

    def test_randint_bounds(self):
        gen = Mulberry32(99)
        values = [gen.randint(2, 5) for _ in range(500)]
        assert set(values) == {2, 3, 4, 5}

    def test_choice(self):
        gen = Mulberry32(5)
        items = ["a", "b", "c"]
        assert gen.choice(items) in items
        with pytest.raises(IndexError):
            gen.choice([])

    def test_seed_folded_to_32_bits(self):
        a = Mulberry32(2**32 + 10)
        b = Mulberry32(10)
        assert a.random() == b.random()
