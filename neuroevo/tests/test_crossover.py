"""
Tests for uniform crossover.

Tests that the child encoding:
- Keeps the parents' length and dtype
- Takes every gene from one of the two parents
- Draws parents with a fair coin
- Rejects parents of different lengths
"""
import numpy as np
import pytest

from neuroevo.evolution import Genome, GenotypeLengthError, uniform_mix

from .factories import IdGenome


class TestUniformMix:
    """Tests for uniform_mix."""

    @pytest.fixture
    def parent_a(self):
        return np.zeros(64, dtype=np.float32)

    @pytest.fixture
    def parent_b(self):
        return np.ones(64, dtype=np.float32)

    def test_preserves_length(self, parent_a, parent_b, rng):
        """Test that the child has the parents' length."""
        child = uniform_mix(parent_a, parent_b, rng)

        assert len(child) == len(parent_a) == len(parent_b)

    def test_preserves_dtype(self, parent_a, parent_b, rng):
        """Test that the child keeps the element type."""
        child = uniform_mix(parent_a, parent_b, rng)

        assert child.dtype == np.float32

    def test_genes_come_from_parents(self, rng):
        """Test that every child gene is the gene of A or B at that position."""
        a = rng.random(100)
        b = rng.random(100)

        child = uniform_mix(a, b, rng)

        assert np.all((child == a) | (child == b))

    def test_mixes_both_parents(self, parent_a, parent_b, rng):
        """Test that a long child inherits from both parents."""
        child = uniform_mix(parent_a, parent_b, rng)

        assert 0 < child.sum() < len(child)

    def test_coin_is_fair(self, rng):
        """Test that roughly half the genes come from each parent."""
        a = np.zeros(10_000)
        b = np.ones(10_000)

        child = uniform_mix(a, b, rng)

        assert 0.45 < child.mean() < 0.55

    def test_parents_unchanged(self, parent_a, parent_b, rng):
        """Test that crossover does not modify the parents."""
        uniform_mix(parent_a, parent_b, rng)

        assert np.all(parent_a == 0)
        assert np.all(parent_b == 1)

    def test_identical_parents(self, rng):
        """Test that crossing a genome with itself reproduces it."""
        a = rng.random(32)

        child = uniform_mix(a, a.copy(), rng)

        assert np.array_equal(child, a)

    def test_accepts_sequences(self, rng):
        """Test that plain lists are accepted."""
        child = uniform_mix([1, 2, 3], [4, 5, 6], rng)

        assert len(child) == 3
        assert all(c in (x, y) for c, x, y in zip(child, [1, 2, 3], [4, 5, 6]))

    def test_same_seed_same_child(self, parent_a, parent_b):
        """Test that the outcome depends only on the generator."""
        first = uniform_mix(parent_a, parent_b, np.random.default_rng(7))
        second = uniform_mix(parent_a, parent_b, np.random.default_rng(7))

        assert np.array_equal(first, second)

    def test_length_mismatch_raises(self, rng):
        """Test that parents of different length are rejected."""
        with pytest.raises(GenotypeLengthError, match="same length"):
            uniform_mix(np.zeros(4), np.zeros(5), rng)

    def test_length_error_is_value_error(self, rng):
        """Test that the length error is a ValueError."""
        with pytest.raises(ValueError):
            uniform_mix(np.zeros(2), np.zeros(3), rng)


class TestGenomeMix:
    """Tests for the default Genome.mix hook."""

    def test_default_mix_is_uniform(self, rng):
        """Test that Genome.mix delegates to uniform crossover."""
        a = IdGenome.spawn(rng)
        b = IdGenome.spawn(rng)

        genes = IdGenome.mix(a.serialize(), b.serialize(), rng)
        child = IdGenome.deserialize(genes)

        assert len(child.serialize()) == len(a.serialize())
        assert np.all((genes == a.genes) | (genes == b.genes))

    def test_genome_is_abstract(self):
        """Test that the contract cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Genome()
