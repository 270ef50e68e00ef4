"""Tests for the true particle data class."""

import numpy as np

from trkmatch.data import Particle


class TestParticle:
    """Test Particle object creation."""

    def test_particle_default(self):
        """Test Particle creation with default values."""
        particle = Particle()

        assert particle.id == -1
        assert particle.pdg_code == -1
        assert particle.time == -np.inf
        assert particle.start_pos.shape == (3,)

    def test_particle_values(self):
        """Test Particle creation with explicit values."""
        particle = Particle(id=4, pdg_code=13, time=12.5, start_pos=[1, 2, 3])

        assert particle.pdg_code == 13
        assert particle.start_pos.dtype == np.float64
        assert particle.scalar_dict()["start_pos_y"] == 2.0
