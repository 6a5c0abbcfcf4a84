"""Game systems: RNG, terrain generation, world building."""

from conquest.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
