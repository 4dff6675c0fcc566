import numpy as np
import pytest

from evosim.creatures.organism import Organism, OrganismState
from evosim.genome import Genome
from evosim.state import SimulationState
from evosim.world import World


class FakeClock:
    """Stands in for pygame.time.Clock with a fixed frame time."""

    def __init__(self, elapsed_ms=16):
        self.elapsed_ms = elapsed_ms
        self.ticks = 0

    def tick(self, framerate=0):
        self.ticks += 1
        return self.elapsed_ms

    def get_fps(self):
        return 60.0


class ScriptedRng:
    """
    Minimal numpy-Generator lookalike. `random()` pops scripted values and
    then repeats `default`; gaussian draws return the mean and record sigma.
    """

    def __init__(self, randoms=(), default=0.0):
        self.randoms = list(randoms)
        self.default = default
        self.sigmas = []

    def random(self):
        return self.randoms.pop(0) if self.randoms else self.default

    def normal(self, mean=0.0, std_dev=1.0):
        self.sigmas.append(std_dev)
        return mean

    def uniform(self, lo=0.0, hi=1.0):
        return lo

    def integers(self, lo, hi=None):
        return 0 if hi is None else lo


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def world():
    return World(400, 300, regeneration_rate=1.0, max_resources=50)


@pytest.fixture
def state(world, rng):
    return SimulationState(world=world, rng=rng)


@pytest.fixture
def make_organism():
    """Factory for organisms with every gene at `value` unless overridden."""
    def _make(organism_id="organism-test", x=100.0, y=100.0, energy=100.0,
              vx=0.0, vy=0.0, value=0.5, appendages=None, **traits):
        genome = Genome.uniform(value)
        for name, trait_value in traits.items():
            getattr(genome, name).value = trait_value
        if appendages:
            genome.appendages = appendages
        return Organism(organism_id, genome, OrganismState(x=x, y=y, vx=vx, vy=vy, energy=energy))
    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scripted_rng():
    """Factory: scripted_rng(randoms=[...], default=...)."""
    return ScriptedRng
