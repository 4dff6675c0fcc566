# evosim/state.py
import itertools
from dataclasses import dataclass, field
from typing import List

import numpy as np

import config
from evosim.creatures.organism import Organism
from evosim.mathutils import clamp
from evosim.world import World


@dataclass
class SimulationState:
    """
    Everything one simulation run mutates: population, world, RNG and the
    evolution counters. Subsystems receive it explicitly, so any number of
    independent runs can coexist.
    """
    world: World
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    organisms: List[Organism] = field(default_factory=list)
    mutation_rate: float = config.DEFAULT_MUTATION_RATE
    generation_count: int = 0
    tick_count: int = 0
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_organism_id(self):
        return f"organism-{next(self._ids)}"

    def find_organism(self, organism_id):
        for organism in self.organisms:
            if organism.id == organism_id:
                return organism
        return None

    def set_mutation_rate(self, rate):
        self.mutation_rate = clamp(rate, 0.0, config.MAX_MUTATION_RATE)
