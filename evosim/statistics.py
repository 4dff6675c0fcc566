# evosim/statistics.py
import time
from collections import deque

import config
from evosim.genome import SCALAR_GENES

AVERAGED_FIELDS = SCALAR_GENES + ("appendage_count", "energy", "age", "fitness")


def average_stats(organisms):
    """Population means of every trait plus energy, age and fitness."""
    sums = dict.fromkeys(AVERAGED_FIELDS, 0.0)
    if not organisms:
        return sums
    for organism in organisms:
        for name in SCALAR_GENES:
            sums[name] += getattr(organism.phenotype, name)
        sums["appendage_count"] += len(organism.phenotype.appendages)
        sums["energy"] += organism.state.energy
        sums["age"] += organism.state.age
        sums["fitness"] += organism.fitness
    count = len(organisms)
    return {name: total / count for name, total in sums.items()}


class StatisticsTracker:
    """
    Samples population size and trait averages every STATS_UPDATE_RATE ticks
    into bounded histories, and summarises the run on request.
    """

    def __init__(self, time_source=time.monotonic):
        self.time_source = time_source
        self.reset()

    def reset(self):
        self.start_time = self.time_source()
        self.population_history = deque(maxlen=config.STATS_HISTORY_LENGTH)
        self.trait_history = deque(maxlen=config.STATS_HISTORY_LENGTH)

    @property
    def run_time(self):
        return int(self.time_source() - self.start_time)

    def record(self, state):
        if state.tick_count % config.STATS_UPDATE_RATE != 0 or not state.organisms:
            return
        self.population_history.append({
            "tick": state.tick_count,
            "count": len(state.organisms),
            "generation": state.generation_count,
        })
        self.trait_history.append({
            "tick": state.tick_count,
            "average_stats": average_stats(state.organisms),
        })

    def summary(self, state, fps=0.0):
        organisms = state.organisms
        return {
            "fps": fps,
            "population_size": len(organisms),
            "current_generation": state.generation_count,
            "max_generation_depth": max((o.generation for o in organisms), default=0),
            "run_time": self.run_time,
            "average_stats": average_stats(organisms),
            "population_history": list(self.population_history),
            "trait_history": list(self.trait_history),
        }
