# evosim/simulation.py
import logging
import math
import time

import numpy as np

import config
from evosim.creatures.organism import Organism, OrganismState
from evosim.errors import SimulationError
from evosim.evolution import apply_selection
from evosim.genome import random_genome
from evosim.mathutils import clamp, uniform
from evosim.scheduler import TickScheduler
from evosim.state import SimulationState
from evosim.statistics import StatisticsTracker
from evosim.world import World

logger = logging.getLogger(__name__)


def create_initial_population(state, count):
    """Random genomes at random positions, cruising in a random heading."""
    rng = state.rng
    world = state.world
    for _ in range(count):
        organism = Organism(
            state.next_organism_id(),
            random_genome(rng),
            OrganismState(x=uniform(rng, 0, world.width), y=uniform(rng, 0, world.height)),
        )
        organism.set_heading(uniform(rng, 0, 2 * math.pi), organism.cruise_speed)
        world.handle_boundaries(organism.state, organism.radius)
        state.organisms.append(organism)
    return state.organisms


def update_organisms(state, delta_time):
    """
    Updates every organism in order. A failure in one organism is logged and
    the rest of the batch still runs.
    """
    for organism in state.organisms:
        try:
            organism.update(state.world, delta_time, state.rng)
        except Exception:
            logger.exception("Update failed for organism %s, skipping", organism.id)


def cull_dead(state):
    """Drops starved organisms once the whole batch has been updated."""
    before = len(state.organisms)
    state.organisms = [o for o in state.organisms if o.is_alive()]
    removed = before - len(state.organisms)
    if removed:
        logger.debug("%d organisms starved", removed)
    return removed


def step_state(state, delta_time):
    """One tick: resources, organisms, deaths, then selection."""
    state.world.regenerate(delta_time, state.rng)
    update_organisms(state, delta_time)
    cull_dead(state)
    offspring = apply_selection(state)
    state.tick_count += 1
    return offspring


class Simulation:
    def __init__(self, width=config.SCREEN_WIDTH, height=config.SCREEN_HEIGHT,
                 population_size=config.DEFAULT_POPULATION_SIZE,
                 mutation_rate=config.DEFAULT_MUTATION_RATE,
                 resource_regeneration_rate=config.RESOURCE_REGENERATION_RATE,
                 max_resources=config.MAX_RESOURCES,
                 seed=None, clock=None, time_source=time.monotonic):
        self.width = width
        self.height = height
        self.population_size = 0
        self.set_population_size(population_size)
        self.mutation_rate = clamp(mutation_rate, 0.0, config.MAX_MUTATION_RATE)
        self.resource_regeneration_rate = resource_regeneration_rate
        self.max_resources = max_resources
        self.environmental_pressure = 0.0
        self.seed = seed

        self.state = None
        self.listeners = []
        self.scheduler = TickScheduler(self.step, clock=clock)
        self.statistics = StatisticsTracker(time_source)

    # ---------- lifecycle ----------
    def initialize(self):
        """Builds a fresh world and population. Returns False on failure."""
        try:
            self.scheduler.stop()
            world = World(
                self.width, self.height,
                regeneration_rate=self.resource_regeneration_rate,
                max_resources=self.max_resources,
            )
            world.pressure = self.environmental_pressure
            state = SimulationState(
                world=world,
                rng=np.random.default_rng(self.seed),
                mutation_rate=self.mutation_rate,
            )
            world.fill(int(world.max_resources * config.INITIAL_RESOURCE_RATIO), state.rng)
            create_initial_population(state, self.population_size)
        except Exception:
            logger.exception("Failed to initialize simulation")
            return False

        self.state = state
        self.statistics.reset()
        logger.info("Simulation initialized: %dx%d world, %d organisms, %d resources",
                    self.width, self.height, len(state.organisms), len(state.world.resources))
        return True

    def start(self, speed=config.DEFAULT_SPEED):
        if self.state is None and not self.initialize():
            logger.error("Cannot start: simulation failed to initialize")
            return
        self.scheduler.start(speed)

    def stop(self):
        self.scheduler.stop()

    def reset(self):
        self.stop()
        ok = self.initialize()
        logger.info("Simulation reset")
        return ok

    @property
    def is_running(self):
        return self.scheduler.is_running

    def run(self, max_frames=None):
        """Runs the frame loop until stopped (e.g. by a listener)."""
        return self.scheduler.run(max_frames)

    def add_listener(self, callback):
        """`callback(simulation)` runs after every tick."""
        self.listeners.append(callback)

    def step(self, delta_time):
        if self.state is None:
            raise SimulationError("Simulation has not been initialized")
        step_state(self.state, delta_time)
        self.statistics.record(self.state)
        for listener in list(self.listeners):
            listener(self)

    # ---------- controls ----------
    def set_speed(self, speed):
        return self.scheduler.set_speed(speed)

    def set_mutation_rate(self, rate):
        self.mutation_rate = clamp(rate, 0.0, config.MAX_MUTATION_RATE)
        if self.state is not None:
            self.state.set_mutation_rate(self.mutation_rate)
        logger.info("Mutation rate set to %.3f", self.mutation_rate)
        return self.mutation_rate

    def set_environmental_pressure(self, pressure):
        self.environmental_pressure = clamp(pressure, 0.0, 1.0)
        if self.state is not None:
            self.state.world.set_pressure(self.environmental_pressure)
        return self.environmental_pressure

    def set_population_size(self, size):
        """Applied on the next reset."""
        self.population_size = int(clamp(size, config.MIN_POPULATION_SIZE, config.MAX_POPULATION_SIZE))
        return self.population_size

    # ---------- read-only views ----------
    def get_environment(self):
        if self.state is None:
            return None
        return self.state.world.snapshot()

    def get_all_organisms(self):
        if self.state is None:
            return []
        return [organism.snapshot() for organism in self.state.organisms]

    def get_organism(self, organism_id):
        if self.state is None:
            return None
        organism = self.state.find_organism(organism_id)
        return organism.snapshot() if organism is not None else None

    def get_statistics(self):
        if self.state is None:
            return None
        return self.statistics.summary(self.state, fps=self.scheduler.fps)
