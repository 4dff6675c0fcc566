# evosim/creatures/organism.py
import math
from dataclasses import dataclass
from typing import Optional

import config
from evosim.genome import Genome, Phenotype, express
from evosim.mathutils import angle, angle_difference, clamp, magnitude, map_range, uniform


@dataclass
class OrganismState:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    energy: float = config.DEFAULT_ENERGY
    age: float = 0.0

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def velocity(self):
        return (self.vx, self.vy)

    @property
    def heading(self):
        return math.atan2(self.vy, self.vx)

    def copy(self):
        return OrganismState(self.x, self.y, self.vx, self.vy, self.energy, self.age)


@dataclass(frozen=True)
class OrganismSnapshot:
    """Read-only copy of an organism at a tick boundary."""
    id: str
    genome: Genome
    phenotype: Phenotype
    state: OrganismState
    generation: int
    parent_id: Optional[str]
    fitness: float
    radius: float


class Organism:
    def __init__(self, organism_id, genome, state=None, generation=0, parent_id=None):
        self.id = organism_id
        self.genome = genome
        self.phenotype = express(genome)
        self.state = state if state is not None else OrganismState()
        self.state.energy = max(0.0, self.state.energy)
        self.generation = generation
        self.parent_id = parent_id
        self.fitness = 0.0

    # ---------- derived traits ----------
    @property
    def radius(self):
        return map_range(self.phenotype.body_size, 0.0, 1.0, config.MIN_SIZE, config.MAX_SIZE)

    @property
    def sense_radius(self):
        return self.phenotype.sensor_range * config.SENSOR_RANGE_SCALE

    @property
    def cruise_speed(self):
        return self.phenotype.speed * config.SPEED_SCALE

    @property
    def max_turn_rate(self):
        return self.phenotype.turn_rate * config.TURN_RATE_SCALE

    @property
    def energy(self):
        return self.state.energy

    def is_alive(self):
        return self.state.energy > 0

    def set_heading(self, heading, speed):
        self.state.vx = math.cos(heading) * speed
        self.state.vy = math.sin(heading) * speed

    # ---------- per-tick steps ----------
    def metabolize(self, delta_time):
        """Baseline metabolism, movement cost and size upkeep, floored at 0."""
        speed = magnitude(self.state.vx, self.state.vy)
        cost = (
            self.phenotype.metabolism * config.MOVEMENT_ENERGY_COST * delta_time
            + speed * config.MOVEMENT_ENERGY_COST * delta_time
            + self.phenotype.body_size * config.SIZE_UPKEEP_COST * delta_time
        )
        self.state.energy = max(0.0, self.state.energy - cost)

    def sense(self, world):
        """Nearest resource inside the sensor radius, or None."""
        return world.nearest_resource(self.state.x, self.state.y, self.sense_radius)

    def steer(self, world, delta_time, rng):
        """
        Seeks the nearest sensed resource, turning at most max_turn_rate * dt
        radians, or wanders when nothing is in range. Returns the target.
        """
        target = self.sense(world)
        max_turn = self.max_turn_rate * delta_time
        heading = self.state.heading

        if target is not None:
            desired = angle(self.state.position, target.position)
            turn = clamp(angle_difference(heading, desired), -max_turn, max_turn)
            self.set_heading(heading + turn, self.cruise_speed)
        else:
            turn = uniform(rng, -config.WANDER_TURN_FRACTION, config.WANDER_TURN_FRACTION) * max_turn
            speed = uniform(rng, config.WANDER_MIN_SPEED_FRACTION, 1.0) * self.cruise_speed
            self.set_heading(heading + turn, speed)
        return target

    def move(self, delta_time):
        self.state.x += self.state.vx * delta_time
        self.state.y += self.state.vy * delta_time

    def forage(self, world):
        """Eats every resource within the body radius. Returns energy gained."""
        gained = 0.0
        for resource in world.resources_near(self.state.x, self.state.y, self.radius):
            self.state.energy += resource.value
            gained += resource.value
            world.remove_resource(resource)
        self.state.energy = max(0.0, self.state.energy)
        return gained

    def update(self, world, delta_time, rng):
        self.state.age += delta_time
        self.metabolize(delta_time)
        self.steer(world, delta_time, rng)
        self.move(delta_time)
        world.handle_boundaries(self.state, self.radius)
        self.forage(world)

    def snapshot(self):
        return OrganismSnapshot(
            id=self.id,
            genome=self.genome.copy(),
            phenotype=self.phenotype,
            state=self.state.copy(),
            generation=self.generation,
            parent_id=self.parent_id,
            fitness=self.fitness,
            radius=self.radius,
        )
