# evosim/evolution.py
import logging
import math

import config
from evosim.creatures.organism import Organism, OrganismState
from evosim.fitness import calculate_fitness
from evosim.mathutils import uniform
from evosim.mutation import mutate_genome

logger = logging.getLogger(__name__)


def can_reproduce(organism):
    return organism.state.energy >= config.REPRODUCTION_ENERGY_THRESHOLD


def reproduce_organism(state, parent_id):
    """
    Splits a qualifying parent into itself plus one mutated offspring.

    The parent keeps its id and survives with (1 - ENERGY_TRANSFER_RATIO) of
    its energy; the offspring receives the rest. Returns the offspring, or
    None when the parent is unknown, too weak, or the population is capped.
    """
    parent = state.find_organism(parent_id)
    if parent is None:
        logger.warning("Cannot reproduce: parent %s not found", parent_id)
        return None
    if not can_reproduce(parent):
        return None
    if len(state.organisms) >= config.POPULATION_CAP:
        logger.debug("Population cap %d reached, %s cannot reproduce", config.POPULATION_CAP, parent_id)
        return None

    rng = state.rng
    genome = mutate_genome(parent.genome, state.mutation_rate, rng)
    parent_energy = parent.state.energy

    # Spawn on a ring around the parent, carrying most of its momentum
    spawn_angle = uniform(rng, 0, 2 * math.pi)
    spawn_dist = config.OFFSPRING_SPAWN_DISTANCE + uniform(
        rng, -config.OFFSPRING_SPAWN_JITTER, config.OFFSPRING_SPAWN_JITTER)
    jitter = config.OFFSPRING_VELOCITY_JITTER
    child_state = OrganismState(
        x=parent.state.x + spawn_dist * math.cos(spawn_angle),
        y=parent.state.y + spawn_dist * math.sin(spawn_angle),
        vx=parent.state.vx * config.OFFSPRING_VELOCITY_DAMPING + uniform(rng, -jitter, jitter),
        vy=parent.state.vy * config.OFFSPRING_VELOCITY_DAMPING + uniform(rng, -jitter, jitter),
        energy=parent_energy * config.ENERGY_TRANSFER_RATIO,
    )
    child = Organism(
        state.next_organism_id(), genome, child_state,
        generation=parent.generation + 1, parent_id=parent.id,
    )
    state.world.handle_boundaries(child.state, child.radius)

    parent.state.energy = parent_energy * (1 - config.ENERGY_TRANSFER_RATIO)
    state.organisms.append(child)
    state.generation_count += 1
    logger.debug("%s reproduced -> %s (generation %d)", parent.id, child.id, child.generation)
    return child


def apply_selection(state):
    """
    Scores every organism and lets each one at or above the energy threshold
    reproduce once. Offspring born this tick are not considered until the
    next tick. Returns the list of offspring.
    """
    density = state.world.resource_density
    offspring = []
    for organism in list(state.organisms):
        try:
            organism.fitness = calculate_fitness(organism, density)
            if can_reproduce(organism):
                child = reproduce_organism(state, organism.id)
                if child is not None:
                    offspring.append(child)
        except Exception:
            logger.exception("Selection failed for organism %s, skipping", organism.id)
    return offspring
