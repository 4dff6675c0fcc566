# evosim/mutation.py
import logging

import config
from evosim.genome import APPENDAGE_GENES, random_appendage
from evosim.mathutils import chance, clamp, gaussian

logger = logging.getLogger(__name__)


def _perturb(gene, sigma, rng):
    gene.value = clamp(gene.value + gaussian(rng, 0.0, sigma), 0.0, 1.0)


def _maybe_perturb(gene, mutation_rate, sigma, rng):
    if chance(rng, gene.mutation_rate * mutation_rate):
        _perturb(gene, sigma, rng)


def mutate_genome(genome, mutation_rate, rng):
    """
    Returns a mutated copy of `genome`; the input is left untouched.

    Each gene fires with probability gene.mutation_rate * mutation_rate and
    receives a zero-mean gaussian nudge. Once per call a rare "jump" is rolled
    which widens every sigma and raises the structural mutation odds.
    """
    mutated = genome.copy()
    m = mutation_rate
    jump = chance(rng, config.JUMP_MUTATION_CHANCE * m)

    sigma = config.SIGMA_JUMP if jump else config.SIGMA_NORMAL
    for _, gene in mutated.scalar_genes():
        _maybe_perturb(gene, m, sigma, rng)

    appendage_sigma = config.APPENDAGE_SIGMA_JUMP if jump else config.SIGMA_NORMAL
    flip_chance = config.TYPE_FLIP_CHANCE_JUMP if jump else config.TYPE_FLIP_CHANCE
    for appendage in mutated.appendages:
        for name in APPENDAGE_GENES:
            _maybe_perturb(getattr(appendage, name), m, appendage_sigma, rng)

        if chance(rng, m * flip_chance):
            appendage.type = appendage.type.flipped()

        # Specialization: a large change in length, only during a jump
        if jump and chance(rng, m * config.SPECIALIZATION_CHANCE):
            _perturb(appendage.length, config.SPECIALIZATION_SIGMA, rng)

    add_chance = config.ADD_APPENDAGE_CHANCE_JUMP if jump else config.ADD_APPENDAGE_CHANCE
    if len(mutated.appendages) < config.MAX_APPENDAGES and chance(rng, m * add_chance):
        mutated.appendages.append(random_appendage(rng))

    remove_chance = config.REMOVE_APPENDAGE_CHANCE_JUMP if jump else config.REMOVE_APPENDAGE_CHANCE
    if mutated.appendages and chance(rng, m * remove_chance):
        index = int(rng.integers(len(mutated.appendages)))
        mutated.appendages.pop(index)

    if jump:
        logger.debug("Jump mutation: %d appendages after mutation", len(mutated.appendages))
    return mutated
