import numpy as np
import pytest

import config
from evosim.genome import SCALAR_GENES, AppendageGene, AppendageType, Gene, Genome
from evosim.mutation import mutate_genome

M = config.MAX_MUTATION_RATE  # 0.2
MISS = 0.99  # a roll that fails every threshold at M


def _volatile_genome(value=0.5, appendages=0, mutation_rate=1.0):
    """Every gene fires whenever the global rate allows it."""
    genome = Genome.uniform(value, mutation_rate=mutation_rate)
    genome.appendages = [
        AppendageGene(AppendageType.FIN, Gene(0.5, mutation_rate), Gene(0.5, mutation_rate),
                      Gene(0.5, mutation_rate))
        for _ in range(appendages)
    ]
    return genome


def _rolls(jump, appendages=0, flip=MISS, specialize=MISS, add=MISS, remove=None):
    """
    Roll script in the order mutate_genome draws them: jump check, six scalar
    genes, then per appendage three sub-genes, type flip and (jump only)
    specialization, then add, then remove.
    """
    rolls = [0.0 if jump else MISS] + [MISS] * len(SCALAR_GENES)
    for _ in range(appendages):
        rolls += [MISS] * 3 + [flip]
        if jump:
            rolls.append(specialize)
    if appendages < config.MAX_APPENDAGES:
        rolls.append(add)
    if remove is not None:
        rolls.append(remove)
    return rolls


def test_zero_rate_returns_identical_values(rng):
    genome = _volatile_genome(appendages=2)
    mutated = mutate_genome(genome, 0.0, rng)

    assert mutated == genome
    assert mutated is not genome
    assert mutated.appendages[0] is not genome.appendages[0]


def test_input_genome_is_not_modified(rng):
    genome = _volatile_genome(appendages=2)
    before = genome.copy()
    for _ in range(100):
        mutate_genome(genome, M, rng)
    assert genome == before


def test_values_stay_in_unit_range_over_many_generations():
    rng = np.random.default_rng(99)
    genome = _volatile_genome(value=0.95, appendages=3)
    for _ in range(2000):
        genome = mutate_genome(genome, M, rng)
        for name in SCALAR_GENES:
            assert 0.0 <= getattr(genome, name).value <= 1.0
        for appendage in genome.appendages:
            for gene in (appendage.length, appendage.position, appendage.angle):
                assert 0.0 <= gene.value <= 1.0


def test_appendage_count_stays_within_cap():
    rng = np.random.default_rng(7)
    genome = _volatile_genome()
    seen = set()
    for _ in range(3000):
        genome = mutate_genome(genome, M, rng)
        seen.add(len(genome.appendages))
        assert 0 <= len(genome.appendages) <= config.MAX_APPENDAGES
    assert config.MAX_APPENDAGES in seen


def test_no_appendage_added_at_cap(scripted_rng):
    # every roll succeeds: add is skipped at the cap, remove still fires
    rng = scripted_rng(default=0.0)
    genome = _volatile_genome(appendages=config.MAX_APPENDAGES)
    mutated = mutate_genome(genome, M, rng)
    assert len(mutated.appendages) == config.MAX_APPENDAGES - 1


def test_structural_mutations_when_every_roll_fires(scripted_rng):
    rng = scripted_rng(default=0.0)
    genome = _volatile_genome(appendages=1)

    mutated = mutate_genome(genome, M, rng)

    # original appendage was flipped, a fresh FIN appended, then index 0 removed
    assert len(mutated.appendages) == 1
    fresh = mutated.appendages[0]
    assert fresh.type is AppendageType.FIN
    assert fresh.length.value == pytest.approx(0.3)
    assert genome.appendages[0].type is AppendageType.FIN


def test_jump_mutation_uses_wider_sigmas(scripted_rng):
    rng = scripted_rng(default=0.0)
    mutate_genome(_volatile_genome(appendages=1), M, rng)

    # six scalar genes, three appendage genes, one specialization event
    assert rng.sigmas == [config.SIGMA_JUMP] * 6 + [config.APPENDAGE_SIGMA_JUMP] * 3 + [config.SPECIALIZATION_SIGMA]


def test_normal_mutation_uses_small_sigma(scripted_rng):
    # first roll is the jump check and fails
    rng = scripted_rng(randoms=[0.99], default=0.0)
    mutate_genome(_volatile_genome(appendages=1), M, rng)

    assert rng.sigmas == [config.SIGMA_NORMAL] * 9


@pytest.mark.parametrize("roll, is_jump", [
    (0.005, True),   # threshold 0.05 * 0.2 = 0.01
    (0.015, False),
])
def test_jump_odds_scale_with_global_rate(scripted_rng, roll, is_jump):
    # second roll fires the first scalar gene so its sigma reveals the branch
    rng = scripted_rng(randoms=[roll, 0.0], default=MISS)
    mutate_genome(_volatile_genome(), M, rng)
    assert rng.sigmas == [config.SIGMA_JUMP if is_jump else config.SIGMA_NORMAL]


@pytest.mark.parametrize("gene_rate, roll, fires", [
    (0.5, 0.05, True),   # threshold 0.5 * 0.2 = 0.1
    (0.5, 0.15, False),
    (1.0, 0.15, True),   # threshold 1.0 * 0.2 = 0.2
])
def test_gene_odds_multiply_gene_and_global_rate(scripted_rng, gene_rate, roll, fires):
    rng = scripted_rng(randoms=[MISS, roll], default=MISS)
    mutate_genome(_volatile_genome(mutation_rate=gene_rate), M, rng)
    assert rng.sigmas == ([config.SIGMA_NORMAL] if fires else [])


@pytest.mark.parametrize("jump, roll, flipped", [
    (False, 0.01, True),   # threshold 0.2 * 0.1 = 0.02
    (False, 0.04, False),
    (True, 0.04, True),    # threshold 0.2 * 0.3 = 0.06
    (True, 0.07, False),
])
def test_type_flip_odds(scripted_rng, jump, roll, flipped):
    rng = scripted_rng(randoms=_rolls(jump, appendages=1, flip=roll), default=MISS)
    mutated = mutate_genome(_volatile_genome(appendages=1, mutation_rate=0.0), M, rng)
    expected = AppendageType.FLAGELLA if flipped else AppendageType.FIN
    assert mutated.appendages[0].type is expected


@pytest.mark.parametrize("jump, roll, added", [
    (False, 0.03, True),   # threshold 0.2 * 0.2 = 0.04
    (False, 0.05, False),
    (True, 0.05, True),    # threshold 0.2 * 0.4 = 0.08
    (True, 0.09, False),
])
def test_add_appendage_odds(scripted_rng, jump, roll, added):
    rng = scripted_rng(randoms=_rolls(jump, add=roll), default=MISS)
    mutated = mutate_genome(_volatile_genome(mutation_rate=0.0), M, rng)
    assert len(mutated.appendages) == (1 if added else 0)


@pytest.mark.parametrize("jump, roll, removed", [
    (False, 0.015, True),  # threshold 0.2 * 0.1 = 0.02
    (False, 0.025, False),
    (True, 0.025, True),   # threshold 0.2 * 0.15 = 0.03
    (True, 0.035, False),
])
def test_remove_appendage_odds(scripted_rng, jump, roll, removed):
    rng = scripted_rng(randoms=_rolls(jump, appendages=1, remove=roll), default=MISS)
    mutated = mutate_genome(_volatile_genome(appendages=1, mutation_rate=0.0), M, rng)
    assert len(mutated.appendages) == (0 if removed else 1)


@pytest.mark.parametrize("roll, specialized", [
    (0.03, True),   # threshold 0.2 * 0.2 = 0.04
    (0.05, False),
])
def test_specialization_odds_under_jump(scripted_rng, roll, specialized):
    rng = scripted_rng(randoms=_rolls(True, appendages=1, specialize=roll), default=MISS)
    mutate_genome(_volatile_genome(appendages=1, mutation_rate=0.0), M, rng)
    assert rng.sigmas == ([config.SPECIALIZATION_SIGMA] if specialized else [])


def test_no_specialization_roll_without_jump(scripted_rng):
    # with every later roll passing, a normal mutation still never specializes
    rng = scripted_rng(randoms=[MISS], default=0.0)
    mutate_genome(_volatile_genome(appendages=1, mutation_rate=0.0), M, rng)
    assert config.SPECIALIZATION_SIGMA not in rng.sigmas
