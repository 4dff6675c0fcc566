# evosim/fitness.py
"""
Composite fitness score.

Fitness is informational: reproduction is triggered by the energy threshold
alone. Each component is normalised to roughly [0, 1] and weighted; a
component that cannot be computed (missing or non-finite trait) scores
NEUTRAL_SCORE instead of failing the whole tick.
"""
import logging
import math

import config
from evosim.genome import AppendageType

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5

WEIGHTS = {
    "energy": 0.35,
    "metabolism": 0.15,
    "sensor": 0.1,
    "movement": 0.15,
    "age": 0.1,
    "appendages": 0.05,
    "environment": 0.1,
}

HIGH_DENSITY = 0.7
LOW_DENSITY = 0.3
MATURE_AGE = 100.0
APPENDAGE_DRAG_FREE = 2
APPENDAGE_DRAG_PENALTY = 0.2


def _trait(phenotype, name):
    value = getattr(phenotype, name)
    if value is None or not math.isfinite(value):
        raise ValueError(f"Trait {name} is {value!r}")
    return value


def energy_score(organism):
    return organism.state.energy / config.REPRODUCTION_ENERGY_THRESHOLD


def metabolism_score(organism):
    return 1 - _trait(organism.phenotype, "metabolism")


def sensor_score(organism):
    return _trait(organism.phenotype, "sensor_range")


def movement_score(organism):
    p = organism.phenotype
    return _trait(p, "speed") * (1 - _trait(p, "metabolism"))


def age_score(organism):
    return min(1.0, organism.state.age / MATURE_AGE)


def appendage_score(organism):
    """
    Fins pay off with speed, flagella with turn rate. The mean efficiency is
    scaled down by 20% for every appendage beyond the second (drag). With no
    appendages there is nothing to average, so the score is neutral.
    """
    p = organism.phenotype
    appendages = p.appendages
    if not appendages:
        return NEUTRAL_SCORE
    efficiencies = []
    for appendage in appendages:
        if appendage.type is AppendageType.FIN:
            partner = _trait(p, "speed")
        else:
            partner = _trait(p, "turn_rate")
        efficiencies.append((appendage.length + partner) / 2)
    mean = sum(efficiencies) / len(efficiencies)
    drag = max(0.0, 1 - max(0, len(appendages) - APPENDAGE_DRAG_FREE) * APPENDAGE_DRAG_PENALTY)
    return mean * drag


def environment_score(organism, resource_density):
    p = organism.phenotype
    speed = _trait(p, "speed")
    metabolism = _trait(p, "metabolism")
    if resource_density > HIGH_DENSITY:
        # plenty of food: fast, high-burn organisms win the race
        return (speed + metabolism) / 2
    if resource_density < LOW_DENSITY:
        # scarcity: frugal organisms with long sensors
        return ((1 - metabolism) + _trait(p, "sensor_range")) / 2
    return 1 - abs(speed - (1 - metabolism))


def _safe(component, *args):
    try:
        score = component(*args)
    except (AttributeError, TypeError, ValueError, ZeroDivisionError) as exc:
        logger.debug("%s fell back to neutral: %s", component.__name__, exc)
        return NEUTRAL_SCORE
    if score is None or not math.isfinite(score):
        return NEUTRAL_SCORE
    return score


def fitness_components(organism, resource_density=0.5):
    return {
        "energy": _safe(energy_score, organism),
        "metabolism": _safe(metabolism_score, organism),
        "sensor": _safe(sensor_score, organism),
        "movement": _safe(movement_score, organism),
        "age": _safe(age_score, organism),
        "appendages": _safe(appendage_score, organism),
        "environment": _safe(environment_score, organism, resource_density),
    }


def calculate_fitness(organism, resource_density=0.5):
    """Weighted sum of the component scores; 0 for a missing organism."""
    if organism is None:
        return 0.0
    components = fitness_components(organism, resource_density)
    return sum(components[name] * weight for name, weight in WEIGHTS.items())
