# blueprints.py
# This file contains the "genetic blueprints" used to seed new genomes.
# "initial_range" bounds the starting value drawn for the initial population,
# "mutation_rate" is the gene's own volatility (scaled by the global rate).

GENE_BLUEPRINTS = {
    "body_size": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.03,
    },
    "body_shape": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.02,
    },
    "metabolism": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.03,
    },
    "sensor_range": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.02,
    },
    "speed": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.03,
    },
    "turn_rate": {
        "initial_range": (0.3, 0.7),
        "mutation_rate": 0.02,
    },
}

# New appendages start inside these ranges rather than the full [0, 1].
APPENDAGE_BLUEPRINT = {
    "length": {
        "initial_range": (0.3, 0.8),
        "mutation_rate": 0.05,
    },
    "position": {
        "initial_range": (0.2, 0.8),
        "mutation_rate": 0.02,
    },
    "angle": {
        "initial_range": (0.2, 0.8),
        "mutation_rate": 0.04,
    },
}

# Initial population appendage count, inclusive.
INITIAL_APPENDAGES = (0, 2)
