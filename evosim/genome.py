# evosim/genome.py
"""
Genome and phenotype records.

A genome is a fixed set of scalar genes plus an ordered list of appendage
genes. Every gene value lives in [0, 1]. The phenotype is a read-only
snapshot of those values, rebuilt with `express` whenever a genome is
created; it is never patched in place.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List, Tuple

import config
from blueprints import GENE_BLUEPRINTS, APPENDAGE_BLUEPRINT, INITIAL_APPENDAGES
from evosim.mathutils import clamp, uniform, random_int

SCALAR_GENES = ("body_size", "body_shape", "metabolism", "sensor_range", "speed", "turn_rate")
APPENDAGE_GENES = ("length", "position", "angle")


class AppendageType(Enum):
    FIN = "fin"
    FLAGELLA = "flagella"

    def flipped(self):
        return AppendageType.FLAGELLA if self is AppendageType.FIN else AppendageType.FIN


@dataclass
class Gene:
    value: float
    mutation_rate: float

    def __post_init__(self):
        self.value = clamp(float(self.value), 0.0, 1.0)
        self.mutation_rate = clamp(float(self.mutation_rate), 0.0, 1.0)

    def copy(self):
        return Gene(self.value, self.mutation_rate)


@dataclass
class AppendageGene:
    type: AppendageType
    length: Gene
    position: Gene
    angle: Gene

    def copy(self):
        return AppendageGene(self.type, self.length.copy(), self.position.copy(), self.angle.copy())


@dataclass
class Genome:
    body_size: Gene
    body_shape: Gene
    metabolism: Gene
    sensor_range: Gene
    speed: Gene
    turn_rate: Gene
    appendages: List[AppendageGene] = field(default_factory=list)

    def scalar_genes(self):
        """(name, gene) pairs in declaration order."""
        return [(name, getattr(self, name)) for name in SCALAR_GENES]

    def copy(self):
        """Structural clone; shares no Gene or list objects with self."""
        return Genome(
            **{name: gene.copy() for name, gene in self.scalar_genes()},
            appendages=[a.copy() for a in self.appendages],
        )

    @classmethod
    def uniform(cls, value=0.5, mutation_rate=0.05):
        """A genome with every scalar gene set to the same value and no appendages."""
        return cls(**{name: Gene(value, mutation_rate) for name in SCALAR_GENES})


@dataclass(frozen=True)
class PhenotypeAppendage:
    type: AppendageType
    length: float
    position: float
    angle: float


@dataclass(frozen=True)
class Phenotype:
    body_size: float
    body_shape: float
    metabolism: float
    sensor_range: float
    speed: float
    turn_rate: float
    appendages: Tuple[PhenotypeAppendage, ...] = ()

    def traits(self):
        """Scalar traits as a plain dict, appendages excluded."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "appendages"}


def express(genome):
    """Genotype -> phenotype. Identity mapping on every gene value."""
    return Phenotype(
        **{name: gene.value for name, gene in genome.scalar_genes()},
        appendages=tuple(
            PhenotypeAppendage(a.type, a.length.value, a.position.value, a.angle.value)
            for a in genome.appendages
        ),
    )


def random_appendage(rng):
    """A fresh appendage with sub-gene values drawn from the blueprint ranges."""
    kind = AppendageType.FIN if rng.random() < 0.5 else AppendageType.FLAGELLA
    genes = {}
    for name in APPENDAGE_GENES:
        blueprint = APPENDAGE_BLUEPRINT[name]
        lo, hi = blueprint["initial_range"]
        genes[name] = Gene(uniform(rng, lo, hi), blueprint["mutation_rate"])
    return AppendageGene(type=kind, **genes)


def random_genome(rng, blueprints=None):
    """Random genome for the initial population."""
    blueprints = blueprints or GENE_BLUEPRINTS
    genes = {}
    for name in SCALAR_GENES:
        blueprint = blueprints[name]
        lo, hi = blueprint["initial_range"]
        genes[name] = Gene(uniform(rng, lo, hi), blueprint["mutation_rate"])
    lo, hi = INITIAL_APPENDAGES
    count = min(random_int(rng, lo, hi), config.MAX_APPENDAGES)
    return Genome(**genes, appendages=[random_appendage(rng) for _ in range(count)])
