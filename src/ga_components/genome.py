"""
Genome Module

Binary genes and the individuals built from them.

Features:
- Immutable binary genes with a stable identity
- Random and empty individual construction
- Bit string rendering of the genotype
- Explicit genotype comparison separate from identity equality
"""

import random
import uuid
from typing import Iterable, List, Optional

from ga_constants import GAConstants, DEFAULT_FITNESS
from ga_exceptions import InvalidArgument


class Gene:
    """A single binary value with a stable unique identity."""

    __slots__ = ('_id', '_value')

    def __init__(self, value: int):
        if isinstance(value, bool) or value not in GAConstants.BINARY_VALUES:
            raise InvalidArgument(f"Gene value must be 0 or 1, got {value!r}")
        self._id = uuid.uuid4()
        self._value = int(value)

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def value(self) -> int:
        return self._value

    def flipped(self) -> "Gene":
        """Return a new gene holding the opposite value."""
        return Gene(1 - self._value)

    def copy(self) -> "Gene":
        """Return a new gene holding the same value."""
        return Gene(self._value)

    def __repr__(self) -> str:
        return f"Gene({self._value})"


class Individual:
    """
    An ordered sequence of binary genes with a cached fitness and an elite flag.

    Equality and hashing follow identity (the ``id``); use
    :meth:`same_genotype` to compare gene values.
    """

    def __init__(self, gene_count: Optional[int] = None, rng: random.Random = None):
        """
        Create an individual.

        Args:
            gene_count: Number of genes to draw at random. Must be even and at
                least 2. ``None`` creates an empty individual to be filled by
                crossover.
            rng: Random source for the gene draws (module ``random`` if None)
        """
        self.id = uuid.uuid4()
        self.fitness = DEFAULT_FITNESS
        self.is_elite = False
        self._genes: List[Gene] = []

        if gene_count is None:
            return

        validate_gene_count(gene_count)
        rng = rng or random
        self._genes = [Gene(rng.randint(0, 1)) for _ in range(gene_count)]

    @classmethod
    def from_genes(cls, genes: Iterable[Gene]) -> "Individual":
        individual = cls()
        for gene in genes:
            individual.append_gene(gene)
        return individual

    @classmethod
    def from_bit_string(cls, bits: str) -> "Individual":
        """Build an individual from a string of '0'/'1' characters."""
        if any(bit not in '01' for bit in bits):
            raise InvalidArgument(f"Bit string may only contain '0' and '1': {bits!r}")
        validate_gene_count(len(bits))
        return cls.from_genes(Gene(int(bit)) for bit in bits)

    @property
    def genes(self) -> List[Gene]:
        return self._genes

    @property
    def gene_count(self) -> int:
        return len(self._genes)

    @property
    def bit_string(self) -> str:
        """Gene values in order as a '0'/'1' string (empty for an empty individual)."""
        return ''.join(str(gene.value) for gene in self._genes)

    def append_gene(self, gene: Gene):
        if not isinstance(gene, Gene):
            raise InvalidArgument(f"Expected Gene, got {type(gene).__name__}")
        self._genes.append(gene)

    def replace_gene(self, index: int, gene: Gene):
        self._genes[index] = gene

    def same_genotype(self, other: "Individual") -> bool:
        """True when both individuals carry the same gene values in the same order."""
        return self.bit_string == other.bit_string

    def clone(self) -> "Individual":
        """Copy genes by value into a new individual with a new identity."""
        twin = Individual.from_genes(gene.copy() for gene in self._genes)
        twin.fitness = self.fitness
        twin.is_elite = self.is_elite
        return twin

    @property
    def short_id(self) -> str:
        return self.id.hex[:8]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __len__(self) -> int:
        return len(self._genes)

    def __repr__(self) -> str:
        return (f"Individual(id={self.short_id}, genes={self.bit_string}, "
                f"fitness={self.fitness:.6f}, elite={self.is_elite})")


def validate_gene_count(gene_count: int) -> int:
    """Raise InvalidArgument unless gene_count is an even integer >= 2."""
    if isinstance(gene_count, bool) or not isinstance(gene_count, int):
        raise InvalidArgument(f"Gene count must be an integer, got {gene_count!r}")
    if gene_count < GAConstants.MIN_GENE_COUNT:
        raise InvalidArgument(f"Gene count ({gene_count}) must be at least {GAConstants.MIN_GENE_COUNT}")
    if gene_count % 2 != 0:
        raise InvalidArgument(f"Gene count ({gene_count}) must be even")
    return gene_count
