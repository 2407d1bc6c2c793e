"""
Parameter Encoding Module

Maps binary genotypes onto real-valued phenotype parameters.

The bit string is split into equal slices, one per parameter. Each slice is
read as an unsigned integer ``raw`` and mapped into the domain with

    value = raw * domain_width / (2 ** bit_length - 1) - domain_offset

so all zero bits give ``-domain_offset`` and all one bits give
``domain_width - domain_offset``.
"""

from typing import List, Sequence

from ga_constants import LandscapeConstants
from ga_exceptions import ParameterEncodingError


class BinaryDomainEncoder:
    """
    Encodes and decodes fixed-arity real parameters as binary slices.
    """

    def __init__(self, arity: int = LandscapeConstants.ARITY,
                 domain_width: float = LandscapeConstants.DOMAIN_WIDTH,
                 domain_offset: float = LandscapeConstants.DOMAIN_OFFSET):
        """
        Initialize encoder.

        Args:
            arity: Number of parameters packed into a genotype
            domain_width: Width of the real-valued domain
            domain_offset: Subtracted after scaling; the domain is
                [-domain_offset, domain_width - domain_offset]
        """
        if arity < 1:
            raise ParameterEncodingError(f"Arity ({arity}) must be at least 1")
        if domain_width <= 0:
            raise ParameterEncodingError(f"Domain width ({domain_width}) must be positive")

        self.arity = arity
        self.domain_width = float(domain_width)
        self.domain_offset = float(domain_offset)

    @property
    def domain(self) -> tuple:
        return (-self.domain_offset, self.domain_width - self.domain_offset)

    def split(self, bit_string: str) -> List[str]:
        """
        Split a bit string into ``arity`` equal slices.

        Raises:
            ParameterEncodingError: If the string is empty, contains other
                characters than '0'/'1', or does not divide evenly
        """
        if not bit_string:
            raise ParameterEncodingError("Cannot decode an empty bit string",
                                         bit_string=bit_string, encoding_type='binary')
        if len(bit_string) % self.arity != 0:
            raise ParameterEncodingError(
                f"Bit string length {len(bit_string)} is not divisible by arity {self.arity}",
                bit_string=bit_string, encoding_type='binary')
        if any(bit not in '01' for bit in bit_string):
            raise ParameterEncodingError(f"Invalid bit string: {bit_string!r}",
                                         bit_string=bit_string, encoding_type='binary')

        bit_length = len(bit_string) // self.arity
        return [bit_string[i * bit_length:(i + 1) * bit_length] for i in range(self.arity)]

    def decode_value(self, raw: int, bit_length: int) -> float:
        """Map an unsigned integer of ``bit_length`` bits into the domain."""
        max_raw = 2 ** bit_length - 1
        if not 0 <= raw <= max_raw:
            raise ParameterEncodingError(f"Raw value {raw} does not fit in {bit_length} bits")
        return (raw * self.domain_width / max_raw) - self.domain_offset

    def decode(self, bit_string: str) -> List[float]:
        """Decode a full genotype bit string into ``arity`` real values."""
        slices = self.split(bit_string)
        return [self.decode_value(int(bits, 2), len(bits)) for bits in slices]

    def encode_value(self, value: float, bit_length: int) -> int:
        """Return the raw integer whose decoded value is nearest to ``value``."""
        max_raw = 2 ** bit_length - 1
        low, high = self.domain
        clamped = min(max(value, low), high)
        raw = round((clamped + self.domain_offset) * max_raw / self.domain_width)
        return min(max(raw, 0), max_raw)

    def encode(self, values: Sequence[float], bit_length: int) -> str:
        """Encode ``arity`` real values into a bit string of ``arity * bit_length`` bits."""
        if len(values) != self.arity:
            raise ParameterEncodingError(f"Expected {self.arity} values, got {len(values)}")
        if bit_length < 1:
            raise ParameterEncodingError(f"Bit length ({bit_length}) must be at least 1")
        return ''.join(format(self.encode_value(value, bit_length), f'0{bit_length}b')
                       for value in values)

    def get_statistics(self) -> dict:
        low, high = self.domain
        return {
            'arity': self.arity,
            'domain_low': low,
            'domain_high': high,
        }
