# core/scattering.py
from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Sequence, Tuple

import numpy as np

from utils.matrix import flat_to_square, square_to_flat


@dataclass(frozen=True, slots=True)
class ScatteringParameter:
    """
    A single complex network parameter.

    Angles are in degrees, as used by the Touchstone MA and DB formats.
    """
    real: float
    imaginary: float

    @classmethod
    def from_real_imaginary(cls, real: float, imaginary: float) -> ScatteringParameter:
        return cls(float(real), float(imaginary))

    @classmethod
    def from_magnitude_angle(cls, magnitude: float, angle: float) -> ScatteringParameter:
        value = cmath.rect(magnitude, math.radians(angle))
        return cls(value.real, value.imag)

    @classmethod
    def from_decibel_angle(cls, magnitude_db: float, angle: float) -> ScatteringParameter:
        return cls.from_magnitude_angle(10 ** (magnitude_db / 20.0), angle)

    @property
    def value(self) -> complex:
        return complex(self.real, self.imaginary)

    @property
    def magnitude(self) -> float:
        return abs(self.value)

    @property
    def magnitude_db(self) -> float:
        # -inf for a zero parameter
        mag = self.magnitude
        return 20.0 * math.log10(mag) if mag > 0 else float("-inf")

    @property
    def angle(self) -> float:
        return math.degrees(cmath.phase(self.value))

    def __complex__(self) -> complex:
        return self.value


class ListFormat(Enum):
    """
    Order of the flat parameter list on a data line.

    SOURCE_PORT_MAJOR: S11 S12 ... S1N S21 ... (source index varies fastest).
    DESTINATION_PORT_MAJOR: S11 S21 ... SN1 S12 ... (destination index varies fastest).
    """
    SOURCE_PORT_MAJOR = "source"
    DESTINATION_PORT_MAJOR = "destination"


class ScatteringParametersMatrix:
    """
    N x N matrix of network parameters built from one data line.

    Indexing is 1-based and follows the usual Sij convention:
    ``matrix[i, j]`` is the parameter from source port j to destination port i.
    """
    def __init__(self, parameters: Sequence[ScatteringParameter],
                 list_format: ListFormat = ListFormat.SOURCE_PORT_MAJOR):
        values = [complex(p) for p in parameters]
        self._data = flat_to_square(
            values, destination_fastest=list_format is ListFormat.DESTINATION_PORT_MAJOR)
        self._data.setflags(write=False)
        self.list_format = list_format

    @property
    def num_ports(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: Tuple[int, int]) -> ScatteringParameter:
        dest, source = index
        if not (1 <= dest <= self.num_ports and 1 <= source <= self.num_ports):
            raise IndexError(f"Port index {index} out of range for a {self.num_ports}-port matrix")
        value = self._data[dest - 1, source - 1]
        return ScatteringParameter(float(value.real), float(value.imag))

    def __len__(self) -> int:
        return self._data.size

    def __iter__(self) -> Iterator[ScatteringParameter]:
        """Parameters in the order of ``list_format``."""
        flat = square_to_flat(
            self._data, destination_fastest=self.list_format is ListFormat.DESTINATION_PORT_MAJOR)
        for value in flat:
            yield ScatteringParameter(float(value.real), float(value.imag))

    def to_numpy(self) -> np.ndarray:
        """Copy of the matrix as a complex array indexed [dest - 1, source - 1]."""
        return self._data.copy()

    def __eq__(self, other):
        if not isinstance(other, ScatteringParametersMatrix):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __repr__(self):
        return f"<ScatteringParametersMatrix ports={self.num_ports} format={self.list_format.name}>"


class FrequencyParametersPair(NamedTuple):
    frequency: float
    parameters: ScatteringParametersMatrix
