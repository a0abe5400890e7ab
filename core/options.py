# core/options.py
"""
Option-line vocabulary of the Touchstone format.

Each enum member carries the token used for it on the ``#`` options line.
Tokens are matched case-insensitively through the lookup tables built at
import time by :func:`core.lookup.build_token_lookup`.
"""
from dataclasses import dataclass
from enum import Enum

from core.lookup import build_token_lookup
from utils.units import to_hz


class FrequencyUnit(Enum):
    HZ = "Hz"
    KHZ = "kHz"
    MHZ = "MHz"
    GHZ = "GHz"

    @property
    def token(self) -> str:
        return self.name

    def to_hz(self, value: float) -> float:
        """Convert a frequency expressed in this unit to hertz."""
        return to_hz(value, self.value)


class ParameterType(Enum):
    S = "Scattering"
    Y = "Admittance"
    Z = "Impedance"
    H = "Hybrid-h"
    G = "Hybrid-g"

    @property
    def token(self) -> str:
        return self.name


class FormatType(Enum):
    DB = "DecibelAngle"
    MA = "MagnitudeAngle"
    RI = "RealImaginary"

    @property
    def token(self) -> str:
        return self.name


RESISTANCE_SIGNIFIER = "R"

FREQUENCY_UNITS = build_token_lookup(FrequencyUnit)
PARAMETER_TYPES = build_token_lookup(ParameterType)
FORMAT_TYPES = build_token_lookup(FormatType)


@dataclass
class TouchstoneOptions:
    """Values of the ``#`` options line, defaulting to ``# GHz S MA R 50``."""
    frequency_unit: FrequencyUnit = FrequencyUnit.GHZ
    parameter: ParameterType = ParameterType.S
    format: FormatType = FormatType.MA
    resistance: float = 50.0

    def to_line(self) -> str:
        return (f"# {self.frequency_unit.token} {self.parameter.token} "
                f"{self.format.token} {RESISTANCE_SIGNIFIER} {self.resistance:g}")
