# core/keywords.py
"""
Bracketed keyword lines of Touchstone 2.0 files.

``KEYWORD_TABLE`` maps each known keyword name (lower-cased) to the function
that parses its value and the ``TouchstoneKeywords`` field that receives it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from core.lookup import build_token_lookup, lookup_token


class TwoPortDataOrder(Enum):
    ONE_TWO_TWO_ONE = "12_21"
    TWO_ONE_ONE_TWO = "21_12"

    @property
    def token(self) -> str:
        return self.value


class MatrixFormat(Enum):
    FULL = "Full"
    LOWER = "Lower"
    UPPER = "Upper"

    @property
    def token(self) -> str:
        return self.value


REFERENCE_KEYWORD = "Reference"


@dataclass
class TouchstoneKeywords:
    version: Optional[float] = None
    number_of_ports: Optional[int] = None
    two_port_data_order: Optional[TwoPortDataOrder] = None
    number_of_frequencies: Optional[int] = None
    number_of_noise_frequencies: Optional[int] = None
    matrix_format: Optional[MatrixFormat] = None
    reference: Optional[List[float]] = None


def _enum_parser(enum_cls: Type[Enum]) -> Callable[[str], Any]:
    table = build_token_lookup(enum_cls)

    def parse(value: str):
        member = lookup_token(table, value)
        if member is None:
            raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}")
        return member
    return parse


def _parse_float_list(value: str) -> List[float]:
    return [float(v) for v in value.split()]


KEYWORD_TABLE: Dict[str, Tuple[Callable[[str], Any], str]] = {
    "version": (float, "version"),
    "number of ports": (int, "number_of_ports"),
    "two-port data order": (_enum_parser(TwoPortDataOrder), "two_port_data_order"),
    "number of frequencies": (int, "number_of_frequencies"),
    "number of noise frequencies": (int, "number_of_noise_frequencies"),
    "matrix format": (_enum_parser(MatrixFormat), "matrix_format"),
    REFERENCE_KEYWORD.lower(): (_parse_float_list, "reference"),
}


def lookup_keyword(name: str) -> Optional[Tuple[Callable[[str], Any], str]]:
    return KEYWORD_TABLE.get(name.strip().lower())
