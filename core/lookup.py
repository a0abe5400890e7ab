# core/lookup.py
import math
from enum import Enum
from typing import Dict, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


def build_token_lookup(enum_cls: Type[E]) -> Dict[str, E]:
    """
    Map the upper-cased Touchstone token of every member of ``enum_cls`` to the member.

    Members expose their token through a ``token`` property.
    """
    return {member.token.upper(): member for member in enum_cls}


def lookup_token(table: Dict[str, E], token: str) -> Optional[E]:
    """Case-insensitive lookup of a Touchstone token; None when unknown."""
    return table.get(token.upper())


def integer_sqrt(value: int) -> Optional[int]:
    """Return n when value == n * n for a non-negative integer n, otherwise None."""
    if value < 0:
        return None
    root = math.isqrt(value)
    return root if root * root == value else None
