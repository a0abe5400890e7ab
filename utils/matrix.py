# utils/matrix.py
from typing import Sequence

import numpy as np

from core.lookup import integer_sqrt


def infer_port_count(count: int) -> int:
    """Port count N of a flat list holding N*N parameters."""
    ports = integer_sqrt(count)
    if ports is None or ports == 0:
        raise ValueError(f"{count} parameters do not form a square matrix")
    return ports


def flat_to_square(values: Sequence[complex], destination_fastest: bool = False) -> np.ndarray:
    """
    Arrange a flat parameter list into an N x N complex array indexed [dest, source].

    By default the source index varies fastest (S11 S12 S21 S22). With
    ``destination_fastest`` the destination index varies fastest (S11 S21 S12 S22).
    """
    N = infer_port_count(len(values))
    M = np.asarray(values, dtype=np.complex128).reshape(N, N)
    return M.T.copy() if destination_fastest else M


def square_to_flat(M: np.ndarray, destination_fastest: bool = False) -> np.ndarray:
    """Inverse of :func:`flat_to_square`."""
    M = np.asarray(M)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {M.shape}")
    return (M.T if destination_fastest else M).reshape(-1)
