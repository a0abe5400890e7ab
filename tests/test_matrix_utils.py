import numpy as np
import pytest
from core.lookup import integer_sqrt
from utils.matrix import flat_to_square, infer_port_count, square_to_flat


@pytest.mark.parametrize("value, root", [(0, 0), (1, 1), (4, 2), (9, 3), (16, 4), (2, None), (8, None), (-4, None)])
def test_integer_sqrt(value, root):
    assert integer_sqrt(value) == root


@pytest.mark.parametrize("count", [0, 2, 3, 5])
def test_infer_port_count_rejects_non_square(count):
    with pytest.raises(ValueError):
        infer_port_count(count)


def test_flat_to_square_orders():
    values = [1, 2, 3, 4]
    np.testing.assert_array_equal(flat_to_square(values), [[1, 2], [3, 4]])
    np.testing.assert_array_equal(flat_to_square(values, destination_fastest=True), [[1, 3], [2, 4]])


@pytest.mark.parametrize("destination_fastest", [False, True])
def test_square_to_flat_inverts(destination_fastest):
    values = np.arange(9) + 1j
    M = flat_to_square(values, destination_fastest)
    np.testing.assert_array_equal(square_to_flat(M, destination_fastest), values)


def test_square_to_flat_rejects_non_square():
    with pytest.raises(ValueError):
        square_to_flat(np.zeros((2, 3)))
