"""
Tests for the bounds-checked 2D grid.
"""

import numpy as np
import pytest
from invlens.simulation.grid import Grid2D

def test_linear_storage_is_x_fastest():
    """Linear index k maps to (k % nx, k // nx)."""
    grid = Grid2D(np.zeros((200, 200)))

    assert grid.coords(0) == (0, 0)
    assert grid.coords(1) == (1, 0)
    assert grid.coords(50) == (50, 0)
    assert grid.coords(403) == (3, 2)
    assert grid.linear_index(3, 2) == 403

def test_coordinate_and_linear_access_agree():
    """Writes through one accessor are visible through the other and in the raw array."""
    grid = Grid2D(np.zeros((4, 6)))

    grid[2, 3] = 1.5
    grid.set_linear(7, -2.0)

    assert grid.get_linear(2 + 3 * 6) == 1.5
    assert grid[1, 1] == -2.0
    assert grid.data[3, 2] == 1.5
    assert grid.data.ravel()[7] == -2.0

@pytest.mark.parametrize("xy", [(-1, 0), (0, -1), (6, 0), (0, 4)])
def test_out_of_bounds_cells_raise(xy):
    """Coordinates outside the grid raise IndexError instead of wrapping."""
    grid = Grid2D(np.zeros((4, 6)))
    with pytest.raises(IndexError):
        grid[xy]
    with pytest.raises(IndexError):
        grid[xy] = 1.0

def test_out_of_bounds_linear_index_raises():
    grid = Grid2D(np.zeros((4, 6)))
    with pytest.raises(IndexError):
        grid.get_linear(24)
    with pytest.raises(IndexError):
        grid.coords(-1)

def test_rejects_non_2d_arrays():
    with pytest.raises(ValueError):
        Grid2D(np.zeros(10))
