from typing import Tuple


class Grid2D:
    """Square grid of scalars addressed by (x, y) cell coordinates.

    The underlying array has shape (ny, nx) and is indexed [y, x], so the
    linear storage index of (x, y) is x + y * nx. Both coordinate and linear
    accessors are bounds-checked.
    """
    def __init__(self, data):
        if len(data.shape) != 2:
            raise ValueError(f"Grid2D needs a 2D array, got shape {tuple(data.shape)}")
        self.data = data
        self.ny, self.nx = (int(n) for n in data.shape)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.ny, self.nx)

    @property
    def size(self) -> int:
        return self.nx * self.ny

    def _check(self, x: int, y: int):
        if not (0 <= x < self.nx and 0 <= y < self.ny):
            raise IndexError(f"cell ({x}, {y}) is outside the {self.nx}x{self.ny} grid")

    def linear_index(self, x: int, y: int) -> int:
        """Linear storage index of cell (x, y)."""
        self._check(x, y)
        return x + y * self.nx

    def coords(self, index: int) -> Tuple[int, int]:
        """(x, y) of a linear storage index."""
        if not 0 <= index < self.size:
            raise IndexError(f"linear index {index} is outside storage of size {self.size}")
        return index % self.nx, index // self.nx

    def get_linear(self, index: int) -> float:
        x, y = self.coords(index)
        return float(self.data[y, x])

    def set_linear(self, index: int, value: float) -> None:
        x, y = self.coords(index)
        self.data[y, x] = value

    def __getitem__(self, xy: Tuple[int, int]) -> float:
        x, y = xy
        self._check(x, y)
        return float(self.data[y, x])

    def __setitem__(self, xy: Tuple[int, int], value: float) -> None:
        x, y = xy
        self._check(x, y)
        self.data[y, x] = value

    def __repr__(self):
        return f"Grid2D(nx={self.nx}, ny={self.ny})"
