from invlens.simulation.grid import Grid2D

FIELD_NAMES = ("Hx", "Hy", "Ez")


class FieldState:
    """Live Hx, Hy and Ez grids, all zero at creation and updated in place.

    Hy sits half a cell forward of Ez along x and Hx half a cell forward
    along y; the offsets are carried by the update stencils.
    """
    def __init__(self, grid_size: int, backend):
        self.backend = backend
        self.grid_size = grid_size
        shape = (grid_size, grid_size)
        self.Hx = Grid2D(backend.zeros(shape))
        self.Hy = Grid2D(backend.zeros(shape))
        self.Ez = Grid2D(backend.zeros(shape))

    def arrays(self):
        """Raw backend arrays (Hx, Hy, Ez)."""
        return self.Hx.data, self.Hy.data, self.Ez.data

    def to_numpy(self, name: str):
        return self.backend.to_numpy(getattr(self, name).data)

    def is_finite(self) -> bool:
        return all(self.backend.is_finite(getattr(self, name).data) for name in FIELD_NAMES)

    def max_abs(self):
        """Largest magnitude of each component."""
        return {name: float(abs(self.to_numpy(name)).max()) for name in FIELD_NAMES}
