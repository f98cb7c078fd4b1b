import numpy as np

from invlens.config import SimulationParameters
from invlens.simulation.grid import Grid2D

COEFFICIENT_NAMES = ("EzH", "EzE", "HyH", "HyE", "HxH", "HxE")


class MaterialGrid:
    """Per-cell update coefficients of the lens geometry.

    Inside the lens band (lens_start < x < lens_stop, every y) the electric
    weight uses the scaled permittivity eps / lens_scale and all weights carry
    the loss term. Elsewhere the bare eps is used with no loss. The grid is a
    pure function of the parameters and is never modified after construction.
    """
    def __init__(self, params: SimulationParameters, backend=None):
        self.params = params
        self.backend = backend
        n = params.grid_size
        self.shape = (n, n)
        # Column coordinate of every cell, arrays are [y, x]
        x = np.broadcast_to(np.arange(n)[np.newaxis, :], self.shape)
        self.lens_mask = (x > params.lens_start) & (x < params.lens_stop)
        self.permittivity = np.where(self.lens_mask, params.eps / params.lens_scale, params.eps)
        self._numpy = self.__rasterize__()
        self.coefficients = {
            name: Grid2D(backend.from_numpy(values) if backend is not None else values)
            for name, values in self._numpy.items()
        }

    def __rasterize__(self):
        """Fill the six coefficient arrays from the lens mask."""
        eps, loss = self.params.eps, self.params.loss
        decay = (1.0 - loss) / (1.0 + loss)
        coupling = (1.0 / eps) / (1.0 + loss)
        lens = self.lens_mask

        def fill(inside, outside):
            return np.where(lens, inside, outside).astype(np.float64)

        return {
            "EzH": fill(eps / self.params.lens_scale / (1.0 - loss), eps),
            "EzE": fill(decay, 1.0),
            "HyH": fill(decay, 1.0),
            "HyE": fill(coupling, 1.0 / eps),
            "HxH": fill(decay, 1.0),
            "HxE": fill(coupling, 1.0 / eps),
        }

    def __getattr__(self, name):
        coefficients = self.__dict__.get("coefficients")
        if coefficients is not None and name in coefficients:
            return coefficients[name]
        raise AttributeError(f"{type(self).__name__!r} has no attribute {name!r}")

    def to_numpy(self, name: str) -> np.ndarray:
        """Coefficient array as numpy, laid out [y, x]."""
        return self._numpy[name]

    def ez_h_for_update(self, legacy_indexing: bool = True):
        """EzH weights as consumed by the Ez update.

        The legacy update reads EzH by column index into linear storage, which
        selects the first row (y = 0) for every y. Otherwise the full grid is
        returned.
        """
        ez_h = self.coefficients["EzH"].data
        if legacy_indexing: return ez_h[0, :]
        return ez_h

    def equals(self, other: "MaterialGrid") -> bool:
        """True if both grids hold identical coefficients."""
        return all(np.array_equal(self._numpy[name], other._numpy[name]) for name in COEFFICIENT_NAMES)

    def __repr__(self):
        return f"MaterialGrid(grid_size={self.params.grid_size}, lens=({self.params.lens_start}, {self.params.lens_stop}))"
