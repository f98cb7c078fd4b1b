import numpy as np
from invlens.simulation.backends.base import Backend

class NumPyBackend(Backend):
    """NumPy backend for FDTD computations."""

    def __init__(self, dtype=np.float64, **kwargs):
        """Initialize NumPy backend."""
        self.dtype = dtype

    def zeros(self, shape):
        """Create an array of zeros with the given shape."""
        return np.zeros(shape, dtype=self.dtype)

    def copy(self, array):
        """Create a copy of the array."""
        return array.copy()

    def to_numpy(self, array):
        """Convert the array to a numpy array."""
        return array  # Already numpy array

    def from_numpy(self, array):
        """Convert a numpy array to the backend's array type."""
        return np.asarray(array, dtype=self.dtype)

    def is_finite(self, array) -> bool:
        return bool(np.all(np.isfinite(array)))

    def update_h_fields(self, Hx, Hy, Ez, HxH, HxE, HyH, HyE):
        """Update magnetic field components; the last column of Hy and last row of Hx are kept."""
        # Hy(x, y) from the forward x-difference of Ez
        Hy[:, :-1] = HyH[:, :-1] * Hy[:, :-1] + HyE[:, :-1] * (Ez[:, 1:] - Ez[:, :-1])
        # Hx(x, y) from the forward y-difference of Ez
        Hx[:-1, :] = HxH[:-1, :] * Hx[:-1, :] + HxE[:-1, :] * (Ez[1:, :] - Ez[:-1, :])
        return Hx, Hy

    def update_e_field(self, Ez, Hx, Hy, EzE, EzH):
        """Update the interior of Ez."""
        ez_h = EzH[1:-1, 1:-1] if EzH.ndim == 2 else EzH[1:-1]
        curl_h = (Hy[1:-1, 1:-1] - Hy[1:-1, :-2]
                  - Hx[1:-1, 1:-1] - Hx[:-2, 1:-1])
        Ez[1:-1, 1:-1] = EzE[1:-1, 1:-1] * Ez[1:-1, 1:-1] + ez_h * curl_h
        return Ez
