from abc import ABC, abstractmethod


class Backend(ABC):
    """Array operations and field update kernels of one compute library.

    Arrays are laid out as [y, x]. The update kernels mutate the field arrays
    in place and return them for convenience.
    """

    @abstractmethod
    def zeros(self, shape):
        """Create an array of zeros with the given shape."""

    @abstractmethod
    def copy(self, array):
        """Create a copy of the array."""

    @abstractmethod
    def to_numpy(self, array):
        """Convert the array to a numpy array."""

    @abstractmethod
    def from_numpy(self, array):
        """Convert a numpy array to the backend's array type."""

    @abstractmethod
    def is_finite(self, array) -> bool:
        """True if no element is NaN or infinite."""

    @abstractmethod
    def update_h_fields(self, Hx, Hy, Ez, HxH, HxE, HyH, HyE):
        """Advance Hy, then Hx, from the current Ez."""

    @abstractmethod
    def update_e_field(self, Ez, Hx, Hy, EzE, EzH):
        """Advance the interior of Ez from the freshly updated H fields.

        EzH is either a full (ny, nx) grid or a single (nx,) row that is
        broadcast over every y.
        """
