import logging

import numpy as np
import torch
from invlens.simulation.backends.base import Backend

logger = logging.getLogger(__name__)

class TorchBackend(Backend):
    """PyTorch backend for FDTD computations."""

    def __init__(self, device="auto", **kwargs):
        """Initialize PyTorch backend.

        Args:
            device: Device to use for computation:
                   - "auto": automatically select the best available device
                   - "cuda": use NVIDIA GPU if available
                   - "cpu": use CPU
                   - or a specific device like "cuda:0"
            **kwargs: Additional arguments; "dtype" overrides torch.float64
        """
        self.device_name = device

        # Auto-detect best available device
        if device.lower() == "auto":
            if torch.cuda.is_available():
                self.device = torch.device("cuda")
                logger.info("PyTorch backend using CUDA GPU: %s", torch.cuda.get_device_name(0))
            else:
                self.device = torch.device("cpu")
                logger.info("PyTorch backend using CPU")
        # Try to use CUDA
        elif "cuda" in device:
            if not torch.cuda.is_available():
                logger.warning("CUDA is not available. Falling back to CPU.")
                self.device = torch.device("cpu")
            else:
                self.device = torch.device(device)
                logger.info("PyTorch backend using CUDA GPU: %s", torch.cuda.get_device_name(0))
        # Use CPU
        else:
            self.device = torch.device(device)
            logger.info("PyTorch backend using %s", device)

        # Field values must stay double precision to match the numpy results
        self.dtype = kwargs.get("dtype", torch.float64)

    def zeros(self, shape):
        """Create an array of zeros with the given shape."""
        return torch.zeros(shape, dtype=self.dtype, device=self.device)

    def copy(self, array):
        """Create a copy of the array."""
        return array.clone()

    def to_numpy(self, array):
        """Convert the array to a numpy array."""
        if array.device.type != "cpu":
            return array.cpu().detach().numpy()
        return array.detach().numpy()

    def from_numpy(self, array):
        """Convert a numpy array to the backend's array type."""
        return torch.tensor(np.asarray(array), dtype=self.dtype, device=self.device)

    def is_finite(self, array) -> bool:
        return bool(torch.isfinite(array).all().item())

    def update_h_fields(self, Hx, Hy, Ez, HxH, HxE, HyH, HyE):
        """Update magnetic field components; the last column of Hy and last row of Hx are kept."""
        # Both right-hand sides are evaluated before assignment, so slices never alias
        Hy[:, :-1] = HyH[:, :-1] * Hy[:, :-1] + HyE[:, :-1] * (Ez[:, 1:] - Ez[:, :-1])
        Hx[:-1, :] = HxH[:-1, :] * Hx[:-1, :] + HxE[:-1, :] * (Ez[1:, :] - Ez[:-1, :])
        return Hx, Hy

    def update_e_field(self, Ez, Hx, Hy, EzE, EzH):
        """Update the interior of Ez."""
        ez_h = EzH[1:-1, 1:-1] if EzH.dim() == 2 else EzH[1:-1]
        curl_h = (Hy[1:-1, 1:-1] - Hy[1:-1, :-2]
                  - Hx[1:-1, 1:-1] - Hx[:-2, 1:-1])
        Ez[1:-1, 1:-1] = EzE[1:-1, 1:-1] * Ez[1:-1, 1:-1] + ez_h * curl_h
        return Ez
