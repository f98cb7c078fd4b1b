"""
Backend implementations for FDTD simulations.
"""
import logging

logger = logging.getLogger(__name__)

def get_backend(name="numpy", **kwargs):
    """Select the backend."""
    name = name.lower()

    if name == "numpy":
        from invlens.simulation.backends.numpy_backend import NumPyBackend
        return NumPyBackend(**kwargs)

    if name == "torch":
        from invlens.simulation.backends.torch_backend import TorchBackend
        logger.debug("Creating torch backend with options %s", kwargs)
        return TorchBackend(**kwargs)

    raise ValueError(f"Unknown backend: {name}")

# Export available backends
__all__ = ['get_backend']
