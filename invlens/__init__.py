"""
invlens - 2D FDTD simulation of a pulse bent by an invisibility lens.
"""

from invlens.config import SimulationParameters, ConfigurationError
from invlens.io import SnapshotWriter, SnapshotWriteError, MemorySink, read_snapshots
from invlens.simulation import Grid2D, MaterialGrid, FieldState, FDTD, SimulationState, get_backend

# Version information
__version__ = "0.1.0"


def run_simulation(params=None, output="FDTD.dat", backend="numpy", verbose=True):
    """Run a full simulation and write the sampled Hx frames to `output`."""
    with SnapshotWriter(output) as writer:
        sim = FDTD(params, sink=writer, backend=backend, verbose=verbose)
        return sim.run()
