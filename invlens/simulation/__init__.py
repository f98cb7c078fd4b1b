from invlens.simulation.grid import Grid2D
from invlens.simulation.meshing import MaterialGrid
from invlens.simulation.fields import FieldState
from invlens.simulation.fdtd import FDTD, SimulationState
from invlens.simulation.backends import get_backend

__all__ = ['Grid2D', 'MaterialGrid', 'FieldState', 'FDTD', 'SimulationState', 'get_backend']
