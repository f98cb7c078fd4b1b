from enum import Enum
from typing import Dict, Optional
import datetime
import logging

from invlens.config import SimulationParameters
from invlens.simulation.meshing import MaterialGrid
from invlens.simulation.fields import FieldState
from invlens.simulation.backends import get_backend
from invlens.simulation import helper as sim_helper
from invlens.helpers import (display_header, display_status, create_rich_progress, display_parameters,
                             display_results, display_time_elapsed, check_update_stability)

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    UNINITIALIZED = "uninitialized"
    MATERIAL_READY = "material_ready"
    STEPPING = "stepping"
    DONE = "done"


class FDTD:
    """2D TE FDTD simulation (Ez, Hx, Hy) of a pulse crossing the lens band.

    The driver owns the material coefficients and the field state for the
    whole run. Each step advances Hy, then Hx, patches the boundary, advances
    Ez, injects the source and, every sample_period steps, writes Hx at the
    sampled cells to the sink.

    Args:
        params: Run constants. Defaults reproduce the reference run.
        sink: Object with write_record(t, x, y, value) and end_frame(), or None
            to skip sampling.
        backend: Name of the array backend ("numpy" or "torch").
        backend_options: Extra keyword arguments for the backend.
        verbose: Print parameter tables, status and progress to the console.
    """
    def __init__(self, params: Optional[SimulationParameters] = None, sink=None, backend="numpy",
                 backend_options=None, verbose: bool = True):
        self.params = params if params is not None else SimulationParameters()
        self.sink = sink
        self.verbose = verbose
        backend_options = backend_options or {}
        self.backend = get_backend(name=backend, **backend_options)
        self.state = SimulationState.UNINITIALIZED
        self.materials: Optional[MaterialGrid] = None
        self.fields: Optional[FieldState] = None
        self.current_step = 0
        self.frames_written = 0
        self.records_written = 0
        self.start_time = None
        self._ez_h = None

    @property
    def num_steps(self) -> int:
        return self.params.steps

    def _status(self, message: str, status_type: str = "info"):
        logger.debug(message)
        if self.verbose: display_status(message, status_type)

    def initialize_simulation(self):
        """Build the material coefficients and zeroed fields before stepping."""
        if self.state is not SimulationState.UNINITIALIZED:
            raise RuntimeError(f"Simulation already initialized (state: {self.state.value})")
        self.start_time = datetime.datetime.now()
        params = self.params
        self.materials = MaterialGrid(params, backend=self.backend)
        self.fields = FieldState(params.grid_size, self.backend)
        self._ez_h = self.materials.ez_h_for_update(params.legacy_indexing)
        self.current_step = 0
        self.state = SimulationState.MATERIAL_READY

        if self.verbose:
            display_header("invlens FDTD", subtitle="2D TE invisibility lens")
            display_parameters({
                "Grid": f"{params.grid_size} x {params.grid_size}",
                "Time steps": params.steps,
                "eps": params.eps,
                "Loss": params.loss,
                "Lens columns": f"{params.lens_start} < x < {params.lens_stop} (eps / {params.lens_scale:g})",
                "Sampling": f"every {params.sample_period} steps, stride {params.sample_stride}",
                "Indexing": "legacy (linear storage)" if params.legacy_indexing else "2D",
                "Backend": self.backend.__class__.__name__,
            }, "Simulation Parameters")

        is_stable, courant, limit = check_update_stability(self.materials)
        if not is_stable:
            self._status(f"Simulation may be unstable! Courant number = {courant:.3f} > {limit:.3f}", "warning")
        else:
            self._status(f"Stability check passed (Courant number = {courant:.3f} / {limit:.3f})", "success")

    def simulate_step(self):
        """Advance the fields by one leapfrog step (Hy, Hx, boundary patch, Ez)."""
        Hx, Hy, Ez = self.fields.arrays()
        m = self.materials
        self.backend.update_h_fields(Hx, Hy, Ez, m.HxH.data, m.HxE.data, m.HyH.data, m.HyE.data)
        sim_helper.apply_boundary_patch(self)
        self.backend.update_e_field(Ez, Hx, Hy, m.EzE.data, self._ez_h)

    def step(self) -> bool:
        """Perform one simulation step.

        Returns True if a step ran. Once all steps have run, enters DONE and
        returns False; any further call raises RuntimeError.
        """
        if self.state is SimulationState.UNINITIALIZED:
            raise RuntimeError("initialize_simulation() must be called before step()")
        if self.state is SimulationState.DONE:
            raise RuntimeError("Simulation is already finished")
        if self.current_step >= self.num_steps:
            self.state = SimulationState.DONE
            return False
        self.state = SimulationState.STEPPING
        self.simulate_step()
        sim_helper.apply_source(self)
        if self.sink is not None and sim_helper.should_sample(self):
            self.records_written += sim_helper.sample_frame(self, self.sink)
            self.frames_written += 1
        self.current_step += 1
        return True

    def finalize_simulation(self) -> Dict[str, float]:
        """Enter the terminal state (if stepping stopped early) and report a summary of the run."""
        if self.state is SimulationState.UNINITIALIZED:
            raise RuntimeError("Cannot finalize a simulation that was never initialized")
        self.state = SimulationState.DONE
        summary = {
            "Steps": self.current_step,
            "Frames written": self.frames_written,
            "Records written": self.records_written,
        }
        summary.update({f"max |{name}|": value for name, value in self.fields.max_abs().items()})
        if not self.fields.is_finite():
            logger.warning("Non-finite field values after %d steps", self.current_step)
            self._status("Fields contain NaN or Inf values", "error")
        if self.verbose:
            display_status("Simulation complete!", "success")
            display_results(summary, "Run Summary")
            display_time_elapsed(self.start_time)
        return summary

    def run(self) -> Dict[str, float]:
        """Run the complete simulation.

        Returns:
            Dictionary summarizing the run.
        """
        self.initialize_simulation()
        with create_rich_progress(disable=not self.verbose) as progress:
            task = progress.add_task("Running simulation...", total=self.num_steps)
            while self.step(): progress.update(task, advance=1)
        return self.finalize_simulation()
