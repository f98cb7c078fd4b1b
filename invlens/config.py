import numbers
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from typing import Dict, Any, Optional, Tuple


class ConfigurationError(ValueError):
    """Raised when a set of simulation parameters cannot produce a valid run."""


@dataclass(frozen=True)
class SimulationParameters:
    """Run constants of an invisibility-lens simulation.

    All values are fixed for the duration of a run. The defaults reproduce the
    reference setup: a 200x200 grid stepped 100 times with a background scale
    of 377.0 (the impedance of free space, used here as a permittivity-like
    factor) and no loss.

    Args:
        grid_size: Extent of the square domain along both axes (cells).
        steps: Number of time steps to run.
        eps: Background scale factor.
        loss: Damping term. Must not be +1 or -1.
        sample_stride: Spatial stride between sampled cells.
        sample_period: Number of steps between sampled frames.
        lens_start, lens_stop: Column band of the lens, exclusive on both ends.
        lens_scale: Divisor applied to eps inside the lens.
        source_index: Linear storage index of the pulsed source.
        pulse_delay: Step at which the Gaussian pulse peaks.
        pulse_width: Denominator of the Gaussian exponent.
        legacy_indexing: Reproduce the linear-storage indexing of the
            reference tool (boundary patch, source and Ez coefficient).
        source_position: (x, y) of the source when legacy_indexing is False.
    """
    grid_size: int = 200
    steps: int = 100
    eps: float = 377.0
    loss: float = 0.0
    sample_stride: int = 5
    sample_period: int = 50
    lens_start: int = 100
    lens_stop: int = 150
    lens_scale: float = 9.0
    source_index: int = 50
    pulse_delay: float = 40.0
    pulse_width: float = 100.0
    legacy_indexing: bool = True
    source_position: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if self.source_position is not None:
            object.__setattr__(self, 'source_position', tuple(self.source_position))
        self.validate()

    def validate(self) -> None:
        """Check the parameters, raising ConfigurationError on the first problem."""
        if self.grid_size < 3:
            raise ConfigurationError(f"grid_size must be at least 3, got {self.grid_size}")
        if self.steps < 0:
            raise ConfigurationError(f"steps must be non-negative, got {self.steps}")
        if self.eps == 0:
            raise ConfigurationError("eps must be non-zero")
        if self.lens_scale == 0:
            raise ConfigurationError("lens_scale must be non-zero")
        if abs(self.loss) == 1.0:
            raise ConfigurationError(f"loss must not be +1 or -1 (division by zero), got {self.loss}")
        if not 1 <= self.sample_stride <= self.grid_size:
            raise ConfigurationError(
                f"sample_stride must lie in [1, {self.grid_size}], got {self.sample_stride}")
        if self.sample_period < 1:
            raise ConfigurationError(f"sample_period must be at least 1, got {self.sample_period}")
        if self.pulse_width <= 0:
            raise ConfigurationError(f"pulse_width must be positive, got {self.pulse_width}")
        if not 0 <= self.source_index < self.grid_size * self.grid_size:
            raise ConfigurationError(
                f"source_index {self.source_index} is outside linear storage of size {self.grid_size ** 2}")
        if self.source_position is not None:
            if self.legacy_indexing:
                raise ConfigurationError(
                    "source_position is only used with legacy_indexing=False; use source_index instead")
            if len(self.source_position) != 2:
                raise ConfigurationError("source_position must be an (x, y) pair")
            if not all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in self.source_position):
                raise ConfigurationError(f"source_position must hold integer cells, got {self.source_position}")
            x, y = self.source_position
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                raise ConfigurationError(f"source_position {self.source_position} is outside the grid")

    @property
    def source_xy(self) -> Tuple[int, int]:
        """Source coordinate used by the corrected (non-legacy) indexing mode."""
        if self.source_position is not None: return self.source_position
        return (self.source_index % self.grid_size, self.grid_size // 2)

    @property
    def samples_per_axis(self) -> int:
        return len(range(0, self.grid_size, self.sample_stride))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the parameters to a plain dictionary."""
        config = asdict(self)
        if config['source_position'] is not None:
            config['source_position'] = list(config['source_position'])
        return config

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'SimulationParameters':
        """Create parameters from a dictionary, rejecting unknown keys.

        Args:
            config: Mapping of parameter names to values

        Returns:
            New validated SimulationParameters instance
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigurationError(f"Unknown simulation parameter(s): {', '.join(unknown)}")
        return cls(**config)

    def replace(self, **changes) -> 'SimulationParameters':
        """Return a copy with some parameters changed (validated again)."""
        return dc_replace(self, **changes)
