import math


def gaussian_pulse(step: int, delay: float = 40.0, width: float = 100.0) -> float:
    """Amplitude added by the source at zero-based step `step`.

    The pulse is evaluated one step ahead (t + 1) since it seeds the field
    read by the next update.
    """
    return math.exp(-((step + 1 - delay) ** 2) / width)


def apply_boundary_patch(fdtd) -> None:
    """Copy Ez from its neighbour before the Ez update.

    In legacy mode only linear storage index 0 takes the value at index 1,
    i.e. cell (0, 0) takes (1, 0). Otherwise the whole first column takes the
    second column.
    """
    Ez = fdtd.fields.Ez
    if fdtd.params.legacy_indexing:
        Ez.set_linear(0, Ez.get_linear(1))
    else:
        Ez.data[:, 0] = fdtd.backend.copy(Ez.data[:, 1])


def apply_source(fdtd) -> None:
    """Add the Gaussian pulse for the current step to Ez at the source cell."""
    params = fdtd.params
    amplitude = gaussian_pulse(fdtd.current_step, params.pulse_delay, params.pulse_width)
    Ez = fdtd.fields.Ez
    if params.legacy_indexing:
        index = params.source_index
    else:
        index = Ez.linear_index(*params.source_xy)
    Ez.set_linear(index, Ez.get_linear(index) + amplitude)


def should_sample(fdtd) -> bool:
    return fdtd.current_step % fdtd.params.sample_period == 0


def sample_frame(fdtd, sink) -> int:
    """Emit Hx at every sampled cell to the sink, then close the frame.

    Cells are visited x-major, y-minor, both stepping by sample_stride.

    Returns:
        Number of records written
    """
    params = fdtd.params
    hx = fdtd.fields.to_numpy("Hx")
    stride = params.sample_stride
    count = 0
    for x in range(0, params.grid_size, stride):
        for y in range(0, params.grid_size, stride):
            sink.write_record(fdtd.current_step, x, y, float(hx[y, x]))
            count += 1
    sink.end_frame()
    return count
