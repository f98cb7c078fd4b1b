"""
Smoke tests for plotting sampled frames.
"""

import matplotlib
matplotlib.use("Agg")

from invlens import SimulationParameters, MemorySink, FDTD, read_snapshots, run_simulation
from invlens.simulation.meshing import MaterialGrid
from invlens import viz

def test_plot_frames_saves_figure(tmp_path):
    params = SimulationParameters(grid_size=30, steps=12, sample_period=5, lens_start=10, lens_stop=20)
    path = tmp_path / "FDTD.dat"
    run_simulation(params, output=path, verbose=False)
    frames, xs, ys = read_snapshots(path)

    fig = viz.plot_frames(frames, xs, ys, params=params, filename=tmp_path / "frames.png", show=False)

    assert (tmp_path / "frames.png").exists()
    assert len(fig.axes) >= len(frames)

def test_plot_frame_from_memory_sink():
    params = SimulationParameters(grid_size=20, steps=3, sample_period=2, lens_start=5, lens_stop=10, source_index=45)
    sink = MemorySink()
    FDTD(params, sink=sink, verbose=False).run()
    axis = list(range(0, 20, 5))

    ax = viz.plot_frame(sink.frame_array(2), axis, axis, t=2, params=params)

    assert ax.get_title() == "Hx at t = 2"

def test_show_material():
    materials = MaterialGrid(SimulationParameters(grid_size=20, lens_start=5, lens_stop=10, source_index=0))
    ax = viz.show_material(materials, show=False)
    assert ax.get_title() == "Scaled permittivity"
