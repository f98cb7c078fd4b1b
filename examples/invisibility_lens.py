"""Reference run: step the default lens setup, write FDTD.dat and plot the sampled Hx frames."""
from invlens import SimulationParameters, SnapshotWriter, FDTD, read_snapshots
from invlens.viz import plot_frames

params = SimulationParameters(grid_size=200, steps=100, eps=377.0, loss=0.0)

with SnapshotWriter("FDTD.dat") as writer:
    sim = FDTD(params, sink=writer, backend="numpy")
    sim.run()

frames, xs, ys = read_snapshots("FDTD.dat")
plot_frames(frames, xs, ys, params=params, filename="FDTD_frames.png")
