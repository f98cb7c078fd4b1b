"""Same setup with full 2D indexing: the pulse starts mid-height and Ez uses EzH(x, y)."""
import matplotlib.pyplot as plt

from invlens import SimulationParameters, MemorySink, FDTD
from invlens.viz import plot_frame

params = SimulationParameters(steps=150, legacy_indexing=False, source_position=(50, 100))

sink = MemorySink()
sim = FDTD(params, sink=sink, backend="numpy")
sim.run()

xs = list(range(0, params.grid_size, params.sample_stride))
last = sink.times[-1]
plot_frame(sink.frame_array(last), xs, xs, t=last, params=params)
plt.show()
