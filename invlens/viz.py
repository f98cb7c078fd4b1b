import numpy as np
from invlens.helpers import display_status

# Plotting backends are imported inside functions to avoid hard deps at import time

def _draw_lens(ax, params, color="white"):
    """Outline the lens column band with dashed lines."""
    if params is None: return
    for x in (params.lens_start, params.lens_stop):
        ax.axvline(x, color=color, linestyle="--", linewidth=1, alpha=0.8)


def plot_frame(frame, xs, ys, t=None, ax=None, params=None, cmap="RdBu", symmetric=True):
    """Heat map of one sampled Hx frame.

    Args:
        frame: Array indexed [x_sample, y_sample] (as returned by read_snapshots)
        xs, ys: Sampled grid coordinates
        t: Time step shown in the title
        ax: Matplotlib axis to draw on; a new figure is created if None
        params: SimulationParameters used to outline the lens band
        symmetric: Center the color scale on zero
    """
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))
    finite = frame[np.isfinite(frame)]
    vmax = float(np.max(np.abs(finite))) if finite.size else 1.0
    if vmax == 0: vmax = 1.0
    vmin = -vmax if symmetric else float(np.min(finite)) if finite.size else 0.0
    step_x = xs[1] - xs[0] if len(xs) > 1 else 1
    step_y = ys[1] - ys[0] if len(ys) > 1 else 1
    extent = (xs[0] - step_x / 2, xs[-1] + step_x / 2, ys[0] - step_y / 2, ys[-1] + step_y / 2)
    im = ax.imshow(frame.T, origin="lower", extent=extent, cmap=cmap, vmin=vmin, vmax=vmax, aspect="equal")
    _draw_lens(ax, params, color="black")
    ax.set_xlabel("x (cells)")
    ax.set_ylabel("y (cells)")
    ax.set_title("Hx" if t is None else f"Hx at t = {t}")
    ax.figure.colorbar(im, ax=ax, label="Hx")
    return ax


def plot_frames(frames, xs, ys, params=None, filename=None, show=True):
    """Plot every sampled frame side by side, optionally saving the figure."""
    import matplotlib.pyplot as plt

    times = sorted(frames)
    if not times:
        raise ValueError("No frames to plot")
    fig, axes = plt.subplots(1, len(times), figsize=(5.5 * len(times), 5), squeeze=False)
    for ax, t in zip(axes[0], times):
        plot_frame(frames[t], xs, ys, t=t, ax=ax, params=params)
    fig.tight_layout()
    if filename is not None:
        fig.savefig(filename, dpi=150)
        display_status(f"Saved frame plot to '{filename}'", "success")
    if show: plt.show()
    return fig


def show_material(materials, ax=None, show=True):
    """Show the permittivity map of a MaterialGrid with the lens band outlined."""
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(materials.permittivity, origin="lower", cmap="viridis", aspect="equal")
    _draw_lens(ax, materials.params)
    ax.set_xlabel("x (cells)")
    ax.set_ylabel("y (cells)")
    ax.set_title("Scaled permittivity")
    ax.figure.colorbar(im, ax=ax, label="eps")
    if show: plt.show()
    return ax
