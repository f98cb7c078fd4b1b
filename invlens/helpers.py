import datetime
from typing import Dict, Any, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeRemainingColumn
from rich.table import Table
import numpy as np

# Initialize rich console
console = Console()

def check_update_stability(materials, safety_factor: float = 1.0) -> Tuple[bool, float, float]:
    """
    Check the Courant-like condition of the normalized update coefficients.

    The coefficients fold dt/dx and the material into single weights, so the
    Courant number of a cell is sqrt(EzH * HE) with HE the magnetic weight.
    For a square 2D grid the scheme is stable up to 1/sqrt(2).

    Args:
        materials: MaterialGrid holding the update coefficients
        safety_factor: Multiplier applied to the theoretical limit

    Returns:
        tuple: (is_stable, courant, limit)
    """
    ez_h = np.abs(materials.to_numpy("EzH"))
    h_e = np.maximum(np.abs(materials.to_numpy("HyE")), np.abs(materials.to_numpy("HxE")))
    courant = float(np.sqrt(np.max(ez_h * h_e)))
    limit = safety_factor / np.sqrt(2.0)
    return courant <= limit, courant, float(limit)

def display_header(title: str, subtitle: Optional[str] = None) -> None:
    """Display a formatted header with optional subtitle."""
    console.print(Panel(f"[bold blue]{title}[/]", subtitle=subtitle, expand=False))

def display_status(status: str, status_type: str = "info") -> None:
    """
    Display a status message with appropriate styling.

    Args:
        status: The status message to display
        status_type: One of "info", "success", "warning", "error"
    """
    style_map = {
        "info": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }
    style = style_map.get(status_type, "white")
    console.print(f"[{style}]● {status}[/]")

def create_rich_progress(disable: bool = False) -> Progress:
    """Create and return a rich progress bar for tracking the time loop."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=None),
        "[progress.percentage]{task.percentage:>3.0f}%",
        TimeRemainingColumn(),
        console=console,
        disable=disable,
    )

def display_parameters(params: Dict[str, Any], title: str = "Parameters") -> None:
    """
    Display a dictionary of parameters in a clean, formatted table.

    Args:
        params: Dictionary of parameter names and values
        title: Title for the parameters table
    """
    table = Table(title=title)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")

    for key, value in params.items():
        table.add_row(str(key), str(value))

    console.print(table)

def display_results(results: Dict[str, Any], title: str = "Results") -> None:
    """
    Display simulation results in a formatted table.

    Args:
        results: Dictionary of result names and values
        title: Title for the results table
    """
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    for key, value in results.items():
        if isinstance(value, (int, float)):
            value_str = f"{value:.6g}"
        else:
            value_str = str(value)
        table.add_row(str(key), value_str)

    console.print(table)

def display_time_elapsed(start_time: datetime.datetime) -> None:
    """
    Display the time elapsed since the start time.

    Args:
        start_time: The start datetime
    """
    elapsed = datetime.datetime.now() - start_time
    hours, remainder = divmod(elapsed.total_seconds(), 3600)
    minutes, seconds = divmod(remainder, 60)

    time_str = f"[bold]Time elapsed:[/] "
    if hours > 0:
        time_str += f"{int(hours)}h "
    if minutes > 0 or hours > 0:
        time_str += f"{int(minutes)}m "
    time_str += f"{seconds:.1f}s"

    console.print(time_str)
