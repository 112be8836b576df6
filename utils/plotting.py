from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

__all__ = [
    "save",
    "wide_grid",
    "nice_axes",
    "annotate_bars",
]


def save(fig: Figure, path) -> Path:
    """Save the figure to *path* (parent directories created automatically)."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(target), bbox_inches="tight")
    plt.close(fig)
    return target


def wide_grid(rows: int, cols: int):
    """Create a grid of subplots suitable for dashboard-style layouts."""
    fig, axes = plt.subplots(rows, cols, figsize=(cols * 5.5, rows * 3.5), squeeze=False)
    return fig, axes


def nice_axes(
    ax: Axes,
    title: str,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
) -> Axes:
    """Apply consistent styling to a matplotlib Axes object."""
    ax.set_title(title)
    if xlabel:
        ax.set_xlabel(xlabel)
    if ylabel:
        ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    return ax


def annotate_bars(ax: Axes, bars, labels: Sequence[str]) -> None:
    for bar, label in zip(bars, labels):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), label, ha="center", va="bottom")
